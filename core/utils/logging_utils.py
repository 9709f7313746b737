"""
core/utils/logging_utils.py
Logging estructurado (mensaje | clave=valor) para el motor de analítica:
tiempos, consultas SQL, eventos de seguridad y auditoría de datos.
"""
import time
import logging
import functools
from typing import Any, Callable

from django.conf import settings
from django.db import connection

performance_logger = logging.getLogger('core.performance')
security_logger = logging.getLogger('core.security')
audit_logger = logging.getLogger('core.audit')

QUERY_COUNT_WARNING = 10


def format_context(message: str, **context) -> str:
    """``format_context('Saved', id=3)`` -> ``'Saved | id=3'``"""
    return ' | '.join([message, *(f"{key}={value}" for key, value in context.items())])


def _operation_name(func: Callable) -> str:
    return f"{func.__module__}.{func.__qualname__}"


def log_performance(threshold_ms: float = 1000.0):
    """
    Decorador que mide la llamada y avisa cuando supera ``threshold_ms``.
    Las excepciones se propagan sin cambios.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - started) * 1000
                if elapsed_ms > threshold_ms:
                    performance_logger.warning(format_context(
                        "Slow operation",
                        operation=_operation_name(func),
                        elapsed_ms=f"{elapsed_ms:.2f}",
                        threshold_ms=threshold_ms,
                    ))
                elif settings.DEBUG:
                    performance_logger.debug(format_context(
                        "Operation timed",
                        operation=_operation_name(func),
                        elapsed_ms=f"{elapsed_ms:.2f}",
                    ))
        return wrapper
    return decorator


def log_query_count(func: Callable) -> Callable:
    """Cuenta las consultas que la llamada ejecuta sobre la conexión por defecto."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        executed = []

        def count_query(execute, sql, params, many, context):
            executed.append(sql)
            return execute(sql, params, many, context)

        with connection.execute_wrapper(count_query):
            try:
                return func(*args, **kwargs)
            finally:
                level = logging.WARNING if len(executed) > QUERY_COUNT_WARNING else logging.DEBUG
                performance_logger.log(level, format_context(
                    "Query count",
                    operation=_operation_name(func),
                    queries=len(executed),
                ))
    return wrapper


def log_security_event(event_type: str, severity: str = 'WARNING', **details):
    level = logging.getLevelName(severity.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    security_logger.log(level, format_context(f"Security event: {event_type}", **details))


def log_data_change(model_name: str, operation: str, instance_id: Any, user_id: Any = None, **changes):
    if user_id is not None:
        changes = {'user_id': user_id, **changes}
    audit_logger.info(format_context(f"Data change: {operation} {model_name}(id={instance_id})", **changes))


class StructuredLogger:
    """
    Envoltorio de ``logging.Logger`` que añade el contexto al mensaje.

    ``logger.info("Submission stored", survey_id=3)`` emite
    ``"Submission stored | survey_id=3"``. Los argumentos estándar
    (exc_info, stack_info, extra) se pasan tal cual al logger.
    """

    PASSTHROUGH = ('exc_info', 'stack_info', 'extra')

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _format_message(self, message: str, **context) -> str:
        return format_context(str(message), **context)

    def log(self, level: int, message: str, *args, **context):
        options = {key: context.pop(key) for key in self.PASSTHROUGH if key in context}
        self.logger.log(level, self._format_message(message, **context), *args, **options)

    def debug(self, message: str, *args, **context):
        self.log(logging.DEBUG, message, *args, **context)

    def info(self, message: str, *args, **context):
        self.log(logging.INFO, message, *args, **context)

    def warning(self, message: str, *args, **context):
        self.log(logging.WARNING, message, *args, **context)

    def error(self, message: str, *args, **context):
        self.log(logging.ERROR, message, *args, **context)

    def exception(self, message: str, *args, **context):
        context.setdefault('exc_info', True)
        self.log(logging.ERROR, message, *args, **context)

    def critical(self, message: str, *args, **context):
        self.log(logging.CRITICAL, message, *args, **context)
