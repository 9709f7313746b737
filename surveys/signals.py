"""
surveys/signals.py
Invalidación del reporte de analítica cacheado cuando cambia un formulario,
una pregunta o un envío.
"""
import threading

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
from django.utils import timezone

from core.utils.logging_utils import StructuredLogger
from .models import Question, Submission, Survey

logger = StructuredLogger('surveys')

ANALYSIS_KEY_PATTERN = "survey_analysis_{survey_id}_*"

_state = threading.local()


def are_signals_enabled():
    return getattr(_state, 'suspended', 0) == 0


class DisableSignals:
    """
    Suspende la invalidación en el hilo actual (cargas masivas, semillas).
    Admite anidamiento; al salir del bloque más externo se reactiva.

        with DisableSignals():
            Submission.objects.bulk_create(...)
    """

    def __enter__(self):
        _state.suspended = getattr(_state, 'suspended', 0) + 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _state.suspended -= 1
        return False


def invalidate_pattern(pattern):
    """
    Borra las claves que coinciden con ``pattern``. Solo django-redis expone
    ``delete_pattern``; con otros backends basta con la clave versionada.
    """
    delete_pattern = getattr(cache, 'delete_pattern', None)
    if delete_pattern is not None:
        delete_pattern(pattern)


def invalidate_survey_analysis(survey_id):
    invalidate_pattern(ANALYSIS_KEY_PATTERN.format(survey_id=survey_id))


@receiver([post_save, post_delete], sender=Survey)
def on_survey_change(sender, instance, **kwargs):
    if are_signals_enabled():
        invalidate_survey_analysis(instance.id)
        logger.info("Survey changed, analysis invalidated", survey_id=instance.id, created=kwargs.get('created', False))


@receiver([post_save, post_delete], sender=Question)
def on_question_change(sender, instance, **kwargs):
    """Editar una pregunta avanza ``Survey.updated_at`` y con ello la clave del reporte."""
    if not are_signals_enabled():
        return
    Survey.objects.filter(id=instance.survey_id).update(updated_at=timezone.now())
    invalidate_survey_analysis(instance.survey_id)
    logger.debug("Question changed, analysis invalidated", survey_id=instance.survey_id, question_id=instance.id)


@receiver([post_save, post_delete], sender=Submission)
def on_submission_change(sender, instance, **kwargs):
    if are_signals_enabled():
        invalidate_survey_analysis(instance.survey_id)
        logger.debug("Submission changed, analysis invalidated", survey_id=instance.survey_id, submission_id=instance.id)
