import logging
from unittest.mock import patch

import pytest

from core.utils import logging_utils
from core.utils.logging_utils import StructuredLogger, format_context


def test_format_context():
    assert format_context('hello', a=1, b='x') == 'hello | a=1 | b=x'
    assert format_context('hello') == 'hello'


def test_log_performance_returns_value_and_warns_when_slow():
    @logging_utils.log_performance(threshold_ms=-1)
    def slow_func():
        return 42

    with patch.object(logging_utils, 'performance_logger') as mock_logger:
        assert slow_func() == 42
    mock_logger.warning.assert_called_once()
    message = mock_logger.warning.call_args[0][0]
    assert message.startswith('Slow operation | operation=')
    assert 'slow_func' in message


def test_log_performance_propagates_exceptions():
    @logging_utils.log_performance(threshold_ms=1000)
    def broken():
        raise ValueError('boom')

    with pytest.raises(ValueError):
        broken()


@pytest.mark.django_db
def test_log_query_count_counts_queries():
    from surveys.models import Survey

    @logging_utils.log_query_count
    def two_queries():
        list(Survey.objects.all())
        return Survey.objects.count()

    with patch.object(logging_utils, 'performance_logger') as mock_logger:
        assert two_queries() == 0
    level, message = mock_logger.log.call_args[0]
    assert level == logging.DEBUG
    assert message.endswith('queries=2')


def test_log_security_event_uses_severity():
    with patch.object(logging_utils, 'security_logger') as mock_logger:
        logging_utils.log_security_event('unauthorized_survey_access', severity='ERROR', user_id=1)
    mock_logger.log.assert_called_once_with(
        logging.ERROR, 'Security event: unauthorized_survey_access | user_id=1'
    )


def test_log_security_event_unknown_severity_falls_back_to_warning():
    with patch.object(logging_utils, 'security_logger') as mock_logger:
        logging_utils.log_security_event('odd', severity='LOUD')
    mock_logger.log.assert_called_once_with(logging.WARNING, 'Security event: odd')


def test_log_data_change_message():
    with patch.object(logging_utils, 'audit_logger') as mock_logger:
        logging_utils.log_data_change('Submission', 'CREATE', 7, user_id=2, survey_id=3)
    mock_logger.info.assert_called_once_with(
        'Data change: CREATE Submission(id=7) | user_id=2 | survey_id=3'
    )


class TestStructuredLogger:
    def test_context_is_appended(self):
        logger = StructuredLogger('test')
        with patch.object(logger.logger, 'log') as mock_log:
            logger.info('Submission stored', survey_id=1)
        mock_log.assert_called_once_with(logging.INFO, 'Submission stored | survey_id=1')

    def test_exception_logs_traceback_at_error_level(self):
        logger = StructuredLogger('test')
        with patch.object(logger.logger, 'log') as mock_log:
            logger.exception('Error processing question', question_id=5)
        mock_log.assert_called_once_with(
            logging.ERROR, 'Error processing question | question_id=5', exc_info=True
        )

    def test_passthrough_arguments_are_not_context(self):
        logger = StructuredLogger('test')
        with patch.object(logger.logger, 'log') as mock_log:
            logger.warning('Filtered', extra={'k': 'v'}, stack_info=True, question_id=2)
        mock_log.assert_called_once_with(
            logging.WARNING, 'Filtered | question_id=2', extra={'k': 'v'}, stack_info=True
        )

    def test_all_levels_run(self):
        logger = StructuredLogger('test')
        logger.debug('debug', foo=1)
        logger.warning('warn', baz=3)
        logger.error('error', qux=4)
        logger.critical('critical', quux=5)
