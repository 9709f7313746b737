"""
Tests para surveys/signals.py: invalidación del reporte cacheado.
"""
from unittest.mock import MagicMock, patch

import pytest

from surveys.models import Question, Submission, Survey
from surveys.signals import DisableSignals, are_signals_enabled, invalidate_pattern


@pytest.fixture
def survey(django_user_model):
    user = django_user_model.objects.create_user(username='owner', password='pass')
    return Survey.objects.create(title='Cache', author=user, status=Survey.STATUS_ACTIVE)


@pytest.mark.django_db
class TestQuestionSignals:
    def test_question_save_touches_survey(self, survey):
        before = Survey.objects.get(id=survey.id).updated_at
        Question.objects.create(survey=survey, title='New question')
        assert Survey.objects.get(id=survey.id).updated_at > before

    def test_question_delete_touches_survey(self, survey):
        question = Question.objects.create(survey=survey, title='Temp')
        before = Survey.objects.get(id=survey.id).updated_at
        question.delete()
        assert Survey.objects.get(id=survey.id).updated_at > before

    def test_disabled_signals_do_not_touch_survey(self, survey):
        before = Survey.objects.get(id=survey.id).updated_at
        with DisableSignals():
            assert are_signals_enabled() is False
            Question.objects.create(survey=survey, title='Bulk question')
        assert are_signals_enabled() is True
        assert Survey.objects.get(id=survey.id).updated_at == before

    def test_nested_disable_reenables_on_outer_exit(self):
        with DisableSignals():
            with DisableSignals():
                pass
            assert are_signals_enabled() is False
        assert are_signals_enabled() is True


@pytest.mark.django_db
class TestPatternInvalidation:
    def test_submission_invalidates_analysis_pattern(self, survey):
        with patch('surveys.signals.invalidate_pattern') as mock_invalidate:
            Submission.objects.create(survey=survey)
        mock_invalidate.assert_called_with(f"survey_analysis_{survey.id}_*")

    def test_uses_delete_pattern_when_available(self):
        fake_cache = MagicMock()
        with patch('surveys.signals.cache', fake_cache):
            invalidate_pattern('survey_analysis_1_*')
        fake_cache.delete_pattern.assert_called_once_with('survey_analysis_1_*')

    def test_backends_without_delete_pattern_are_skipped(self):
        fake_cache = MagicMock(spec=['get', 'set', 'delete'])
        with patch('surveys.signals.cache', fake_cache):
            invalidate_pattern('survey_analysis_1_*')
        fake_cache.delete.assert_not_called()
