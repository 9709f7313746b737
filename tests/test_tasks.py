"""
Tests para surveys/tasks.py (precálculo de analítica con Celery en modo eager)
"""
import pytest
from django.core.cache import cache

from core.services.survey_analysis import SurveyAnalysisService
from surveys.models import Answer, Question, Submission, Survey
from surveys.tasks import warm_survey_analytics


@pytest.fixture
def survey(django_user_model):
    user = django_user_model.objects.create_user(username='owner', password='pass')
    survey = Survey.objects.create(title='Warm', author=user, status=Survey.STATUS_ACTIVE)
    question = Question.objects.create(survey=survey, title='Colour', type='dropdown')
    submission = Submission.objects.create(survey=survey, completed=True)
    Answer.objects.create(submission=submission, question=question, value='blue')
    survey.refresh_from_db()
    return survey


@pytest.mark.django_db
class TestWarmSurveyAnalytics:
    def test_populates_cache(self, survey):
        result = warm_survey_analytics.delay(survey.id).get()
        assert result == {
            'status': 'SUCCESS',
            'survey_id': survey.id,
            'questions': 1,
            'total_submissions': 1,
        }
        assert cache.get(SurveyAnalysisService.build_cache_key(survey)) is not None

    def test_missing_survey(self):
        assert warm_survey_analytics(123456)['status'] == 'NOT_FOUND'
