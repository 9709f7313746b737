"""
Tests para los comandos de gestión create_test_survey e inspect_analysis.
"""
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from surveys.models import Answer, Question, Submission, Survey


@pytest.mark.django_db
class TestCreateTestSurvey:
    def test_seeds_demo_survey(self):
        out = StringIO()
        call_command('create_test_survey', '--submissions', '5', '--seed', '7', stdout=out)
        survey = Survey.objects.get()
        assert survey.status == Survey.STATUS_ACTIVE
        assert Question.objects.filter(survey=survey).count() == 10
        assert Submission.objects.filter(survey=survey).count() == 5
        assert Answer.objects.filter(submission__survey=survey).exists()
        assert 'Created survey ID' in out.getvalue()


@pytest.mark.django_db
class TestInspectAnalysis:
    @pytest.fixture
    def survey(self):
        call_command('create_test_survey', '--submissions', '8', '--seed', '3', stdout=StringIO())
        return Survey.objects.get()

    def test_prints_each_question(self, survey):
        out = StringIO()
        call_command('inspect_analysis', str(survey.id), stdout=out)
        output = out.getvalue()
        assert f"Total submissions for survey {survey.id}: 8" in output
        assert output.count('response_count:') == 10
        assert 'hidden in results view' in output

    def test_with_filter(self, survey):
        question = survey.questions.get(type='dropdown')
        out = StringIO()
        call_command('inspect_analysis', str(survey.id), '--filter', f"{question.id}:Mexico", stdout=out)
        assert 'response_count:' in out.getvalue()

    def test_bad_filter(self, survey):
        with pytest.raises(CommandError):
            call_command('inspect_analysis', str(survey.id), '--filter', 'oops', stdout=StringIO())

    def test_unknown_survey(self):
        out = StringIO()
        call_command('inspect_analysis', '999999', stdout=out)
        assert 'not found' in out.getvalue()
