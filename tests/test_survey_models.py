"""
Tests para surveys/models.py
"""
import pytest
from django.db import IntegrityError, transaction

from surveys.models import Answer, Question, Submission, Survey


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='owner', password='pass')


@pytest.fixture
def survey(user):
    return Survey.objects.create(title='Feedback', author=user, status=Survey.STATUS_ACTIVE)


@pytest.mark.django_db
class TestSurveyModel:
    def test_public_id_is_generated(self, survey):
        assert survey.public_id
        assert len(survey.public_id) <= 12

    def test_public_id_is_stable(self, survey):
        public_id = survey.public_id
        survey.title = 'Renamed'
        survey.save()
        survey.refresh_from_db()
        assert survey.public_id == public_id

    def test_default_status_is_draft(self, user):
        draft = Survey.objects.create(title='Draft', author=user)
        assert draft.status == Survey.STATUS_DRAFT
        assert draft.accepts_submissions is False

    def test_accepts_submissions_only_when_active(self, survey):
        assert survey.accepts_submissions is True
        survey.status = Survey.STATUS_PAUSED
        assert survey.accepts_submissions is False

    def test_str(self, survey):
        assert str(survey) == 'Feedback'


@pytest.mark.django_db
class TestQuestionModel:
    def test_ordering_by_order_then_id(self, survey):
        second = Question.objects.create(survey=survey, title='Second', order=2)
        first = Question.objects.create(survey=survey, title='First', order=1)
        also_second = Question.objects.create(survey=survey, title='Also second', order=2)
        assert list(survey.questions.all()) == [first, second, also_second]

    def test_defaults(self, survey):
        question = Question.objects.create(survey=survey, title='Name')
        assert question.type == 'short_text'
        assert question.properties == {}
        assert question.required is False
        assert 'Short text' in str(question)


@pytest.mark.django_db
class TestAnswerModel:
    def test_one_answer_per_question(self, survey):
        question = Question.objects.create(survey=survey, title='Colour', type='dropdown')
        submission = Submission.objects.create(survey=survey)
        Answer.objects.create(submission=submission, question=question, value='red')
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Answer.objects.create(submission=submission, question=question, value='blue')

    def test_submissions_newest_first(self, survey):
        older = Submission.objects.create(survey=survey)
        newer = Submission.objects.create(survey=survey)
        assert list(survey.submissions.all()) == [newer, older]
