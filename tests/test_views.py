"""
Tests de integración para las vistas JSON de surveys (intake y resultados).
"""
import json

import pytest
from django.urls import reverse

from surveys.models import Answer, Question, Submission, Survey


@pytest.fixture
def owner(django_user_model):
    return django_user_model.objects.create_user(username='owner', password='pass')


@pytest.fixture
def stranger(django_user_model):
    return django_user_model.objects.create_user(username='stranger', password='pass')


@pytest.fixture
def survey(owner):
    survey = Survey.objects.create(title='Onboarding', author=owner, status=Survey.STATUS_ACTIVE)
    Question.objects.create(survey=survey, title='Role', type='dropdown', order=1)
    Question.objects.create(survey=survey, title='Satisfaction', type='linear_scale', order=2)
    return survey


@pytest.fixture
def role_q(survey):
    return survey.questions.get(title='Role')


@pytest.fixture
def scale_q(survey):
    return survey.questions.get(title='Satisfaction')


def submissions_url(survey):
    return reverse('surveys:submissions', kwargs={'public_id': survey.public_id})


def analytics_url(survey):
    return reverse('surveys:results_analytics', kwargs={'public_id': survey.public_id})


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type='application/json')


@pytest.mark.django_db
class TestSubmissionIntake:
    def test_creates_submission(self, client, survey, role_q, scale_q):
        response = post_json(client, submissions_url(survey), {
            'completed': True,
            'answers': [
                {'question_id': role_q.id, 'value': 'Developer'},
                {'question_id': scale_q.id, 'value': 9},
            ],
        })
        assert response.status_code == 201
        body = response.json()
        assert body['completed'] is True
        assert body['answers'] == 2
        assert Submission.objects.filter(id=body['id'], survey=survey).exists()

    def test_validation_error(self, client, survey):
        response = post_json(client, submissions_url(survey), {'answers': [{'question_id': 0, 'value': 'x'}]})
        assert response.status_code == 400
        assert 'does not belong' in response.json()['error']

    def test_invalid_json(self, client, survey):
        response = client.post(submissions_url(survey), data='{not json', content_type='application/json')
        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid JSON'

    def test_closed_survey(self, client, survey):
        survey.status = Survey.STATUS_CLOSED
        survey.save()
        response = post_json(client, submissions_url(survey), {'answers': []})
        assert response.status_code == 400

    def test_unknown_survey(self, client):
        response = post_json(client, '/surveys/doesnotexist/submissions/', {'answers': []})
        assert response.status_code == 404

    def test_method_not_allowed(self, client, survey):
        response = client.put(submissions_url(survey))
        assert response.status_code == 405

    def test_rate_limited(self, client, survey):
        url = submissions_url(survey)
        for _ in range(60):
            assert post_json(client, url, {'answers': []}).status_code == 201
        assert post_json(client, url, {'answers': []}).status_code == 403


@pytest.mark.django_db
class TestSubmissionList:
    def test_owner_sees_submissions_newest_first(self, client, owner, survey, role_q):
        older = Submission.objects.create(survey=survey)
        newer = Submission.objects.create(survey=survey)
        Answer.objects.create(submission=newer, question=role_q, value='QA')
        client.force_login(owner)
        response = client.get(submissions_url(survey))
        assert response.status_code == 200
        body = response.json()
        assert body['count'] == 2
        assert [s['id'] for s in body['submissions']] == [newer.id, older.id]
        assert body['submissions'][0]['answers'] == [{'question_id': role_q.id, 'value': 'QA'}]

    def test_requires_login(self, client, survey):
        assert client.get(submissions_url(survey)).status_code == 401

    def test_other_users_are_forbidden(self, client, stranger, survey):
        client.force_login(stranger)
        assert client.get(submissions_url(survey)).status_code == 403


@pytest.mark.django_db
class TestAnalyticsView:
    @pytest.fixture
    def answered(self, survey, role_q, scale_q):
        for role, score in [('Developer', '8'), ('Designer', '6'), ('Developer', '10')]:
            submission = Submission.objects.create(survey=survey, completed=True)
            Answer.objects.create(submission=submission, question=role_q, value=role)
            Answer.objects.create(submission=submission, question=scale_q, value=score)
        return survey

    def test_owner_gets_analytics(self, client, owner, answered):
        client.force_login(owner)
        response = client.get(analytics_url(answered))
        assert response.status_code == 200
        body = response.json()
        assert body['summary']['total_submissions'] == 3
        role, scale = body['questions']
        assert role['analysis_kind'] == 'categorical'
        assert role['analysis']['frequencies'] == {'Developer': 2, 'Designer': 1}
        assert scale['analysis']['average'] == pytest.approx(8)

    def test_cross_filter(self, client, owner, answered, role_q):
        client.force_login(owner)
        response = client.get(analytics_url(answered), {'filter': f"{role_q.id}:Developer"})
        assert response.status_code == 200
        scale = response.json()['questions'][1]
        assert scale['response_count'] == 2
        assert scale['analysis']['average'] == pytest.approx(9)

    @pytest.mark.parametrize('raw_filter', ['garbage', '999999:x'])
    def test_bad_filter(self, client, owner, answered, raw_filter):
        client.force_login(owner)
        response = client.get(analytics_url(answered), {'filter': raw_filter})
        assert response.status_code == 400
        assert 'error' in response.json()

    def test_requires_login(self, client, survey):
        assert client.get(analytics_url(survey)).status_code == 401

    def test_other_users_are_forbidden(self, client, stranger, survey):
        client.force_login(stranger)
        assert client.get(analytics_url(survey)).status_code == 403

    def test_unknown_survey(self, client, owner):
        client.force_login(owner)
        assert client.get('/surveys/missing1/results/analytics/').status_code == 404
