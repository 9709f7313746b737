"""
surveys/views/results_views.py
Endpoints JSON de resultados: analítica por pregunta y listado de envíos.
"""
from django.core.exceptions import ValidationError, PermissionDenied
from django.core.serializers.json import DjangoJSONEncoder
from django.http import JsonResponse, Http404
from asgiref.sync import sync_to_async

from surveys.models import Survey, Submission
from core.services.survey_analysis import SurveyAnalysisService
from core.utils.helpers import PermissionHelper, SurveyLookupHelper
from core.utils.logging_utils import StructuredLogger
from core.validators import AnalyticsFilterValidator

logger = StructuredLogger('surveys')

SUBMISSIONS_PAGE_SIZE = 100


def _resolve_request_user(request):
    user = request.user
    # Force evaluation of Django's SimpleLazyObject in a sync/thread context
    _ = getattr(user, 'is_authenticated', False)
    _ = getattr(user, 'id', None)
    return user


def _load_owned_survey(request, public_id):
    """Encuesta de la URL verificando que pertenece al usuario autenticado."""
    user = _resolve_request_user(request)
    survey = SurveyLookupHelper.get_by_public_id(public_id, Survey.objects.select_related('author'))
    PermissionHelper.verify_survey_access(survey, user)
    return survey


def _error(message, status):
    return JsonResponse({'error': message}, status=status)


async def survey_analytics_view(request, public_id):
    """
    Analítica por pregunta del formulario.
    Acepta ``?filter=<question_id>:<value>`` (repetible) para filtros cruzados.
    """
    if request.method != 'GET':
        return _error('GET required', 405)

    is_authenticated = await sync_to_async(lambda: request.user.is_authenticated)()
    if not is_authenticated:
        return _error('Authentication required', 401)

    try:
        survey = await sync_to_async(_load_owned_survey, thread_sensitive=True)(request, public_id)
        question_ids = await sync_to_async(
            lambda: list(survey.questions.values_list('id', flat=True)), thread_sensitive=True
        )()
        filters = AnalyticsFilterValidator.parse_filter_params(request.GET.getlist('filter'), question_ids)
        data = await SurveyAnalysisService.get_analysis_data_async(survey, filters)
    except Http404:
        return _error('Survey not found', 404)
    except PermissionDenied as e:
        return _error(str(e), 403)
    except ValidationError as e:
        return _error(' '.join(e.messages), 400)

    logger.info("Analytics served", survey_id=survey.id, filters=len(filters))
    return JsonResponse(data, encoder=DjangoJSONEncoder)


def _serialize_submission(submission):
    return {
        'id': submission.id,
        'completed': submission.completed,
        'metadata': submission.metadata,
        'created_at': submission.created_at,
        'answers': [
            {'question_id': a.question_id, 'value': a.value}
            for a in sorted(submission.answers.all(), key=lambda a: a.id)
        ],
    }


def _list_submissions(survey):
    queryset = (
        Submission.objects.filter(survey=survey)
        .prefetch_related('answers')
        .order_by('-created_at', '-id')[:SUBMISSIONS_PAGE_SIZE]
    )
    return [_serialize_submission(s) for s in queryset]


async def survey_submissions_list_view(request, public_id):
    """Envíos de la encuesta, del más reciente al más antiguo."""
    is_authenticated = await sync_to_async(lambda: request.user.is_authenticated)()
    if not is_authenticated:
        return _error('Authentication required', 401)

    try:
        survey = await sync_to_async(_load_owned_survey, thread_sensitive=True)(request, public_id)
    except Http404:
        return _error('Survey not found', 404)
    except PermissionDenied as e:
        return _error(str(e), 403)

    submissions = await sync_to_async(_list_submissions, thread_sensitive=True)(survey)
    return JsonResponse({'count': len(submissions), 'submissions': submissions}, encoder=DjangoJSONEncoder)
