# surveys/views/submission_views.py
import json

from django.core.exceptions import ValidationError
from django.http import JsonResponse, Http404
from django.views.decorators.csrf import csrf_exempt
from django_ratelimit.decorators import ratelimit
from asgiref.sync import async_to_sync

from surveys.models import Survey
from surveys.views.results_views import survey_submissions_list_view
from core.services.submission_service import SubmissionService
from core.utils.helpers import SurveyLookupHelper
from core.utils.logging_utils import StructuredLogger

logger = StructuredLogger('surveys')


@csrf_exempt
@ratelimit(key="ip", rate="60/h", method="POST", block=True)
def submission_intake_view(request, public_id):
    """
    Intake público de envíos en JSON.

    Cuerpo: ``{"completed": bool, "metadata": {...}, "answers": [{"question_id", "value"}]}``
    """
    try:
        survey = SurveyLookupHelper.get_by_public_id(
            public_id, Survey.objects.prefetch_related("questions")
        )
    except Http404:
        return JsonResponse({"error": "Survey not found"}, status=404)

    try:
        payload = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JsonResponse({"error": "Invalid JSON"}, status=400)

    try:
        submission = SubmissionService.create_submission(survey, payload)
    except ValidationError as e:
        logger.warning("Submission rejected", survey_id=survey.id, reason=" ".join(e.messages))
        return JsonResponse({"error": " ".join(e.messages)}, status=400)

    return JsonResponse(
        {
            "id": submission.id,
            "completed": submission.completed,
            "answers": submission.answers.count(),
        },
        status=201,
    )


@csrf_exempt
def survey_submissions_view(request, public_id):
    """Misma URL: POST público para responder, GET del dueño para listar."""
    if request.method == "POST":
        return submission_intake_view(request, public_id)
    if request.method == "GET":
        return async_to_sync(survey_submissions_list_view)(request, public_id)
    return JsonResponse({"error": "Method not allowed"}, status=405)
