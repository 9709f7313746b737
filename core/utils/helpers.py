"""
core/utils/helpers.py
Búsqueda de encuestas por identificador público y control de propiedad.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404

from core.utils.logging_utils import log_security_event
from core.validators import SurveyValidator


class SurveyLookupHelper:
    """Resuelve encuestas a partir del identificador público de la URL."""

    @staticmethod
    def get_by_public_id(public_id, queryset):
        """
        Args:
            public_id: identificador público recibido en la URL
            queryset: QuerySet de ``Survey`` sobre el que buscar

        Raises:
            Http404: identificador mal formado o inexistente
        """
        try:
            public_id = SurveyValidator.validate_public_id(public_id)
        except ValidationError:
            raise Http404("Survey not found")
        survey = queryset.filter(public_id=public_id).first()
        if survey is None:
            raise Http404("Survey not found")
        return survey


class PermissionHelper:
    """Solo el autor de una encuesta puede ver sus resultados."""

    @staticmethod
    def verify_survey_access(survey, user):
        """
        Verify that the user owns the survey.

        Raises:
            PermissionDenied: If the user does not have access
        """
        if survey.author_id != user.id:
            log_security_event(
                'unauthorized_survey_access',
                severity='WARNING',
                user_id=user.id,
                survey_id=survey.id,
                survey_author_id=survey.author_id,
            )
            raise PermissionDenied("You do not have permission to access this survey")
