"""
core/validators.py
Validación de identificadores públicos, filtros de resultados y respuestas.
"""
import re
from django.core.exceptions import ValidationError

MAX_TEXT_LENGTH = 5000
MAX_FILTERS = 20


class SurveyValidator:
    """Validadores para encuestas."""

    PUBLIC_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{4,12}$')

    @staticmethod
    def validate_public_id(public_id):
        """Valida el identificador público de una encuesta."""
        if public_id is None:
            raise ValidationError("Survey identifier is missing")

        public_id = str(public_id).strip()
        if not SurveyValidator.PUBLIC_ID_PATTERN.match(public_id):
            raise ValidationError(f"Invalid survey identifier: '{public_id}'")
        return public_id


class AnalyticsFilterValidator:
    """Valida el conjunto de filtros cruzados de la vista de resultados."""

    @staticmethod
    def parse_filter_params(raw_filters, question_ids):
        """
        Builds a filter set from ``question_id:value`` strings.

        Args:
            raw_filters: iterable of strings, e.g. ``request.GET.getlist('filter')``
            question_ids: ids of the questions that belong to the survey

        Returns:
            dict: question id (str) -> list of allowed values, in request order

        Raises:
            ValidationError: malformed entry, unknown question or too many filters
        """
        known = {str(qid) for qid in question_ids}
        filters = {}
        for raw in raw_filters or []:
            if not isinstance(raw, str) or ':' not in raw:
                raise ValidationError(
                    f"Invalid filter '{raw}'. Use <question_id>:<value>"
                )
            question_id, value = raw.split(':', 1)
            question_id = question_id.strip()
            if question_id not in known:
                raise ValidationError(f"Filter references unknown question '{question_id}'")
            allowed = filters.setdefault(question_id, [])
            if value not in allowed:
                allowed.append(value)

        if len(filters) > MAX_FILTERS:
            raise ValidationError(
                f"Too many filtered questions ({len(filters)}). Maximum allowed: {MAX_FILTERS}"
            )
        return filters


class ResponseValidator:
    """Validadores para respuestas de encuestas."""

    SCALAR_TYPES = (str, int, float, bool)

    @staticmethod
    def validate_scalar(value, question_id):
        """Una respuesta debe ser un escalar representable como texto."""
        if value is None or not isinstance(value, ResponseValidator.SCALAR_TYPES):
            raise ValidationError(
                f"Answer for question {question_id} must be a string or a number"
            )
        return value

    @staticmethod
    def validate_text_response(value, max_length=MAX_TEXT_LENGTH):
        """Valida respuesta de texto."""
        if not value:
            return ""

        text = str(value)
        if len(text) > max_length:
            raise ValidationError(
                f"Text answer too long ({len(text)} characters). Maximum: {max_length}"
            )
        return text
