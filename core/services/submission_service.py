"""core/services/submission_service.py"""
from django.core.exceptions import ValidationError
from django.db import transaction

from core.analytics.normalizer import normalize_value
from core.utils.logging_utils import StructuredLogger, log_data_change
from core.validators import MAX_TEXT_LENGTH, ResponseValidator
from surveys.models import Answer, Submission

logger = StructuredLogger('core.services')


class SubmissionService:
    """Ingesta de envíos públicos: valida, normaliza y persiste de forma atómica."""

    @staticmethod
    def _parse_answers(survey, raw_answers):
        if not isinstance(raw_answers, list):
            raise ValidationError("'answers' must be a list")

        questions = {str(q.id): q for q in survey.questions.all()}
        parsed = []
        seen = set()
        for item in raw_answers:
            if not isinstance(item, dict):
                raise ValidationError("Each answer must be an object with 'question_id' and 'value'")
            question_id = str(item.get('question_id'))
            question = questions.get(question_id)
            if question is None:
                raise ValidationError(f"Question {question_id} does not belong to this survey")
            if question_id in seen:
                raise ValidationError(f"Duplicate answer for question {question_id}")
            seen.add(question_id)

            value = ResponseValidator.validate_scalar(item.get('value'), question_id)
            text = ResponseValidator.validate_text_response(normalize_value(value), MAX_TEXT_LENGTH)
            parsed.append((question, text))
        return questions, parsed

    @staticmethod
    def _check_required(questions, parsed):
        answered = {str(question.id) for question, text in parsed if text.strip()}
        missing = [qid for qid, q in questions.items() if q.required and qid not in answered]
        if missing:
            raise ValidationError(f"Required questions without answer: {', '.join(missing)}")

    @staticmethod
    def create_submission(survey, payload):
        """
        Stores one submission with its answers.

        Args:
            survey: target ``Survey``
            payload: ``{'completed': bool, 'metadata': dict, 'answers': [{'question_id', 'value'}]}``

        Returns:
            Submission: the stored submission

        Raises:
            ValidationError: closed survey or invalid payload
        """
        if not survey.accepts_submissions:
            raise ValidationError("This survey is not accepting responses")
        if not isinstance(payload, dict):
            raise ValidationError("Payload must be a JSON object")

        completed = bool(payload.get('completed', False))
        metadata = payload.get('metadata') or {}
        if not isinstance(metadata, dict):
            raise ValidationError("'metadata' must be an object")

        questions, parsed = SubmissionService._parse_answers(survey, payload.get('answers', []))
        if completed:
            SubmissionService._check_required(questions, parsed)

        with transaction.atomic():
            submission = Submission.objects.create(survey=survey, completed=completed, metadata=metadata)
            Answer.objects.bulk_create([
                Answer(submission=submission, question=question, value=text)
                for question, text in parsed
            ])

        log_data_change('Submission', 'CREATE', submission.id, survey_id=survey.id, answers=len(parsed))
        logger.info("Submission stored", survey_id=survey.id, submission_id=submission.id, completed=completed)
        return submission
