"""
core/analytics/filters.py
Motor de filtros cruzados: restringe las respuestas de una pregunta según las
respuestas que el mismo envío dio a otras preguntas.
"""
from core.analytics.normalizer import normalize_value
from core.utils.logging_utils import StructuredLogger

logger = StructuredLogger('core.analytics')


def active_filters(filters):
    """Drops empty allow-lists and normalizes the allowed values."""
    if not filters:
        return {}
    return {
        str(question_id): {normalize_value(v) for v in allowed}
        for question_id, allowed in filters.items()
        if allowed
    }


def find_answer(submission, question_id):
    """First answer of ``submission`` to ``question_id`` (duplicates are ignored)."""
    for answer in submission.get('answers') or []:
        if not isinstance(answer, dict):
            continue
        if str(answer.get('question_id')) == str(question_id):
            return answer
    return None


def submission_passes(submission, filters):
    """
    True when the submission satisfies every active filter.

    A lookup that fails on a malformed submission counts as satisfied so one
    inconsistent row cannot hide a whole report.
    """
    for question_id, allowed in filters.items():
        try:
            answer = find_answer(submission, question_id)
            if answer is None or normalize_value(answer.get('value')) not in allowed:
                return False
        except Exception as e:
            logger.warning(
                "Filter lookup failed, treating filter as satisfied",
                submission_id=_submission_id(submission),
                filter_question_id=question_id,
                error=e,
            )
    return True


def filter_answers(submissions, question_id, filters):
    """
    Answers to ``question_id`` whose parent submission passes every active filter.

    Returns the answer mappings in submission order, one per submission at most.
    """
    active = active_filters(filters)
    answers = []
    for submission in submissions:
        try:
            answer = find_answer(submission, question_id)
        except Exception as e:
            logger.warning(
                "Answer lookup failed, skipping submission",
                submission_id=_submission_id(submission),
                question_id=question_id,
                error=e,
            )
            continue
        if answer is None:
            continue
        if active and not submission_passes(submission, active):
            continue
        answers.append(answer)
    return answers


def _submission_id(submission):
    try:
        return submission.get('id')
    except AttributeError:
        return None
