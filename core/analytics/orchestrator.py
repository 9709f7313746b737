"""
core/analytics/orchestrator.py
Orquestador de analítica de respuestas.

Recorre las preguntas del formulario en orden, reúne sus respuestas, aplica los
filtros, normaliza y despacha al agregador. Cada pregunta se procesa dentro de
su propio límite de errores: una pregunta defectuosa nunca vacía el reporte.
"""
from core.analytics.dispatcher import dispatch
from core.analytics.filters import filter_answers
from core.analytics.normalizer import normalize_values
from core.analytics.types import QuestionAnalytics, empty_analysis
from core.utils.logging_utils import StructuredLogger, log_performance

logger = StructuredLogger('core.analytics')

UNTITLED_QUESTION = 'Untitled Question'


def answered_submissions(submissions):
    """Submissions that carry at least one answer."""
    valid = []
    for submission in submissions:
        answers = submission.get('answers') if isinstance(submission, dict) else None
        if answers:
            valid.append(submission)
    return valid


def analyze_question(question, submissions, filters=None):
    """Builds the analytics entry for a single question. May raise."""
    answers = filter_answers(submissions, question['id'], filters)
    values = normalize_values(answer.get('value') for answer in answers)
    return QuestionAnalytics(
        question_id=question['id'],
        question_title=question.get('title'),
        question_type=question.get('type'),
        response_count=len(answers),
        analysis=dispatch(question.get('type'), values, question.get('properties')),
    )


def placeholder_for(question):
    """Zeroed entry used when a question cannot be analysed."""
    question = question if isinstance(question, dict) else {}
    return QuestionAnalytics(
        question_id=question.get('id'),
        question_title=question.get('title') or UNTITLED_QUESTION,
        question_type=question.get('type'),
        response_count=0,
        analysis=empty_analysis(),
    )


@log_performance(threshold_ms=500)
def analyze(form, submissions, filters=None):
    """
    Analyse every question of ``form`` against ``submissions``.

    Args:
        form: mapping with an ordered ``questions`` list
        submissions: list of mappings with an ``answers`` list
        filters: mapping question id -> allowed raw values (optional)

    Returns:
        list[QuestionAnalytics]: exactly one entry per question, in form order.
        An empty list when the form or the submissions are missing.
    """
    try:
        if not form or submissions is None:
            logger.info("Missing form or submissions data", has_form=bool(form),
                        has_submissions=submissions is not None)
            return []

        valid = answered_submissions(submissions)
        results = []
        for question in form.get('questions') or []:
            try:
                results.append(analyze_question(question, valid, filters))
            except Exception:
                logger.exception("Error processing question", question_id=_question_id(question))
                results.append(placeholder_for(question))
        return results
    except Exception:
        logger.exception("Error building analytics report")
        return []


def _question_id(question):
    return question.get('id') if isinstance(question, dict) else None
