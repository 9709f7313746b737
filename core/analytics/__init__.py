"""
Motor de analítica de respuestas.
Transforma envíos crudos en resúmenes estadísticos tipados por pregunta.
"""
from core.analytics.dispatcher import dispatch
from core.analytics.normalizer import normalize_value
from core.analytics.orchestrator import analyze
from core.analytics.summary import summarize
from core.analytics.types import QuestionType, QuestionAnalytics, FormSummary

__all__ = [
    'analyze',
    'dispatch',
    'normalize_value',
    'summarize',
    'QuestionType',
    'QuestionAnalytics',
    'FormSummary',
]
