"""
core/analytics/dispatcher.py
Selecciona el agregador correspondiente al tipo declarado de la pregunta.
"""
from core.analytics.aggregators import (
    CategoricalAggregator,
    DateAggregator,
    EmojiAggregator,
    NumericAggregator,
    RatingAggregator,
    TextAggregator,
)
from core.analytics.types import QuestionType, empty_analysis

AGGREGATORS = {
    QuestionType.SHORT_TEXT: TextAggregator,
    QuestionType.LONG_TEXT: TextAggregator,
    QuestionType.MULTIPLE_CHOICE: CategoricalAggregator,
    QuestionType.CHECKBOXES: CategoricalAggregator,
    QuestionType.DROPDOWN: CategoricalAggregator,
    QuestionType.MULTI_SELECT: CategoricalAggregator,
    QuestionType.NUMBER: NumericAggregator,
    QuestionType.LINEAR_SCALE: NumericAggregator,
    QuestionType.DATE: DateAggregator,
    QuestionType.EMOJI_SELECTOR: EmojiAggregator,
    QuestionType.RATING: RatingAggregator,
}

# Tipos conocidos que no producen análisis renderizable
UNANALYZED_TYPES = frozenset({QuestionType.EMAIL, QuestionType.PHONE})


def dispatch(question_type, values, properties=None):
    """
    Aggregates ``values`` with the strategy registered for ``question_type``.

    Unknown or unanalysed types return the canonical empty record; consumers
    read an empty record as "nothing to render", not as an error.
    """
    properties = properties if isinstance(properties, dict) else {}
    aggregator = AGGREGATORS.get(QuestionType.parse(question_type))
    if aggregator is None:
        return empty_analysis()
    if aggregator is EmojiAggregator and not isinstance(properties.get('options'), list):
        return empty_analysis()
    return aggregator.aggregate(values, properties)
