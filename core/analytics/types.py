"""
core/analytics/types.py
Contratos de tipos del motor de analítica: tipos de pregunta y registros de análisis.
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class QuestionType(str, Enum):
    SHORT_TEXT = 'short_text'
    LONG_TEXT = 'long_text'
    MULTIPLE_CHOICE = 'multiple_choice'
    CHECKBOXES = 'checkboxes'
    DROPDOWN = 'dropdown'
    MULTI_SELECT = 'multi_select'
    NUMBER = 'number'
    LINEAR_SCALE = 'linear_scale'
    RATING = 'rating'
    DATE = 'date'
    EMAIL = 'email'
    PHONE = 'phone'
    EMOJI_SELECTOR = 'emoji_selector'

    @classmethod
    def parse(cls, raw) -> Optional['QuestionType']:
        """Returns the enum member for ``raw`` or None for unknown tags."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            return None


QUESTION_TYPE_CHOICES = [
    (QuestionType.SHORT_TEXT.value, 'Short text'),
    (QuestionType.LONG_TEXT.value, 'Long text'),
    (QuestionType.MULTIPLE_CHOICE.value, 'Multiple choice'),
    (QuestionType.CHECKBOXES.value, 'Checkboxes'),
    (QuestionType.DROPDOWN.value, 'Dropdown'),
    (QuestionType.MULTI_SELECT.value, 'Multi select'),
    (QuestionType.NUMBER.value, 'Number'),
    (QuestionType.LINEAR_SCALE.value, 'Linear scale'),
    (QuestionType.RATING.value, 'Rating'),
    (QuestionType.DATE.value, 'Date'),
    (QuestionType.EMAIL.value, 'Email'),
    (QuestionType.PHONE.value, 'Phone'),
    (QuestionType.EMOJI_SELECTOR.value, 'Emoji selector'),
]


# --- REGISTROS DE ANÁLISIS ---

@dataclass
class FrequencyAnalysis:
    """
    Base shape shared by every analysis record.
    An instance with default values is the canonical empty record.
    """
    total_responses: int = 0
    frequencies: Dict[str, int] = field(default_factory=dict)
    percentages: Dict[str, float] = field(default_factory=dict)
    most_used: List[Dict[str, Any]] = field(default_factory=list)

    kind = 'empty'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def is_empty(self) -> bool:
        return self.total_responses == 0 and not self.frequencies


@dataclass
class TextAnalysis(FrequencyAnalysis):
    kind = 'text'


@dataclass
class CategoricalAnalysis(FrequencyAnalysis):
    kind = 'categorical'


@dataclass
class DateAnalysis(FrequencyAnalysis):
    kind = 'date'


@dataclass
class EmojiAnalysis(FrequencyAnalysis):
    kind = 'emoji'


@dataclass
class NumericalAnalysis(FrequencyAnalysis):
    average: float = 0
    sorted_values: List[Dict[str, Any]] = field(default_factory=list)

    kind = 'numerical'


# Escala lineal y número comparten el mismo algoritmo
LinearScaleAnalysis = NumericalAnalysis


@dataclass
class RatingAnalysis(NumericalAnalysis):
    max_rating: int = 5

    kind = 'rating'


def empty_analysis() -> FrequencyAnalysis:
    return FrequencyAnalysis()


@dataclass
class QuestionAnalytics:
    """One entry of the analytics report: a question and its analysis."""
    question_id: Any
    question_title: Optional[str]
    question_type: str
    response_count: int
    analysis: FrequencyAnalysis = field(default_factory=empty_analysis)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'question_id': self.question_id,
            'question_title': self.question_title,
            'question_type': self.question_type,
            'response_count': self.response_count,
            'analysis_kind': self.analysis.kind,
            'analysis': self.analysis.to_dict(),
        }


@dataclass
class FormSummary:
    total_submissions: int = 0
    completed_submissions: int = 0
    completion_rate: float = 0
    submission_trend: List[Dict[str, Any]] = field(default_factory=list)
    device_breakdown: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
