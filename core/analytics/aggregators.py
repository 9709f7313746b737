"""
core/analytics/aggregators.py
Estrategias de agregación por categoría de pregunta.

Every aggregator is a total function: it receives the normalized string
values of one question and returns an analysis record. Values that cannot be
parsed for the category (numbers, dates, ratings) are skipped, never raised.
"""
import math
from datetime import datetime, timezone as dt_timezone

from dateutil import parser as date_parser
from django.conf import settings

from core.analytics.types import (
    CategoricalAnalysis,
    DateAnalysis,
    EmojiAnalysis,
    NumericalAnalysis,
    RatingAnalysis,
    TextAnalysis,
)

DEFAULT_MOST_USED_LIMIT = 10
DEFAULT_MAX_RATING = 5

# Partes de fecha ausentes ("2024", "10", "5 pm") se completan con este valor fijo
PARTIAL_DATE_DEFAULT = datetime(2000, 1, 1)


def _setting(name, default):
    """Engine tunable from Django settings, or ``default`` when settings are not configured."""
    if not settings.configured:
        return default
    return getattr(settings, name, default)


def _most_used_limit():
    return _setting('ANALYTICS_MOST_USED_LIMIT', DEFAULT_MOST_USED_LIMIT)


# --- 1. PRIMITIVAS COMPARTIDAS ---

def count_frequencies(values):
    """Counts values keeping first-seen order of the keys."""
    frequencies = {}
    for value in values:
        frequencies[value] = frequencies.get(value, 0) + 1
    return frequencies


def compute_percentages(frequencies, total):
    if not total:
        return {}
    return {key: (count / total) * 100 for key, count in frequencies.items()}


def rank_most_used(frequencies, label_key, limit=None, label_cast=None):
    """
    Top entries by descending count.
    ``sorted`` is stable, so ties keep the first-seen order of ``frequencies``.
    """
    limit = _most_used_limit() if limit is None else limit
    ranked = sorted(frequencies.items(), key=lambda item: item[1], reverse=True)
    cast = label_cast or (lambda label: label)
    return [{label_key: cast(label), 'count': count} for label, count in ranked[:limit]]


def parse_number(value):
    """Returns a finite float for ``value`` or None when it is not numeric."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _as_number(number):
    return int(number) if float(number).is_integer() else number


def parse_moment(value):
    """
    Datetime for a date string, None when it cannot be parsed.
    Missing parts come from ``PARTIAL_DATE_DEFAULT``, never from today.
    Timezone-aware values are converted to UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = date_parser.parse(value, default=PARTIAL_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt_timezone.utc)
    return parsed


def parse_calendar_date(value):
    """``YYYY-MM-DD`` for a parseable date string, None otherwise."""
    parsed = parse_moment(value)
    return parsed.date().isoformat() if parsed is not None else None


# --- 2. AGREGADORES ---

class TextAggregator:
    record_class = TextAnalysis
    label_key = 'text'

    @classmethod
    def aggregate(cls, values, properties=None):
        frequencies = count_frequencies(values)
        total = sum(frequencies.values())
        return cls.record_class(
            total_responses=total,
            frequencies=frequencies,
            percentages=compute_percentages(frequencies, total),
            most_used=rank_most_used(frequencies, cls.label_key),
        )


class CategoricalAggregator(TextAggregator):
    """Same algorithm as free text, applied to option values or labels."""
    record_class = CategoricalAnalysis
    label_key = 'category'


class DateAggregator(TextAggregator):
    record_class = DateAnalysis

    @classmethod
    def aggregate(cls, values, properties=None):
        dates = [d for d in (parse_calendar_date(v) for v in values) if d is not None]
        return super().aggregate(dates, properties)


class EmojiAggregator(TextAggregator):
    record_class = EmojiAnalysis
    label_key = 'emoji'

    @staticmethod
    def build_emoji_map(options):
        emoji_map = {}
        for option in options or []:
            if not isinstance(option, dict):
                continue
            option_id, emoji = option.get('id'), option.get('emoji')
            if option_id is not None and emoji:
                emoji_map[str(option_id)] = emoji
        return emoji_map

    @classmethod
    def aggregate(cls, values, properties=None):
        options = (properties or {}).get('options')
        emoji_map = cls.build_emoji_map(options)
        # Los valores que no son un id conocido se tratan como emoji literal
        resolved = [emoji_map.get(value, value) for value in values]
        return super().aggregate(resolved, properties)


class NumericAggregator:
    """Shared by ``number`` and ``linear_scale`` questions."""
    record_class = NumericalAnalysis
    label_key = 'text'

    @classmethod
    def _bounds(cls, properties):
        return None

    @classmethod
    def _collect(cls, values, properties):
        frequencies = {}
        numeric_keys = {}
        total = 0
        running_sum = 0.0
        bounds = cls._bounds(properties)
        for value in values:
            number = parse_number(value)
            if number is None:
                continue
            if bounds is not None and not bounds[0] <= number <= bounds[1]:
                continue
            frequencies[value] = frequencies.get(value, 0) + 1
            numeric_keys[value] = number
            total += 1
            running_sum += number
        return frequencies, numeric_keys, total, running_sum

    @classmethod
    def _record_kwargs(cls, values, properties):
        frequencies, numeric_keys, total, running_sum = cls._collect(values, properties)
        sorted_values = [
            {'value': _as_number(numeric_keys[key]), 'count': count}
            for key, count in sorted(frequencies.items(), key=lambda item: numeric_keys[item[0]])
        ]
        return {
            'total_responses': total,
            'frequencies': frequencies,
            'percentages': compute_percentages(frequencies, total),
            'most_used': rank_most_used(frequencies, cls.label_key),
            'average': running_sum / total if total else 0,
            'sorted_values': sorted_values,
        }

    @classmethod
    def aggregate(cls, values, properties=None):
        return cls.record_class(**cls._record_kwargs(values, properties or {}))


class RatingAggregator(NumericAggregator):
    """
    Ratings outside ``[0, max_rating]`` are discarded here, so renderers can
    trust the record without re-validating bounds.
    """
    record_class = RatingAnalysis
    label_key = 'rating'

    @staticmethod
    def resolve_max_rating(properties):
        default = _setting('ANALYTICS_DEFAULT_MAX_RATING', DEFAULT_MAX_RATING)
        raw = (properties or {}).get('maxRating', default)
        number = parse_number(str(raw)) if raw is not None else None
        if number is None or number <= 0:
            return default
        return _as_number(number)

    @classmethod
    def _bounds(cls, properties):
        return 0, cls.resolve_max_rating(properties)

    @classmethod
    def aggregate(cls, values, properties=None):
        properties = properties or {}
        kwargs = cls._record_kwargs(values, properties)
        frequencies = kwargs['frequencies']
        kwargs['most_used'] = rank_most_used(
            frequencies, cls.label_key, label_cast=lambda key: _as_number(parse_number(key))
        )
        return cls.record_class(max_rating=cls.resolve_max_rating(properties), **kwargs)
