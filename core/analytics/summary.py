"""
core/analytics/summary.py
Resumen a nivel de formulario: totales, tasa de completitud, evolución diaria y dispositivos.
"""
import re
from datetime import date, datetime, timezone as dt_timezone

from core.analytics.aggregators import parse_moment
from core.analytics.types import FormSummary
from core.utils.logging_utils import StructuredLogger

logger = StructuredLogger('core.analytics')

MOBILE_PATTERN = re.compile(r'iphone|ipod|android.*mobile|windows phone|mobile', re.IGNORECASE)
TABLET_PATTERN = re.compile(r'ipad|tablet|android(?!.*mobile)', re.IGNORECASE)
UNKNOWN_DEVICE = 'Unknown'


class TimelineEngine:
    @staticmethod
    def submission_day(submission):
        """Calendar day of a submission from ``created_at`` or ``metadata.timestamp``."""
        metadata = submission.get('metadata') or {}
        raw = submission.get('created_at') or (metadata.get('timestamp') if isinstance(metadata, dict) else None)
        if isinstance(raw, datetime):
            moment = raw
        elif isinstance(raw, date):
            return raw.isoformat()
        else:
            moment = parse_moment(raw)
            if moment is None:
                return None
        if moment.tzinfo is not None:
            moment = moment.astimezone(dt_timezone.utc)
        return moment.date().isoformat()

    @staticmethod
    def analyze_evolution(submissions):
        counts = {}
        for submission in submissions:
            day = TimelineEngine.submission_day(submission)
            if day:
                counts[day] = counts.get(day, 0) + 1
        return [{'date': day, 'count': counts[day]} for day in sorted(counts)]


class DeviceEngine:
    @staticmethod
    def classify_user_agent(user_agent):
        if not user_agent:
            return UNKNOWN_DEVICE
        if TABLET_PATTERN.search(user_agent):
            return 'Tablet'
        if MOBILE_PATTERN.search(user_agent):
            return 'Mobile'
        return 'Desktop'

    @staticmethod
    def device_of(submission):
        metadata = submission.get('metadata')
        if not isinstance(metadata, dict):
            return UNKNOWN_DEVICE
        device = metadata.get('device')
        if isinstance(device, str) and device.strip():
            return device.strip()
        return DeviceEngine.classify_user_agent(metadata.get('userAgent') or metadata.get('user_agent'))

    @staticmethod
    def breakdown(submissions):
        counts = {}
        for submission in submissions:
            device = DeviceEngine.device_of(submission)
            counts[device] = counts.get(device, 0) + 1
        return dict(sorted(counts.items(), key=lambda item: item[1], reverse=True))


def summarize(form, submissions):
    """Form level figures for the results header. Never raises."""
    try:
        submissions = [s for s in (submissions or []) if isinstance(s, dict)]
        total = len(submissions)
        completed = sum(1 for s in submissions if s.get('completed'))
        return FormSummary(
            total_submissions=total,
            completed_submissions=completed,
            completion_rate=(completed / total) * 100 if total else 0,
            submission_trend=TimelineEngine.analyze_evolution(submissions),
            device_breakdown=DeviceEngine.breakdown(submissions),
        )
    except Exception:
        logger.exception("Error building form summary", form_id=(form or {}).get('id'))
        return FormSummary()
