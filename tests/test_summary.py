"""
Tests para core/analytics/summary.py (resumen a nivel de formulario)
"""
from datetime import datetime, timezone

import pytest

from core.analytics import summarize
from core.analytics.summary import DeviceEngine, TimelineEngine

IPHONE = 'Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) Mobile/15E148'
IPAD = 'Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)'
ANDROID_PHONE = 'Mozilla/5.0 (Linux; Android 13; Pixel 7) Mobile Safari/537.36'
DESKTOP = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64)'


class TestDeviceEngine:
    @pytest.mark.parametrize('user_agent, expected', [
        (IPHONE, 'Mobile'),
        (ANDROID_PHONE, 'Mobile'),
        (IPAD, 'Tablet'),
        (DESKTOP, 'Desktop'),
        ('', 'Unknown'),
        (None, 'Unknown'),
    ])
    def test_classify_user_agent(self, user_agent, expected):
        assert DeviceEngine.classify_user_agent(user_agent) == expected

    def test_explicit_device_wins(self):
        assert DeviceEngine.device_of({'metadata': {'device': 'Kiosk', 'userAgent': IPHONE}}) == 'Kiosk'

    def test_missing_metadata(self):
        assert DeviceEngine.device_of({}) == 'Unknown'
        assert DeviceEngine.device_of({'metadata': 'oops'}) == 'Unknown'

    def test_breakdown_sorted_by_count(self):
        breakdown = DeviceEngine.breakdown([
            {'metadata': {'userAgent': DESKTOP}},
            {'metadata': {'userAgent': IPHONE}},
            {'metadata': {'userAgent': IPHONE}},
        ])
        assert list(breakdown.items()) == [('Mobile', 2), ('Desktop', 1)]


class TestTimelineEngine:
    def test_daily_trend_ascending(self):
        trend = TimelineEngine.analyze_evolution([
            {'created_at': datetime(2024, 1, 2, 9, tzinfo=timezone.utc)},
            {'created_at': datetime(2024, 1, 1, 23, tzinfo=timezone.utc)},
            {'metadata': {'timestamp': '2024-01-02T08:00:00Z'}},
            {'metadata': {'timestamp': 'yesterday-ish'}},
        ])
        assert trend == [
            {'date': '2024-01-01', 'count': 1},
            {'date': '2024-01-02', 'count': 2},
        ]

    def test_partial_timestamp_uses_fixed_defaults(self):
        assert TimelineEngine.submission_day({'metadata': {'timestamp': '2024'}}) == '2024-01-01'
        assert TimelineEngine.submission_day({'metadata': {'timestamp': '5 pm'}}) == '2000-01-01'


class TestSummarize:
    def test_totals_and_completion_rate(self):
        summary = summarize({'id': 1}, [
            {'completed': True, 'metadata': {'userAgent': DESKTOP}},
            {'completed': False, 'metadata': {}},
        ])
        assert summary.total_submissions == 2
        assert summary.completed_submissions == 1
        assert summary.completion_rate == pytest.approx(50.0)
        assert summary.device_breakdown == {'Desktop': 1, 'Unknown': 1}

    def test_empty(self):
        summary = summarize({'id': 1}, [])
        assert summary.to_dict() == {
            'total_submissions': 0,
            'completed_submissions': 0,
            'completion_rate': 0,
            'submission_trend': [],
            'device_breakdown': {},
        }

    def test_none_submissions(self):
        assert summarize(None, None).total_submissions == 0
