# surveys/views/__init__.py
"""
Survey views package.
"""
from . import results_views
from . import submission_views

from .results_views import survey_analytics_view, survey_submissions_list_view
from .submission_views import submission_intake_view

__all__ = [
    'results_views',
    'submission_views',
    'survey_analytics_view',
    'survey_submissions_list_view',
    'submission_intake_view',
]
