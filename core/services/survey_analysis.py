"""core/services/survey_analysis.py"""
import hashlib
import json

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.cache import cache
from django.db.models import Max, Count

from core.analytics import analyze, summarize
from core.utils.logging_utils import StructuredLogger, log_performance, log_query_count
from surveys.models import Submission

logger = StructuredLogger('core.services')

DEFAULT_CACHE_TIMEOUT = 3600
DEFAULT_SENSITIVE_TYPES = ('email', 'phone', 'date')


class SurveyAnalysisService:
    """Carga un formulario con sus envíos, ejecuta el motor y memoiza el reporte."""

    @staticmethod
    def _fetch_form_definition(survey):
        questions = survey.questions.order_by('order', 'id')
        return {
            'id': survey.id,
            'title': survey.title,
            'questions': [
                {
                    'id': q.id,
                    'title': q.title,
                    'type': q.type,
                    'required': q.required,
                    'properties': q.properties or {},
                }
                for q in questions
            ],
        }

    @staticmethod
    @log_query_count
    def _fetch_submissions(survey):
        """Envíos en orden de llegada, cada uno con sus respuestas."""
        queryset = (
            Submission.objects.filter(survey=survey)
            .prefetch_related('answers')
            .order_by('created_at', 'id')
        )
        return [
            {
                'id': s.id,
                'completed': s.completed,
                'created_at': s.created_at,
                'metadata': s.metadata or {},
                'answers': [
                    {'question_id': a.question_id, 'value': a.value}
                    for a in sorted(s.answers.all(), key=lambda a: a.id)
                ],
            }
            for s in queryset
        ]

    @staticmethod
    def _filter_digest(filters):
        if not filters:
            return 'all'
        canonical = json.dumps(
            {str(k): sorted(str(v) for v in values) for k, values in filters.items()},
            sort_keys=True,
        )
        return hashlib.md5(canonical.encode('utf-8')).hexdigest()[:12]

    @staticmethod
    def build_cache_key(survey, filters=None):
        """
        Key changes whenever the survey is edited or a submission arrives or
        is removed, so stale reports are never served.
        """
        stats = Submission.objects.filter(survey=survey).aggregate(total=Count('id'), last_id=Max('id'))
        updated = survey.updated_at.strftime("%Y%m%d%H%M%S%f") if survey.updated_at else "0"
        return (
            f"survey_analysis_{survey.id}_{updated}_"
            f"{stats['total']}_{stats['last_id'] or 0}_"
            f"{SurveyAnalysisService._filter_digest(filters)}"
        )

    @staticmethod
    def _mark_hidden(records):
        sensitive = set(getattr(settings, 'ANALYTICS_SENSITIVE_TYPES', DEFAULT_SENSITIVE_TYPES))
        for record in records:
            record['hidden'] = record.get('question_type') in sensitive
        return records

    @staticmethod
    @log_performance(threshold_ms=1000)
    def get_analysis_data(survey, filters=None, cache_key=None):
        """
        Full analytics payload for ``survey``.

        Returns:
            dict: ``{'survey': {...}, 'summary': {...}, 'questions': [...]}``
        """
        if cache_key is None:
            cache_key = SurveyAnalysisService.build_cache_key(survey, filters)

        cached = cache.get(cache_key)
        if cached is not None:
            logger.debug("Analysis cache hit", survey_id=survey.id, cache_key=cache_key)
            return cached

        form = SurveyAnalysisService._fetch_form_definition(survey)
        submissions = SurveyAnalysisService._fetch_submissions(survey)

        records = [entry.to_dict() for entry in analyze(form, submissions, filters)]
        result = {
            'survey': {
                'id': survey.id,
                'public_id': survey.public_id,
                'title': survey.title,
                'status': survey.status,
            },
            'summary': summarize(form, submissions).to_dict(),
            'filters': {str(k): list(v) for k, v in (filters or {}).items()},
            'questions': SurveyAnalysisService._mark_hidden(records),
        }

        timeout = getattr(settings, 'ANALYTICS_CACHE_TIMEOUT', DEFAULT_CACHE_TIMEOUT)
        cache.set(cache_key, result, timeout)
        logger.info(
            "Analysis computed",
            survey_id=survey.id,
            questions=len(records),
            submissions=len(submissions),
        )
        return result

    @staticmethod
    async def get_analysis_data_async(survey, filters=None, cache_key=None):
        return await sync_to_async(SurveyAnalysisService.get_analysis_data)(survey, filters, cache_key)
