import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task
def warm_survey_analytics(survey_id: int) -> dict:
    """
    Precalcula y cachea la analítica sin filtros de una encuesta, fuera del
    hilo de la petición.
    """
    from core.services.survey_analysis import SurveyAnalysisService
    from surveys.models import Survey

    try:
        survey = Survey.objects.get(id=survey_id)
    except Survey.DoesNotExist:
        logger.warning(f"[TASK][ANALYTICS] Encuesta {survey_id} no encontrada")
        return {'status': 'NOT_FOUND', 'survey_id': survey_id}

    data = SurveyAnalysisService.get_analysis_data(survey)
    logger.info(f"[TASK][ANALYTICS] Encuesta {survey_id} precalculada ({len(data['questions'])} preguntas)")
    return {
        'status': 'SUCCESS',
        'survey_id': survey_id,
        'questions': len(data['questions']),
        'total_submissions': data['summary']['total_submissions'],
    }
