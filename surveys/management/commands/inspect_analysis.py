from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from surveys.models import Survey
from core.services.survey_analysis import SurveyAnalysisService
from core.validators import AnalyticsFilterValidator


class Command(BaseCommand):
    help = 'Inspect analysis data for a given survey id'

    def add_arguments(self, parser):
        parser.add_argument('survey_id', type=int)
        parser.add_argument(
            '--filter',
            action='append',
            default=[],
            dest='filters',
            help='Cross filter as <question_id>:<value>. Repeatable.',
        )

    def handle(self, *args, **options):
        survey_id = options['survey_id']
        survey = Survey.objects.filter(pk=survey_id).first()
        if not survey:
            self.stdout.write(self.style.ERROR(f'Survey {survey_id} not found'))
            return

        question_ids = list(survey.questions.values_list('id', flat=True))
        try:
            filters = AnalyticsFilterValidator.parse_filter_params(options['filters'], question_ids)
        except ValidationError as e:
            raise CommandError(' '.join(e.messages))

        res = SurveyAnalysisService.get_analysis_data(survey, filters)
        summary = res['summary']
        self.stdout.write(f"Total submissions for survey {survey_id}: {summary['total_submissions']}")
        self.stdout.write(f"Completion rate: {summary['completion_rate']:.1f}%")
        for item in res['questions']:
            analysis = item['analysis']
            self.stdout.write('-' * 40)
            self.stdout.write(f"Question {item['question_id']}: {(item['question_title'] or '')[:80]}")
            self.stdout.write(f" type: {item['question_type']} ({item['analysis_kind']})")
            self.stdout.write(f" response_count: {item['response_count']}")
            self.stdout.write(f" total_responses: {analysis['total_responses']}")
            if 'average' in analysis:
                self.stdout.write(f" average: {analysis['average']:.2f}")
            for entry in analysis['most_used'][:3]:
                label = next(v for k, v in entry.items() if k != 'count')
                self.stdout.write(f"   {label}: {entry['count']}")
            if item.get('hidden'):
                self.stdout.write(" hidden in results view")
