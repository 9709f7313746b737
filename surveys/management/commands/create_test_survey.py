"""Management command to create a demo survey with random submissions."""
import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from core.analytics.normalizer import normalize_value
from surveys.models import Answer, Question, Submission, Survey
from surveys.signals import DisableSignals

User = get_user_model()

EMOJI_OPTIONS = [
    {'id': 'angry', 'emoji': '😠'},
    {'id': 'sad', 'emoji': '😞'},
    {'id': 'neutral', 'emoji': '😐'},
    {'id': 'happy', 'emoji': '🙂'},
    {'id': 'love', 'emoji': '😍'},
]

QUESTIONS_DATA = [
    {'title': 'What did you like the most?', 'type': 'short_text'},
    {'title': 'Anything else you want to tell us?', 'type': 'long_text'},
    {
        'title': 'How did you hear about us?',
        'type': 'multiple_choice',
        'choices': ['Friend', 'Search engine', 'Social media', 'Advertising'],
    },
    {
        'title': 'Which features do you use?',
        'type': 'checkboxes',
        'choices': ['Reports', 'Exports', 'Sharing', 'Templates'],
    },
    {'title': 'Country', 'type': 'dropdown', 'choices': ['Mexico', 'Spain', 'Argentina', 'Chile']},
    {'title': 'Team size', 'type': 'number'},
    {'title': 'How likely are you to recommend us?', 'type': 'linear_scale', 'properties': {'min': 0, 'max': 10}},
    {'title': 'Rate our support', 'type': 'rating', 'properties': {'maxRating': 5}},
    {'title': 'When did you start using the product?', 'type': 'date'},
    {'title': 'How do you feel today?', 'type': 'emoji_selector', 'properties': {'options': EMOJI_OPTIONS}},
]

SHORT_TEXTS = ['Speed', 'Design', 'Price', 'Support', 'Ease of use']
USER_AGENTS = [
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64)',
    'Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) Mobile',
    'Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)',
]


def _random_value(question_data, rng):
    qtype = question_data['type']
    if qtype == 'short_text':
        return rng.choice(SHORT_TEXTS)
    if qtype == 'long_text':
        return rng.choice(['Great product', 'Needs more integrations', 'Keep it up', ''])
    if qtype in ('multiple_choice', 'checkboxes', 'dropdown'):
        return rng.choice(question_data['choices'])
    if qtype == 'number':
        return rng.randint(1, 50)
    if qtype == 'linear_scale':
        return rng.randint(0, 10)
    if qtype == 'rating':
        return rng.randint(1, 5)
    if qtype == 'date':
        return f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
    if qtype == 'emoji_selector':
        return rng.choice(EMOJI_OPTIONS)['id']
    return ''


class Command(BaseCommand):
    help = 'Create a demo survey with one question per analysable type and random submissions.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--username',
            default='admin',
            help='Username that will own the survey (default: admin).',
        )
        parser.add_argument(
            '--password',
            default='admin',
            help='Password to set if the user is created (default: admin).',
        )
        parser.add_argument(
            '--title',
            default='Demo Survey - Analytics',
            help='Title for the generated survey.',
        )
        parser.add_argument(
            '--submissions',
            type=int,
            default=50,
            help='Number of random submissions to generate (default: 50).',
        )
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible data.')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        username = options['username']
        password = options['password']

        user, created = User.objects.get_or_create(
            username=username,
            defaults={'is_staff': True, 'is_superuser': True},
        )
        if created:
            user.set_password(password)
            user.save()
            self.stdout.write(self.style.SUCCESS(f'Created user: {username}'))
        else:
            self.stdout.write(self.style.WARNING(f'Using existing user: {username}'))

        with DisableSignals(), transaction.atomic():
            survey = Survey.objects.create(
                title=options['title'],
                description='Survey with random submissions for analytics testing',
                author=user,
                status=Survey.STATUS_ACTIVE,
            )
            questions = []
            for order, data in enumerate(QUESTIONS_DATA, 1):
                properties = dict(data.get('properties', {}))
                if 'choices' in data:
                    properties['choices'] = data['choices']
                question = Question.objects.create(
                    survey=survey,
                    title=data['title'],
                    type=data['type'],
                    order=order,
                    properties=properties,
                )
                questions.append((question, data))

            answers = []
            for _ in range(options['submissions']):
                submission = Submission.objects.create(
                    survey=survey,
                    completed=rng.random() > 0.2,
                    metadata={'userAgent': rng.choice(USER_AGENTS)},
                )
                for question, data in questions:
                    # Algunas preguntas quedan sin responder
                    if rng.random() < 0.1:
                        continue
                    answers.append(Answer(
                        submission=submission,
                        question=question,
                        value=normalize_value(_random_value(data, rng)),
                    ))
            Answer.objects.bulk_create(answers, batch_size=1000)

        self.stdout.write(self.style.SUCCESS(
            f'Created survey ID: {survey.id} (public id {survey.public_id}) '
            f'with {len(questions)} questions and {options["submissions"]} submissions'
        ))
