"""
Celery configuration for FormSight.
"""

import os
from celery import Celery

# Set default Django settings module / environment
os.environ.setdefault('DJANGO_ENV', 'local')
os.environ.setdefault('DJANGO_SETTINGS_MODULE', f"formsight.settings.{os.environ['DJANGO_ENV']}")

app = Celery('formsight')

# Load configuration from Django settings with CELERY_ namespace
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()

app.conf.task_default_priority = 5
app.conf.task_default_queue = 'celery'

# El precálculo de analítica es barato y no debe bloquear otras colas
app.conf.task_routes = {
    'surveys.tasks.warm_survey_analytics': {
        'queue': 'celery',
        'routing_key': 'analytics',
        'priority': 3,
    },
}
