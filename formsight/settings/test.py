"""
Test settings for FormSight: SQLite in memory, local memory cache,
Celery executed inline and silent logging.
"""
from .base import *  # noqa: F401,F403

DEBUG = False
SECRET_KEY = 'formsight-tests-only'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Cada proceso de pytest tiene su propia caché
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'formsight-tests',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Valores explícitos para que los tests no dependan del .env
ANALYTICS_MOST_USED_LIMIT = 10
ANALYTICS_CACHE_TIMEOUT = 3600
ANALYTICS_SENSITIVE_TYPES = ['email', 'phone', 'date']
ANALYTICS_DEFAULT_MAX_RATING = 5
RATELIMIT_ENABLE = True

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {'null': {'class': 'logging.NullHandler'}},
    'loggers': {
        name: {'handlers': ['null'], 'level': 'CRITICAL', 'propagate': False}
        for name in ('django', 'core', 'surveys', 'celery')
    },
}
