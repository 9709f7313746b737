"""
Django settings for formsight project.
"""

from pathlib import Path
from decouple import config, Csv
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config('SECRET_KEY', default='django-insecure-formsight-dev-key')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # --- Mis Apps ---
    'core.apps.CoreConfig',
    'surveys.apps.SurveysConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'formsight.urls'

APPEND_SLASH = True

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'formsight.wsgi.application'


# Database
DATABASES = {
    'default': {
        'ENGINE': config('DB_ENGINE', default='django.db.backends.postgresql'),
        'NAME': config('DB_NAME', default='formsight_db'),
        'USER': config('DB_USER', default='postgres'),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default='127.0.0.1'),
        'PORT': config('DB_PORT', default='5432'),
        'ATOMIC_REQUESTS': False,  # Disable to allow async views
    }
}


# Password validation
AUTH_PASSWORD_VALIDATORS = [
    { 'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator', },
    { 'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator', },
    { 'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator', },
    { 'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator', },
]


# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True


# Static files
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LOGIN_URL = '/admin/login/'


# ============================================================
# CACHE
# ============================================================
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'formsight-default',
    }
}

# ============================================================
# ANALYTICS ENGINE
# ============================================================
# Entradas en most_used por pregunta
ANALYTICS_MOST_USED_LIMIT = config('ANALYTICS_MOST_USED_LIMIT', default=10, cast=int)
# Segundos que se conserva un reporte calculado
ANALYTICS_CACHE_TIMEOUT = config('ANALYTICS_CACHE_TIMEOUT', default=3600, cast=int)
# Tipos que se analizan pero no se muestran en resultados
ANALYTICS_SENSITIVE_TYPES = config('ANALYTICS_SENSITIVE_TYPES', default='email,phone,date', cast=Csv())
ANALYTICS_DEFAULT_MAX_RATING = config('ANALYTICS_DEFAULT_MAX_RATING', default=5, cast=int)

# ============================================================
# RATE LIMITING (django-ratelimit)
# ============================================================
RATELIMIT_ENABLE = config('RATELIMIT_ENABLE', default=True, cast=bool)

# ============================================================
# LOGGING CONFIGURATION
# ============================================================
LOGS_DIR = config('LOGS_DIR', default=str(BASE_DIR / 'logs'))
os.makedirs(LOGS_DIR, exist_ok=True)

LOG_LEVEL = 'DEBUG' if DEBUG else 'INFO'


def _rotating_handler(filename, level='INFO', formatter='detailed', megabytes=10, backups=5):
    return {
        'level': level,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': os.path.join(LOGS_DIR, filename),
        'maxBytes': megabytes * 1024 * 1024,
        'backupCount': backups,
        'formatter': formatter,
    }


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{levelname}] {asctime} {name} {module}.{funcName}:{lineno} - {message}',
            'style': '{',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
        'detailed': {
            'format': '{asctime} | {name:24} | {levelname:8} | {message}',
            'style': '{',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {'level': LOG_LEVEL, 'class': 'logging.StreamHandler', 'formatter': 'detailed'},
        'file_app': _rotating_handler('app.log'),
        'file_error': _rotating_handler('error.log', level='ERROR', formatter='verbose'),
        'file_analytics': _rotating_handler('analytics.log'),
        'file_audit': _rotating_handler('audit.log', backups=10),
        'file_security': _rotating_handler('security.log', level='WARNING', formatter='verbose', megabytes=5, backups=10),
        'file_performance': _rotating_handler('performance.log', formatter='verbose', backups=3),
    },
    'loggers': {
        'django': {'handlers': ['console', 'file_app'], 'level': 'INFO', 'propagate': False},
        'django.request': {'handlers': ['console', 'file_error'], 'level': 'ERROR', 'propagate': False},
        'core': {'handlers': ['console', 'file_app', 'file_error'], 'level': LOG_LEVEL, 'propagate': False},
        'core.analytics': {'handlers': ['console', 'file_analytics', 'file_error'], 'level': LOG_LEVEL, 'propagate': False},
        'core.audit': {'handlers': ['file_audit'], 'level': 'INFO', 'propagate': False},
        'core.performance': {'handlers': ['console', 'file_performance'], 'level': 'INFO', 'propagate': False},
        'core.security': {'handlers': ['console', 'file_security'], 'level': 'WARNING', 'propagate': False},
        'surveys': {'handlers': ['console', 'file_app', 'file_error'], 'level': LOG_LEVEL, 'propagate': False},
    },
    'root': {'handlers': ['console', 'file_app'], 'level': 'INFO'},
}

# ============================================================
# CELERY CONFIGURATION
# ============================================================
CELERY_BROKER_URL = config('CELERY_BROKER_URL', default='redis://localhost:6379/0')
CELERY_RESULT_BACKEND = config('CELERY_RESULT_BACKEND', default='redis://localhost:6379/0')
CELERY_WORKER_CONCURRENCY = config('CELERY_WORKER_CONCURRENCY', default=4, cast=int)
CELERY_TASK_ACKS_LATE = True
CELERY_TASK_TIME_LIMIT = 5 * 60
CELERY_TASK_SOFT_TIME_LIMIT = 4 * 60
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TIMEZONE = TIME_ZONE
CELERY_RESULT_EXPIRES = 3600
CELERY_BROKER_CONNECTION_RETRY_ON_STARTUP = True
