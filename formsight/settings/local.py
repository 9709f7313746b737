from .base import *
from decouple import config

# ============================================================
# CONFIGURACIÓN LOCAL
# ============================================================

DEBUG = True

LOCAL_LAN_IP = config('LAN_IP', default='172.16.0.2')

ALLOWED_HOSTS = ['localhost', '127.0.0.1', LOCAL_LAN_IP]

# Deshabilitar HTTPS en desarrollo - runserver solo soporta HTTP
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
SECURE_SSL_REDIRECT = False

CSRF_TRUSTED_ORIGINS = [
    'http://127.0.0.1:8000',
    'http://localhost:8000',
    'http://127.0.0.1:8010',
    'http://localhost:8010',
    f'http://{LOCAL_LAN_IP}:8000',
    f'http://{LOCAL_LAN_IP}:8010',
]

DATABASES = {
    'default': {
        'ENGINE': config('DB_ENGINE', default='django.db.backends.sqlite3'),
        'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        'USER': config('DB_USER', default=''),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default=''),
        'PORT': config('DB_PORT', default=''),
    }
}

# Logging más verboso en desarrollo
LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['loggers']['core']['level'] = 'DEBUG'
LOGGING['loggers']['surveys']['level'] = 'DEBUG'

# ============================================================
# CELERY
# ============================================================
# El broker URL se toma de base.py
CELERY_WORKER_PREFETCH_MULTIPLIER = 1
CELERY_TASK_ALWAYS_EAGER = config('CELERY_TASK_ALWAYS_EAGER', default=False, cast=bool)
