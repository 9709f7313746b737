"""
WSGI config for formsight project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_ENV', 'production')
os.environ.setdefault('DJANGO_SETTINGS_MODULE', f"formsight.settings.{os.environ['DJANGO_ENV']}")

application = get_wsgi_application()
