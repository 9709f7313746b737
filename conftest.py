# conftest.py
"""
Pytest configuration for FormSight.
Forces the use of test settings regardless of environment variables.
"""
import os

import pytest

os.environ['DJANGO_SETTINGS_MODULE'] = 'formsight.settings.test'
os.environ['DJANGO_ENV'] = 'test'


@pytest.fixture(autouse=True)
def clear_cache():
    """Cada test arranca con la caché vacía (reportes y contadores de rate limit)."""
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()
