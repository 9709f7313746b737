"""Settings package for FormSight.

The concrete module is chosen by ``DJANGO_SETTINGS_MODULE`` (see manage.py):
``formsight.settings.local``, ``.production`` or ``.test``.
"""
from pathlib import Path

from dotenv import load_dotenv

# Load .env BEFORE any settings module reads its values through decouple
env_path = Path(__file__).resolve().parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)
