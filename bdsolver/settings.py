"""
Django settings for bdsolver - development version.
"""
from .settings_base import *

DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True  # Only use during development

# Set to true to run tasks in-process without a broker; eager tasks ignore
# the soft and hard time limits
CELERY_TASK_ALWAYS_EAGER = os.environ.get('CELERY_TASK_ALWAYS_EAGER', 'False').lower() == 'true'

LOGGING = build_logging(BASE_DIR, level='DEBUG')
