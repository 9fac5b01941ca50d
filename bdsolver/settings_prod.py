"""
Production settings for bdsolver.
"""
import warnings

from .settings_base import *  # Import from base settings

# SECURITY SETTINGS
DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'
SECRET_KEY = os.environ.get('SECRET_KEY', 'fallback-key-for-non-production-environment')

# Only use the fallback key for development or testing
if SECRET_KEY == 'fallback-key-for-non-production-environment':
    warnings.warn('Using fallback SECRET_KEY. Set SECRET_KEY environment variable in production.')

# ALLOWED HOSTS
ALLOWED_HOSTS = os.environ.get('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

# CORS settings
CORS_ALLOWED_ORIGINS = [
    origin for origin in os.environ.get('CORS_ALLOWED_ORIGINS', '').split(',') if origin
] or CORS_ALLOWED_ORIGINS
CORS_ALLOWED_ORIGIN_REGEXES = [
    r"^https?://localhost(:\d+)?$",
]

# CSRF SETTINGS
CSRF_TRUSTED_ORIGINS = [
    os.environ.get('FRONTEND_URL', 'http://localhost:3000'),
]

# STATIC FILES
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}

# LOGGING
LOGGING = build_logging('/app' if os.path.exists('/app/logs') else BASE_DIR)
