"""
Shared Django settings for the bdsolver project.

Development, test and production settings import everything from here.
"""
from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('SECRET_KEY', 'django-insecure-bdsolver-development-key')

DEBUG = False

ALLOWED_HOSTS = ['localhost', '127.0.0.1']

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.staticfiles',
    'rest_framework',
    'corsheaders',
    'equations',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
]

ROOT_URLCONF = 'bdsolver.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'bdsolver.wsgi.application'

# Nothing is persisted: every evaluation is built from the request and discarded
DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
}

# CELERY
CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE

# FIELD EQUATION SOLVER LIMITS
FIELD_EQUATIONS_MAX_DIMENSION = int(os.environ.get('FIELD_EQUATIONS_MAX_DIMENSION', 8))
FIELD_EQUATIONS_MAX_EXPRESSION_LENGTH = int(os.environ.get('FIELD_EQUATIONS_MAX_EXPRESSION_LENGTH', 500))
FIELD_EQUATIONS_SOFT_TIME_LIMIT = int(os.environ.get('FIELD_EQUATIONS_SOFT_TIME_LIMIT', 60))
FIELD_EQUATIONS_TIME_LIMIT = int(os.environ.get('FIELD_EQUATIONS_TIME_LIMIT', 90))
# wall-clock bound of POST /api/field-equations/, enforced in a child process
FIELD_EQUATIONS_SYNC_TIME_LIMIT = float(os.environ.get('FIELD_EQUATIONS_SYNC_TIME_LIMIT', 30))

# CORS
CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
CORS_ALLOW_METHODS = [
    'GET',
    'OPTIONS',
    'POST',
]

APPEND_SLASH = False


def build_logging(base_dir, level='INFO', filename='django.log'):
    """
    LOGGING dict with a console handler and a file handler in logs/.
    The file handler is dropped when the logs directory cannot be created.
    """
    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'verbose': {
                'format': '{levelname} {asctime} {module} {message}',
                'style': '{',
            }
        },
        'handlers': {
            'console': {
                'level': level,
                'class': 'logging.StreamHandler',
                'formatter': 'verbose',
            },
            'file': {
                'level': level,
                'class': 'logging.FileHandler',
                'filename': os.path.join(base_dir, 'logs', filename),
                'formatter': 'verbose',
            },
        },
        'root': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
        },
        'loggers': {
            'django': {
                'handlers': ['console', 'file'],
                'level': 'INFO',
                'propagate': False,
            },
            'equations': {
                'handlers': ['console', 'file'],
                'level': level,
                'propagate': False,
            },
            'bdsolver': {
                'handlers': ['console', 'file'],
                'level': level,
                'propagate': False,
            },
        }
    }

    try:
        os.makedirs(os.path.join(base_dir, 'logs'), exist_ok=True)
    except (IOError, OSError):
        print("Warning: Could not create logs directory. Logging to console only.")
        del logging_config['handlers']['file']
        for logger in list(logging_config['loggers'].values()) + [logging_config['root']]:
            if 'file' in logger['handlers']:
                logger['handlers'].remove('file')
    return logging_config


LOGGING = build_logging(BASE_DIR)
