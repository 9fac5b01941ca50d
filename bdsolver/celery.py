# bdsolver/celery.py
import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bdsolver.settings')

app = Celery('bdsolver')

# Django settings with the CELERY_ prefix; broker and result backend come
# from the CELERY_BROKER_URL / CELERY_RESULT_BACKEND environment variables
app.config_from_object('django.conf:settings', namespace='CELERY')

app.autodiscover_tasks()
