from django.http import JsonResponse
from django.views.decorators.http import require_GET
import time, logging

from celery.result import AsyncResult
from rest_framework.decorators import api_view
from rest_framework.response import Response

from bdsolver.celery import app as celery_app

logger = logging.getLogger(__name__)


@require_GET
def health_check(request):
    return JsonResponse({'status': 'ok', 'timestamp': time.time()})


@api_view(['GET'])
def task_status(request, task_id):
    """State of a background evaluation; carries the payload once it is ready."""
    result = AsyncResult(task_id, app=celery_app)
    payload = {'task_id': task_id, 'status': result.status}

    if result.successful():
        payload['result'] = result.result
    elif result.failed():
        logger.error(f"Task {task_id} failed: {result.result}")
        payload['error'] = str(result.result)
    return Response(payload)
