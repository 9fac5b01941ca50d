# bdsolver/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter
import logging

from equations.views.field_equations_viewset import FieldEquationViewSet
from equations.views.views import health_check, task_status

logger = logging.getLogger(__name__)

router = DefaultRouter()
router.register(r'field-equations', FieldEquationViewSet, basename='field-equation')

urlpatterns = [
    # endpoints of FieldEquationViewSet:
    #   POST /api/field-equations/          - synchronous evaluation
    #   POST /api/field-equations/submit/   - background evaluation (Celery)
    #   GET  /api/field-equations/theory/   - reference formulas
    path('api/', include(router.urls)),

    path('api/tasks/<str:task_id>/', task_status, name='task_status'),
    path('api/health/', health_check, name='health_check'),
]

for entry in urlpatterns:
    logger.debug(f"URL: {entry.pattern}")
