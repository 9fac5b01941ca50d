# equations/views/field_equations_viewset.py

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from bdsolver.utils.symbolic.errors import FieldEquationError
from bdsolver.utils.symbolic.theory import THEORY
from equations.serializers import FieldEquationRequestSerializer
from equations.symbolics import compute_within_time_limit
from equations.tasks import evaluate_field_equations_task

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    'ParseError':        status.HTTP_400_BAD_REQUEST,
    'ShapeError':        status.HTTP_400_BAD_REQUEST,
    'AlgebraicError':    status.HTTP_422_UNPROCESSABLE_ENTITY,
    'EvaluationTimeout': status.HTTP_504_GATEWAY_TIMEOUT,
}


def validation_error_response(serializer):
    return Response({
        'success':   False,
        'errorType': 'ValidationError',
        'error':     'Invalid input',
        'details':   serializer.errors,
    }, status=status.HTTP_400_BAD_REQUEST)


class FieldEquationViewSet(viewsets.ViewSet):
    """
    Brans-Dicke field equations: the Einstein tensor for a metric, an
    energy-momentum tensor, a scalar field and its potential.
    """

    def create(self, request):
        """Synchronous evaluation, bounded by FIELD_EQUATIONS_SYNC_TIME_LIMIT."""
        serializer = FieldEquationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        data = serializer.validated_data
        try:
            result = compute_within_time_limit(
                field_input      = serializer.field_input(),
                simplify         = data.get('simplify', False),
                evaluation_point = data.get('evaluation_point'),
            )
        except FieldEquationError as e:
            logger.warning(f"Field equation evaluation failed ({e.error_type}): {e}")
            return Response(e.to_dict(), status=ERROR_STATUS.get(e.error_type, status.HTTP_400_BAD_REQUEST))
        except Exception as e:
            logger.error("Field equation evaluation error", exc_info=True)
            return Response({'success': False, 'errorType': 'InternalError', 'error': str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='submit')
    def submit(self, request):
        serializer = FieldEquationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer)

        data = serializer.validated_data
        async_result = evaluate_field_equations_task.delay(
            serializer.field_input().to_dict(),
            simplify=data.get('simplify', False),
            evaluation_point=data.get('evaluation_point'),
        )
        logger.info(f"Queued Brans-Dicke evaluation as task {async_result.id}")
        return Response({
            'success': True,
            'task_id': async_result.id,
            'status':  async_result.status,
        }, status=status.HTTP_202_ACCEPTED)

    @action(detail=False, methods=['get'], url_path='theory')
    def theory(self, request):
        return Response(THEORY)
