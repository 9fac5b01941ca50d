import logging

from celery import shared_task
from celery.exceptions import SoftTimeLimitExceeded
from django.conf import settings

from bdsolver.utils.symbolic.brans_dicke import FieldEquationInput
from bdsolver.utils.symbolic.errors import EvaluationTimeout, FieldEquationError
from equations.symbolics import compute_field_equations

logger = logging.getLogger(__name__)


@shared_task(
    soft_time_limit=settings.FIELD_EQUATIONS_SOFT_TIME_LIMIT,
    time_limit=settings.FIELD_EQUATIONS_TIME_LIMIT,
)
def evaluate_field_equations_task(payload: dict, simplify=False, evaluation_point=None):
    """
    Runs one evaluation in a worker, bounded by the Celery time limits.
    Returns a JSON-serializable dict, either the result or the error.
    """
    try:
        return compute_field_equations(
            field_input=FieldEquationInput.from_dict(payload),
            simplify=simplify,
            evaluation_point=evaluation_point,
        )
    except SoftTimeLimitExceeded:
        logger.warning("Brans-Dicke evaluation hit the soft time limit")
        return EvaluationTimeout(
            f"Evaluation exceeded {settings.FIELD_EQUATIONS_SOFT_TIME_LIMIT} seconds"
        ).to_dict()
    except FieldEquationError as e:
        logger.warning(f"Brans-Dicke evaluation failed: {e}")
        return e.to_dict()
    except Exception as e:
        logger.error(f"Error in evaluate_field_equations_task: {e}", exc_info=True)
        return {'success': False, 'errorType': 'InternalError', 'error': str(e)}
