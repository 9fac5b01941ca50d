# equations/symbolics.py
import logging
import multiprocessing

from django.conf import settings

from bdsolver.utils.symbolic.brans_dicke import BransDickeFieldEquations
from bdsolver.utils.symbolic.errors import EvaluationTimeout
from bdsolver.utils.symbolic.output import build_result_payload

logger = logging.getLogger(__name__)


def compute_field_equations(*, field_input, simplify=False, evaluation_point=None,
                            max_expression_length=None):
    """
    Entry-point for Brans-Dicke field equation evaluations.

    Args:
        field_input (FieldEquationInput): the complete input set
        simplify (bool): simplify every component before rendering
        evaluation_point (list[float], optional): coordinates at which the
            tensor is also evaluated numerically
        max_expression_length (int, optional): defaults to the
            FIELD_EQUATIONS_MAX_EXPRESSION_LENGTH setting

    Returns:
        dict: JSON-ready payload with the LaTeX tensor and derived quantities

    Raises:
        FieldEquationError: ParseError, ShapeError or AlgebraicError
    """
    if max_expression_length is None:
        max_expression_length = settings.FIELD_EQUATIONS_MAX_EXPRESSION_LENGTH

    logger.info(f"Starting Brans-Dicke evaluation for coordinates {list(field_input.coordinates)}")

    engine = BransDickeFieldEquations(field_input, max_expression_length)
    result = engine.compute_all()
    payload = build_result_payload(result, simplify=simplify)

    if evaluation_point is not None:
        values = engine.evaluate_at(evaluation_point, result)
        payload['evaluationPoint'] = [float(x) for x in evaluation_point]
        payload['evaluatedTensor'] = values.tolist()

    logger.info("Brans-Dicke evaluation completed successfully")
    return payload


def compute_within_time_limit(timeout=None, **kwargs):
    """
    Runs compute_field_equations in a one-process pool and terminates the
    worker once ``timeout`` seconds (FIELD_EQUATIONS_SYNC_TIME_LIMIT) pass.

    Raises:
        EvaluationTimeout: the worker did not finish in time
        FieldEquationError: raised by the evaluation itself
    """
    if timeout is None:
        timeout = settings.FIELD_EQUATIONS_SYNC_TIME_LIMIT
    # resolved here so the worker never reads Django settings
    kwargs.setdefault('max_expression_length', settings.FIELD_EQUATIONS_MAX_EXPRESSION_LENGTH)

    with multiprocessing.Pool(processes=1) as pool:
        pending = pool.apply_async(compute_field_equations, kwds=kwargs)
        try:
            return pending.get(timeout=timeout)
        except multiprocessing.TimeoutError as e:
            logger.warning(f"Brans-Dicke evaluation exceeded {timeout} seconds, worker terminated")
            raise EvaluationTimeout(f"Evaluation exceeded {timeout} seconds") from e
