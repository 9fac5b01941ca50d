import sympy as sp
import logging

logger = logging.getLogger(__name__)

MAX_SIMPLIFY_OPS = 500

_TRIG_NAMES = ('sin', 'cos', 'tan', 'cot', 'sec', 'csc', 'sinh', 'cosh', 'tanh')


def convert_to_fractions(expr):
    """
    Replaces floating point numbers in a SymPy expression with rationals,
    e.g. 0.5*x -> x/2.
    """
    if not isinstance(expr, sp.Basic):
        expr = sp.sympify(expr)
    floats = expr.atoms(sp.Float)
    if not floats:
        return expr
    replacements = {f: sp.nsimplify(f, rational=True) for f in floats}
    return expr.xreplace(replacements)


def custom_simplify(expr):
    """
    Custom simplification function for SymPy expressions.
    Uses multiple simplification strategies.

    Args:
        expr: SymPy expression to simplify

    Returns:
        Simplified SymPy expression; the input unchanged when SymPy fails
    """
    if not isinstance(expr, sp.Basic):
        expr = sp.sympify(expr)
    if expr.is_number and expr.is_zero:
        return sp.S.Zero

    result = expr
    try:
        # Skip for very complex expressions to avoid long computation times
        if expr.count_ops() > MAX_SIMPLIFY_OPS:
            logger.warning(f"Expression too complex ({expr.count_ops()} operations), limiting simplification")
            return sp.powsimp(expr)

        result = convert_to_fractions(result)
        result = sp.cancel(result)

        if any(name in str(result) for name in _TRIG_NAMES):
            result = sp.trigsimp(result)

        result = sp.powsimp(result)
        result = sp.simplify(result)
    except Exception as e:
        logger.warning(f"Simplification failed for {expr}: {e}")
    return result


def simplify_matrix(matrix):
    return matrix.applyfunc(custom_simplify)
