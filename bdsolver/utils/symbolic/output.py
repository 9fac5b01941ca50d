import logging

import sympy as sp

from .simplification.custom_simplify import simplify_matrix

logger = logging.getLogger(__name__)


def matrix_to_str_list(matrix):
    """Convert a sympy matrix to a 2D array of strings"""
    return [[str(matrix[i, j]) for j in range(matrix.shape[1])]
            for i in range(matrix.shape[0])]


def einstein_latex(matrix, simplify=False):
    if simplify:
        matrix = simplify_matrix(matrix)
    return sp.latex(matrix)


def component_lines(matrix, symbol="G"):
    """
    LaTeX lines for the non-zero components, e.g. ``G_{01} = \\frac{1}{t}``.
    """
    rows, cols = matrix.shape
    lines = [
        f"{symbol}_{{{i}{j}}} = {sp.latex(matrix[i, j])}"
        for i in range(rows) for j in range(cols)
        if matrix[i, j] != 0
    ]
    if not lines:
        lines.append(f"{symbol}_{{\\mu\\nu}} = 0")
    return lines


def build_result_payload(result, simplify=False):
    """
    Formats a BransDickeResult for a JSON response.

    The metric determinant is used for the singularity check only and is not
    part of the payload.
    """
    einstein = simplify_matrix(result.einstein) if simplify else result.einstein

    derived = {
        "inverseMetric": sp.latex(result.inverse_metric),
        "fieldDerivatives": [sp.latex(d) for d in result.field_derivatives],
        "kineticTerm": sp.latex(result.kinetic_term),
        "energyMomentumTrace": sp.latex(result.energy_momentum_trace),
        "boxPhi": sp.latex(result.box_phi),
        "scalarField": sp.latex(result.scalar_field),
        "potential": sp.latex(result.potential),
        "potentialDerivative": sp.latex(result.potential_derivative),
    }

    logger.debug(f"Formatting {result.dimension}x{result.dimension} Einstein tensor")
    return {
        "success": True,
        "dimension": result.dimension,
        "coordinates": [str(c) for c in result.coordinates],
        "simplified": bool(simplify),
        "latex": sp.latex(einstein),
        "components": component_lines(einstein),
        "einsteinTensor": matrix_to_str_list(einstein),
        "derived": derived,
    }
