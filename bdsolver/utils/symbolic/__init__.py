from .brans_dicke import (
    BransDickeFieldEquations,
    BransDickeResult,
    FieldEquationInput,
    evaluate_field_equations,
)
from .errors import (
    AlgebraicError,
    EvaluationTimeout,
    FieldEquationError,
    ParseError,
    ShapeError,
)

__all__ = [
    'BransDickeFieldEquations',
    'BransDickeResult',
    'FieldEquationInput',
    'evaluate_field_equations',
    'FieldEquationError',
    'ParseError',
    'ShapeError',
    'AlgebraicError',
    'EvaluationTimeout',
]
