"""
Error types raised by the symbolic field-equation layer.

Every error knows how to describe itself as the JSON body returned by the
API and by the background task, so callers never have to inspect messages.
"""


class FieldEquationError(ValueError):
    error_type = "FieldEquationError"

    def to_dict(self):
        return {
            "success": False,
            "errorType": self.error_type,
            "error": str(self),
        }


class ParseError(FieldEquationError):
    """An input string is not a valid symbolic expression."""
    error_type = "ParseError"


class ShapeError(FieldEquationError):
    """Coordinate count and matrix dimensions do not agree."""
    error_type = "ShapeError"


class AlgebraicError(FieldEquationError):
    """Sympy cannot carry out an operation, e.g. inverting a singular metric."""
    error_type = "AlgebraicError"


class EvaluationTimeout(FieldEquationError):
    error_type = "EvaluationTimeout"
