import ast
import keyword
import logging
import math
from tokenize import TokenError

import sympy as sp
from sympy.parsing.sympy_parser import auto_number, auto_symbol, convert_xor, parse_expr

from .errors import AlgebraicError, ParseError, ShapeError

logger = logging.getLogger(__name__)

FIELD_SYMBOL_NAME = "phi"
DEFAULT_MAX_EXPRESSION_LENGTH = 500

# literal exponents and literal results beyond these are refused before
# sympy evaluates them, e.g. 9**9**9
MAX_LITERAL_EXPONENT = 1000
MAX_LITERAL_DIGITS = 10000

_UNDEFINED_VALUES = (sp.zoo, sp.nan, sp.oo, -sp.oo)

ALLOWED_FUNCTIONS = (
    'sin', 'cos', 'tan', 'cot', 'sec', 'csc',
    'asin', 'acos', 'atan', 'acot', 'atan2',
    'sinh', 'cosh', 'tanh', 'coth', 'asinh', 'acosh', 'atanh',
    'exp', 'log', 'sqrt', 'Abs', 'sign', 'Heaviside', 'Min', 'Max',
)

# everything user text can reach; the empty __builtins__ keeps eval from
# inserting the real ones
SAFE_GLOBALS = {name: getattr(sp, name) for name in ALLOWED_FUNCTIONS}
SAFE_GLOBALS.update({
    'pi': sp.pi, 'E': sp.E, 'I': sp.I,
    'oo': sp.oo, 'zoo': sp.zoo, 'nan': sp.nan,
    # names emitted by the parser transformations
    'Symbol': sp.Symbol, 'Function': sp.Function,
    'Integer': sp.Integer, 'Float': sp.Float, 'Rational': sp.Rational,
    '__builtins__': {},
})

TRANSFORMATIONS = (auto_symbol, auto_number, convert_xor)

_ALLOWED_NODES = (
    ast.Expression, ast.BinOp, ast.UnaryOp, ast.Call, ast.Name, ast.Load, ast.Constant,
    ast.Add, ast.Sub, ast.Mult, ast.Div, ast.Pow, ast.Mod,
    ast.UAdd, ast.USub,
)


def split_coordinates(coordinates):
    """
    Accepts either a comma-separated string ("t, x, y, z") or a list of names
    and returns a list of stripped names.
    """
    if isinstance(coordinates, str):
        names = coordinates.split(',')
    else:
        names = list(coordinates)
    return [str(name).strip() for name in names]


def parse_coordinates(coordinates):
    """
    Builds the coordinate symbols.

    Args:
        coordinates (str | list[str]): coordinate names, e.g. ['t', 'x', 'y', 'z']

    Returns:
        tuple[sympy.Symbol, ...]: one symbol per coordinate, in input order

    Raises:
        ParseError: empty, invalid, duplicated or reserved names
    """
    names = split_coordinates(coordinates)
    if not names or names == ['']:
        raise ParseError("At least one coordinate is required")

    seen = set()
    for name in names:
        if not name:
            raise ParseError("Coordinate names must not be empty")
        if not name.isidentifier() or keyword.iskeyword(name):
            raise ParseError(f"Invalid coordinate name: '{name}'")
        if name == FIELD_SYMBOL_NAME:
            raise ParseError(
                f"Coordinate name '{FIELD_SYMBOL_NAME}' is reserved for the scalar field"
            )
        if name in seen:
            raise ParseError(f"Duplicate coordinate name: '{name}'")
        seen.add(name)

    logger.debug(f"Parsed {len(names)} coordinates: {', '.join(names)}")
    return tuple(sp.Symbol(name) for name in names)


def build_namespace(coordinate_symbols, field_symbol):
    local_dict = {str(sym): sym for sym in coordinate_symbols}
    local_dict[str(field_symbol)] = field_symbol
    return local_dict


def _literal_log10(node, label):
    """
    Upper bound of log10|value| for a purely numeric subtree, None when the
    subtree contains a name.
    """
    if isinstance(node, ast.Constant):
        value = abs(node.value)
        return math.log10(value) if value > 1 else 0.0
    if isinstance(node, ast.UnaryOp):
        return _literal_log10(node.operand, label)
    if not isinstance(node, ast.BinOp):
        return None

    left = _literal_log10(node.left, label)
    right = _literal_log10(node.right, label)
    if isinstance(node.op, ast.Pow):
        if right is None:
            return None
        if right > math.log10(MAX_LITERAL_EXPONENT):
            raise ParseError(f"Exponent in {label} is too large (limit {MAX_LITERAL_EXPONENT})")
        if left is None:
            return None
        digits = left * 10 ** right
        if digits > MAX_LITERAL_DIGITS:
            raise ParseError(f"Number in {label} is too large (over {MAX_LITERAL_DIGITS} digits)")
        return digits
    if left is None or right is None:
        return None
    if isinstance(node.op, (ast.Add, ast.Sub)):
        return max(left, right) + math.log10(2)
    return left + right


def check_syntax(text, label="expression"):
    """
    Accepts arithmetic over names, numbers and plain function calls only:
    no strings, attributes, subscripts, keywords or lambdas, and no literal
    powers large enough to stall the interpreter.

    Raises:
        ParseError
    """
    try:
        # '^' is read as a power, as parse_expr does with convert_xor
        tree = ast.parse(text.replace('^', '**'), mode='eval')
    except (SyntaxError, ValueError) as e:
        raise ParseError(f"Could not parse {label} '{text}'") from e

    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            raise ParseError(f"Invalid {label}: '{text}'")
        if isinstance(node, ast.Constant) and (
                isinstance(node.value, bool) or not isinstance(node.value, (int, float))):
            raise ParseError(f"Invalid {label}: '{text}'")
        if isinstance(node, ast.Call) and not isinstance(node.func, ast.Name):
            raise ParseError(f"Invalid {label}: '{text}'")
        if isinstance(node, ast.Name) and node.id.startswith('_'):
            raise ParseError(f"Invalid {label}: '{text}'")

    _literal_log10(tree.body, label)
    return tree


def parse_expression(text, local_dict, label="expression",
                     max_length=DEFAULT_MAX_EXPRESSION_LENGTH):
    """
    Parses a single user expression.

    The text is checked with ``check_syntax`` first and then evaluated by
    ``parse_expr`` against ``SAFE_GLOBALS`` only. Names that are not in
    ``local_dict`` become free symbols (parameters such as M or k) and
    ``f(t)`` becomes an undefined function.
    """
    if text is None:
        raise ParseError(f"Missing {label}")
    if not isinstance(text, str):
        text = str(text)
    text = text.strip()
    if not text:
        raise ParseError(f"Empty {label}")
    if len(text) > max_length:
        raise ParseError(f"{label} is longer than {max_length} characters")
    if '__' in text:
        raise ParseError(f"Invalid {label}: '{text}'")

    check_syntax(text, label)
    try:
        expr = parse_expr(text, local_dict=dict(local_dict), global_dict=dict(SAFE_GLOBALS),
                          transformations=TRANSFORMATIONS)
    except (sp.SympifyError, SyntaxError, TokenError, TypeError, ValueError,
            AttributeError, NameError) as e:
        logger.warning(f"Could not parse {label} '{text}': {e}")
        raise ParseError(f"Could not parse {label} '{text}'") from e

    if not isinstance(expr, sp.Expr):
        raise ParseError(f"{label} '{text}' is not a scalar expression")
    if expr.has(*_UNDEFINED_VALUES):
        raise AlgebraicError(f"{label} '{text}' evaluates to an undefined value ({expr})")
    return expr


def parse_matrix(rows, n, local_dict, label="matrix",
                 max_length=DEFAULT_MAX_EXPRESSION_LENGTH):
    """
    Parses an n x n grid of expression strings into a sympy Matrix.

    Raises:
        ShapeError: the grid is not n x n
        ParseError / AlgebraicError: an entry cannot be parsed
    """
    if not isinstance(rows, (list, tuple)) or len(rows) != n:
        got = len(rows) if isinstance(rows, (list, tuple)) else type(rows).__name__
        raise ShapeError(f"{label} must have {n} rows to match {n} coordinates, got {got}")

    entries = []
    for i, row in enumerate(rows):
        if not isinstance(row, (list, tuple)) or len(row) != n:
            got = len(row) if isinstance(row, (list, tuple)) else type(row).__name__
            raise ShapeError(f"Row {i} of {label} must have {n} entries, got {got}")
        entries.append([
            parse_expression(item, local_dict, f"{label}[{i}][{j}]", max_length)
            for j, item in enumerate(row)
        ])
    return sp.Matrix(entries)
