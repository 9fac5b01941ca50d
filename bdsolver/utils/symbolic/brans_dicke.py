"""
Generalized Einstein tensor of Brans-Dicke scalar-tensor gravity.

    G_{mu nu} = (8 pi / phi) T + (omega / phi^2) (d_mu phi d_nu phi - 1/2 g_{mu nu} d_s phi d^s phi)
              + (1 / phi) (d_mu d_nu phi - g_{mu nu} box phi) - 1/2 g_{mu nu} V / phi

    box phi = (8 pi T + 2 V - phi V') / (3 + 2 omega)

where T = g^{mu nu} T_{mu nu} is the trace of the energy-momentum tensor.
The matter term uses the trace, so every entry receives the same matter
contribution.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef

from .errors import AlgebraicError, ShapeError
from .output import einstein_latex
from .parse_input import (
    DEFAULT_MAX_EXPRESSION_LENGTH,
    FIELD_SYMBOL_NAME,
    build_namespace,
    parse_coordinates,
    parse_expression,
    parse_matrix,
    split_coordinates,
)

logger = logging.getLogger(__name__)

HALF = sp.Rational(1, 2)
TERM_NAMES = ("matter", "kinetic", "second_derivative", "potential")

INPUT_ALIASES = {
    "energyMomentum": "energy_momentum",
    "energy_momentum_tensor": "energy_momentum",
    "phi": "scalar_field",
    "scalarField": "scalar_field",
    "evaluationPoint": "evaluation_point",
}


def normalize_input_keys(data):
    """Maps the camelCase keys sent by the frontend onto the snake_case ones."""
    return {INPUT_ALIASES.get(key, key): value for key, value in data.items()}


def _freeze_grid(rows):
    if not isinstance(rows, (list, tuple)):
        return rows
    return tuple(tuple(row) if isinstance(row, (list, tuple)) else row for row in rows)


@dataclass(frozen=True)
class FieldEquationInput:
    """The complete input set of one evaluation, built right before it runs."""
    coordinates: Tuple[str, ...]
    omega: str
    metric: Tuple[Tuple[str, ...], ...]
    energy_momentum: Tuple[Tuple[str, ...], ...]
    scalar_field: str
    potential: str

    @classmethod
    def from_dict(cls, data):
        data = normalize_input_keys(data)
        return cls(
            coordinates=tuple(split_coordinates(data.get("coordinates") or ())),
            omega=data.get("omega"),
            metric=_freeze_grid(data.get("metric")),
            energy_momentum=_freeze_grid(data.get("energy_momentum")),
            scalar_field=data.get("scalar_field"),
            potential=data.get("potential"),
        )

    def to_dict(self):
        def grid(rows):
            if not isinstance(rows, (list, tuple)):
                return rows
            return [list(row) if isinstance(row, (list, tuple)) else row for row in rows]

        return {
            "coordinates": list(self.coordinates),
            "omega": self.omega,
            "metric": grid(self.metric),
            "energy_momentum": grid(self.energy_momentum),
            "scalar_field": self.scalar_field,
            "potential": self.potential,
        }


@dataclass(frozen=True)
class BransDickeResult:
    coordinates: Tuple[sp.Symbol, ...]
    einstein: sp.Matrix
    inverse_metric: sp.Matrix
    determinant: sp.Expr
    field_derivatives: Tuple[sp.Expr, ...]
    kinetic_term: sp.Expr
    energy_momentum_trace: sp.Expr
    box_phi: sp.Expr
    scalar_field: sp.Expr
    potential: sp.Expr
    potential_derivative: sp.Expr

    @property
    def dimension(self):
        return len(self.coordinates)


def _is_undefined(expr):
    return expr.has(sp.zoo, sp.nan)


class BransDickeFieldEquations:
    def __init__(self, field_input, max_expression_length=DEFAULT_MAX_EXPRESSION_LENGTH):
        """
        Parses the input set. The order matters: V' is taken with respect to
        the abstract field symbol before the user's phi(x) replaces it.

        Args:
            field_input (FieldEquationInput): coordinates, omega, g, T, phi and V
            max_expression_length (int): upper bound on each input string

        Raises:
            ParseError, ShapeError, AlgebraicError
        """
        self.field_input = field_input
        limit = max_expression_length

        self.coord_symbols = parse_coordinates(field_input.coordinates)
        self.n = len(self.coord_symbols)
        self.field_symbol = sp.Symbol(FIELD_SYMBOL_NAME)
        local_dict = build_namespace(self.coord_symbols, self.field_symbol)
        logger.info(f"Initializing Brans-Dicke field equations in {self.n} dimensions")

        self.omega = parse_expression(field_input.omega, local_dict, "omega", limit)
        self.g = parse_matrix(field_input.metric, self.n, local_dict, "metric", limit)
        self.T = parse_matrix(field_input.energy_momentum, self.n, local_dict,
                              "energy-momentum tensor", limit)

        potential = parse_expression(field_input.potential, local_dict, "potential", limit)
        potential_derivative = sp.diff(potential, self.field_symbol)

        self.phi = parse_expression(field_input.scalar_field, local_dict, "scalar field", limit)
        self.potential_derivative = potential_derivative.subs(self.field_symbol, self.phi)
        self.potential = potential.subs(self.field_symbol, self.phi)

    def invert_metric(self):
        """Returns (g^{-1}, det g); a singular metric is an AlgebraicError."""
        determinant = self.g.det()
        if sp.simplify(determinant) == 0:
            raise AlgebraicError("Metric tensor is singular (determinant is zero)")
        try:
            g_inv = self.g.inv()
        except (ValueError, ZeroDivisionError) as e:
            raise AlgebraicError(f"Could not invert the metric tensor: {e}") from e
        return g_inv, determinant

    def _intermediates(self) -> Dict[str, object]:
        n = self.n
        dphi = tuple(sp.diff(self.phi, coord) for coord in self.coord_symbols)
        g_inv, determinant = self.invert_metric()

        # full double sums over (mu, nu), both orderings included
        kinetic_term = sum(
            (g_inv[mu, nu] * dphi[mu] * dphi[nu] for mu in range(n) for nu in range(n)),
            sp.S.Zero,
        )
        trace = sum(
            (g_inv[mu, nu] * self.T[mu, nu] for mu in range(n) for nu in range(n)),
            sp.S.Zero,
        )

        denominator = 3 + 2 * self.omega
        if sp.simplify(denominator) == 0:
            raise AlgebraicError("3 + 2*omega vanishes; the scalar field equation is undefined")
        box_phi = (8 * sp.pi * trace
                   + 2 * self.potential - self.phi * self.potential_derivative) / denominator

        return {
            "dphi": dphi,
            "g_inv": g_inv,
            "determinant": determinant,
            "kinetic_term": kinetic_term,
            "trace": trace,
            "box_phi": box_phi,
        }

    def _terms(self, mu, nu, parts):
        phi = self.phi
        g = self.g
        dphi = parts["dphi"]
        return {
            "matter": (8 * sp.pi / phi) * parts["trace"],
            "kinetic": (self.omega / phi**2)
                       * (dphi[mu] * dphi[nu] - HALF * g[mu, nu] * parts["kinetic_term"]),
            "second_derivative": (1 / phi) * (
                sp.diff(phi, self.coord_symbols[mu], self.coord_symbols[nu])
                - g[mu, nu] * parts["box_phi"]
            ),
            "potential": -HALF * g[mu, nu] * self.potential / phi,
        }

    def term_components(self, mu, nu):
        """Named contributions to G_{mu nu}; their sum is the tensor entry."""
        return self._terms(mu, nu, self._intermediates())

    def compute_all(self) -> BransDickeResult:
        n = self.n
        parts = self._intermediates()

        G = sp.zeros(n, n)
        for mu in range(n):
            for nu in range(n):
                terms = self._terms(mu, nu, parts)
                G[mu, nu] = sum((terms[name] for name in TERM_NAMES), sp.S.Zero)

        undefined = [(mu, nu) for mu in range(n) for nu in range(n) if _is_undefined(G[mu, nu])]
        if undefined:
            mu, nu = undefined[0]
            raise AlgebraicError(
                f"Einstein tensor component G_{mu}{nu} is undefined "
                f"(division by zero, e.g. a vanishing scalar field)"
            )

        logger.info("Brans-Dicke Einstein tensor computed")
        return BransDickeResult(
            coordinates=self.coord_symbols,
            einstein=G,
            inverse_metric=parts["g_inv"],
            determinant=parts["determinant"],
            field_derivatives=parts["dphi"],
            kinetic_term=parts["kinetic_term"],
            energy_momentum_trace=parts["trace"],
            box_phi=parts["box_phi"],
            scalar_field=self.phi,
            potential=self.potential,
            potential_derivative=self.potential_derivative,
        )

    def evaluate_at(self, point, result=None):
        """
        Numerically evaluates the Einstein tensor at a coordinate point.

        Returns:
            numpy.ndarray: n x n float array
        """
        if result is None:
            result = self.compute_all()
        if len(point) != self.n:
            raise ShapeError(f"evaluation_point must have {self.n} entries, got {len(point)}")

        G = result.einstein
        extra = sorted(str(sym) for sym in G.free_symbols - set(self.coord_symbols))
        if extra:
            raise AlgebraicError(
                f"Cannot evaluate numerically, free parameters remain: {', '.join(extra)}"
            )
        if G.atoms(AppliedUndef):
            raise AlgebraicError("Cannot evaluate numerically, undefined functions remain")

        f_einstein = sp.lambdify(self.coord_symbols, G, modules=["numpy"])
        with np.errstate(all="ignore"):
            values = np.array(f_einstein(*np.asarray(point, dtype=float)), dtype=complex)

        if not np.all(np.isfinite(values)):
            raise AlgebraicError(f"Einstein tensor is not finite at {list(point)}")
        if np.any(np.abs(values.imag) > 1e-12):
            raise AlgebraicError(f"Einstein tensor is complex at {list(point)}")
        return values.real.reshape(self.n, self.n)


def evaluate_field_equations(field_input, simplify=False,
                             max_expression_length=DEFAULT_MAX_EXPRESSION_LENGTH):
    """Returns the LaTeX source of the Einstein tensor for ``field_input``."""
    result = BransDickeFieldEquations(field_input, max_expression_length).compute_all()
    return einstein_latex(result.einstein, simplify=simplify)
