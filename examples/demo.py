#!/usr/bin/env python3
"""
Demo script for the Brans-Dicke field equation solver.

Runs the flat Minkowski sanity check and a spatially flat cosmology with a
massive scalar field, and prints the LaTeX output of both.
"""

import sys
import os

import sympy as sp

# Add the parent directory to the Python path to import the bdsolver package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bdsolver.utils.symbolic import (
    BransDickeFieldEquations,
    FieldEquationError,
    FieldEquationInput,
)
from bdsolver.utils.symbolic.output import component_lines, einstein_latex


def minkowski_demo():
    """Flat space, constant field, no matter: the Einstein tensor vanishes."""
    print("\n=== MINKOWSKI SANITY CHECK ===")
    field_input = FieldEquationInput.from_dict({
        "coordinates": "t, x, y, z",
        "omega": "0",
        "metric": [["-1", "0", "0", "0"],
                   ["0", "1", "0", "0"],
                   ["0", "0", "1", "0"],
                   ["0", "0", "0", "1"]],
        "energy_momentum": [["0"] * 4 for _ in range(4)],
        "scalar_field": "1",
        "potential": "0",
    })
    result = BransDickeFieldEquations(field_input).compute_all()
    print(einstein_latex(result.einstein))


def cosmology_demo():
    """FLRW metric with scale factor a(t), perfect fluid and V = m^2 phi^2."""
    print("\n=== FLAT FLRW COSMOLOGY ===")
    field_input = FieldEquationInput.from_dict({
        "coordinates": ["t", "x", "y", "z"],
        "omega": "omega",
        "metric": [["-1", "0", "0", "0"],
                   ["0", "a(t)**2", "0", "0"],
                   ["0", "0", "a(t)**2", "0"],
                   ["0", "0", "0", "a(t)**2"]],
        "energy_momentum": [["rho", "0", "0", "0"],
                            ["0", "p*a(t)**2", "0", "0"],
                            ["0", "0", "p*a(t)**2", "0"],
                            ["0", "0", "0", "p*a(t)**2"]],
        "scalar_field": "t**2",
        "potential": "m**2*phi**2",
    })
    engine = BransDickeFieldEquations(field_input)
    result = engine.compute_all()

    print(f"\nTrace of T: {sp.simplify(result.energy_momentum_trace)}")
    print(f"Kinetic term: {result.kinetic_term}")
    print(f"Box phi: {sp.simplify(result.box_phi)}")

    print("\nNon-zero Einstein tensor components (simplified):")
    for line in component_lines(result.einstein.applyfunc(sp.simplify)):
        print(line)

    print("\nLaTeX:")
    print(einstein_latex(result.einstein, simplify=True))


def failure_demo():
    print("\n=== ERROR REPORTING ===")
    field_input = FieldEquationInput.from_dict({
        "coordinates": ["t", "x"],
        "omega": "0",
        "metric": [["1", "1"], ["1", "1"]],
        "energy_momentum": [["0", "0"], ["0", "0"]],
        "scalar_field": "1",
        "potential": "0",
    })
    try:
        BransDickeFieldEquations(field_input).compute_all()
    except FieldEquationError as e:
        print(e.to_dict())


if __name__ == "__main__":
    minkowski_demo()
    cosmology_demo()
    failure_demo()
