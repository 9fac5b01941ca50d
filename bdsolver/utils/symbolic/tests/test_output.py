import unittest

import sympy as sp

from bdsolver.utils.symbolic.brans_dicke import BransDickeFieldEquations, FieldEquationInput
from bdsolver.utils.symbolic.output import (
    build_result_payload,
    component_lines,
    einstein_latex,
    matrix_to_str_list,
)


class TestOutput(unittest.TestCase):

    def setUp(self):
        self.t = sp.Symbol("t")

    def test_component_lines_skip_zeros(self):
        matrix = sp.Matrix([[1 / self.t, 0], [0, 0]])
        self.assertEqual(component_lines(matrix), [r"G_{00} = \frac{1}{t}"])

    def test_component_lines_for_zero_tensor(self):
        self.assertEqual(component_lines(sp.zeros(3, 3)), [r"G_{\mu\nu} = 0"])

    def test_matrix_to_str_list(self):
        matrix = sp.Matrix([[self.t**2, 0], [1, -self.t]])
        self.assertEqual(matrix_to_str_list(matrix), [["t**2", "0"], ["1", "-t"]])

    def test_einstein_latex_simplify(self):
        x = sp.Symbol("x")
        matrix = sp.Matrix([[sp.sin(x)**2 + sp.cos(x)**2]])
        self.assertEqual(einstein_latex(matrix, simplify=True), sp.latex(sp.Matrix([[1]])))
        self.assertNotEqual(einstein_latex(matrix), sp.latex(sp.Matrix([[1]])))


class TestBuildResultPayload(unittest.TestCase):

    def setUp(self):
        field_input = FieldEquationInput.from_dict({
            "coordinates": ["t", "x"],
            "omega": "1",
            "metric": [["-1", "0"], ["0", "1"]],
            "energy_momentum": [["rho", "0"], ["0", "0"]],
            "scalar_field": "t",
            "potential": "phi**2",
        })
        self.result = BransDickeFieldEquations(field_input).compute_all()

    def test_payload_shape(self):
        payload = build_result_payload(self.result)
        self.assertTrue(payload["success"])
        self.assertEqual(payload["dimension"], 2)
        self.assertEqual(payload["coordinates"], ["t", "x"])
        self.assertEqual(payload["latex"], sp.latex(self.result.einstein))
        self.assertEqual(len(payload["einsteinTensor"]), 2)
        self.assertFalse(payload["simplified"])

    def test_derived_quantities(self):
        derived = build_result_payload(self.result)["derived"]
        self.assertEqual(derived["potential"], "t^{2}")
        self.assertEqual(derived["potentialDerivative"], "2 t")
        self.assertEqual(derived["fieldDerivatives"], ["1", "0"])
        self.assertNotIn("determinant", derived)

    def test_simplified_payload(self):
        payload = build_result_payload(self.result, simplify=True)
        self.assertTrue(payload["simplified"])
        self.assertEqual(len(payload["components"]), len(component_lines(self.result.einstein)))


if __name__ == "__main__":
    unittest.main()
