from django.test import SimpleTestCase, override_settings

from bdsolver.utils.symbolic.brans_dicke import FieldEquationInput
from equations.serializers import FieldEquationRequestSerializer


class FieldEquationRequestSerializerTests(SimpleTestCase):

    def valid_data(self, **overrides):
        data = {
            "coordinates": ["t", "x"],
            "omega": 1.5,
            "metric": [["-1", 0], ["0", "1"]],
            "energy_momentum": [["rho", "0"], ["0", "p"]],
            "scalar_field": "t",
            "potential": "phi",
        }
        data.update(overrides)
        return data

    def test_builds_field_input(self):
        serializer = FieldEquationRequestSerializer(data=self.valid_data())
        self.assertTrue(serializer.is_valid(), serializer.errors)
        field_input = serializer.field_input()
        self.assertIsInstance(field_input, FieldEquationInput)
        self.assertEqual(field_input.omega, "1.5")
        self.assertEqual(field_input.metric, (("-1", "0"), ("0", "1")))
        self.assertFalse(serializer.validated_data['simplify'])

    def test_camel_case_aliases(self):
        data = self.valid_data()
        data['energyMomentum'] = data.pop('energy_momentum')
        data['phi'] = data.pop('scalar_field')
        serializer = FieldEquationRequestSerializer(data=data)
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.field_input().scalar_field, "t")

    def test_comma_separated_coordinates(self):
        serializer = FieldEquationRequestSerializer(data=self.valid_data(coordinates=" t , x"))
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.field_input().coordinates, ("t", "x"))

    def test_rejects_non_string_coordinates(self):
        serializer = FieldEquationRequestSerializer(data=self.valid_data(coordinates=[1, 2]))
        self.assertFalse(serializer.is_valid())
        self.assertIn('coordinates', serializer.errors)

    def test_rejects_blank_expression(self):
        serializer = FieldEquationRequestSerializer(data=self.valid_data(potential="  "))
        self.assertFalse(serializer.is_valid())
        self.assertIn('potential', serializer.errors)

    def test_rejects_long_expression(self):
        serializer = FieldEquationRequestSerializer(data=self.valid_data(potential="phi+" * 200 + "1"))
        self.assertFalse(serializer.is_valid())

    @override_settings(FIELD_EQUATIONS_MAX_DIMENSION=1)
    def test_dimension_limit(self):
        serializer = FieldEquationRequestSerializer(data=self.valid_data())
        self.assertFalse(serializer.is_valid())
        self.assertIn('coordinates', serializer.errors)
