from django.conf import settings
from rest_framework import serializers

from bdsolver.utils.symbolic.brans_dicke import FieldEquationInput, normalize_input_keys
from bdsolver.utils.symbolic.parse_input import split_coordinates


def expression_field(**kwargs):
    return serializers.CharField(
        max_length=settings.FIELD_EQUATIONS_MAX_EXPRESSION_LENGTH,
        trim_whitespace=True,
        **kwargs
    )


def matrix_field():
    return serializers.ListField(
        child=serializers.ListField(
            child=expression_field(), allow_empty=False,
            max_length=settings.FIELD_EQUATIONS_MAX_DIMENSION,
        ),
        allow_empty=False,
        max_length=settings.FIELD_EQUATIONS_MAX_DIMENSION,
    )


# ------------------- Field Equation Input Serializers -------------------
class CoordinatesField(serializers.Field):
    """Coordinate names, as a list or a comma-separated string ("t, x, y, z")."""
    default_error_messages = {
        'invalid': 'Expected a list of coordinate names or a comma-separated string.',
        'empty': 'At least one coordinate is required.',
        'too_many': 'At most {max_dimension} coordinates are supported.',
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            names = split_coordinates(data)
        elif isinstance(data, (list, tuple)) and all(isinstance(name, str) for name in data):
            names = split_coordinates(data)
        else:
            self.fail('invalid')

        if not names or names == ['']:
            self.fail('empty')
        max_dimension = settings.FIELD_EQUATIONS_MAX_DIMENSION
        if len(names) > max_dimension:
            self.fail('too_many', max_dimension=max_dimension)
        return names

    def to_representation(self, value):
        return list(value)


class FieldEquationRequestSerializer(serializers.Serializer):
    """
    Validates the types and sizes of a request; everything symbolic
    (parsing, shapes, invertibility) is checked by the evaluator.
    """
    coordinates     = CoordinatesField()
    omega           = expression_field()
    metric          = matrix_field()
    energy_momentum = matrix_field()
    scalar_field    = expression_field()
    potential       = expression_field()
    simplify        = serializers.BooleanField(required=False, default=False)
    evaluation_point = serializers.ListField(
        child=serializers.FloatField(), required=False, allow_null=True,
        max_length=settings.FIELD_EQUATIONS_MAX_DIMENSION,
    )

    def to_internal_value(self, data):
        if hasattr(data, 'items'):
            data = normalize_input_keys(data)
        return super().to_internal_value(data)

    def field_input(self):
        return FieldEquationInput.from_dict(self.validated_data)
