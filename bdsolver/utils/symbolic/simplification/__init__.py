from .custom_simplify import convert_to_fractions, custom_simplify, simplify_matrix

__all__ = ['convert_to_fractions', 'custom_simplify', 'simplify_matrix']
