"""Animated values and the interpolation engine."""

from .types import (
    ValueShape,
    Extrapolate,
    InterpolationKind,
    EasingCurve,
    InterpolationConfig,
    InterpolationSpec,
    InterpolationStep,
    shape_of,
    to_interpolation_spec,
)
from .easing import ease, get_easing_function, EASING_FUNCTIONS
from .accessor import ValueAccessor, RootValue
from .interpolation import create_interpolator
from .string_interpolation import check_string_outputs, create_string_interpolator, normalize_colors
from .animated_value import AnimatedValue, is_animated

__all__ = [
    # Types
    'ValueShape',
    'Extrapolate',
    'InterpolationKind',
    'EasingCurve',
    'InterpolationConfig',
    'InterpolationSpec',
    'InterpolationStep',
    'shape_of',
    'to_interpolation_spec',

    # Easing
    'ease',
    'get_easing_function',
    'EASING_FUNCTIONS',

    # Accessors
    'ValueAccessor',
    'RootValue',
    'AnimatedValue',
    'is_animated',

    # Interpolation
    'create_interpolator',
    'check_string_outputs',
    'create_string_interpolator',
    'normalize_colors',
]
