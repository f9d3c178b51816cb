"""Animated values, range interpolation and animated prop schemas."""

from .versioning import LIB_VERSION as __version__
from .animation import (
    AnimatedValue,
    EasingCurve,
    Extrapolate,
    InterpolationConfig,
    RootValue,
    ValueAccessor,
    ValueShape,
)
from .props import PropKind, PropSchema, PropSpec, resolve_props, transform_props
from .components import AnimatedComponent, Ref, create_animated_component, create_ref

__all__ = [
    '__version__',

    # Values
    'AnimatedValue',
    'ValueAccessor',
    'RootValue',
    'ValueShape',

    # Interpolation
    'InterpolationConfig',
    'Extrapolate',
    'EasingCurve',

    # Props
    'PropKind',
    'PropSpec',
    'PropSchema',
    'transform_props',
    'resolve_props',

    # Components
    'AnimatedComponent',
    'Ref',
    'create_animated_component',
    'create_ref',
]
