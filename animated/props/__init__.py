"""Prop schemas, the animated prop transform and prop resolution."""

from .schema import PropKind, PropSpec, PropSchema
from .transform import SCROLL_PROP_SPEC, transform_props, host_mutation_props, validate_props
from .resolve import resolve_props, resolve_style

__all__ = [
    # Schema
    'PropKind',
    'PropSpec',
    'PropSchema',

    # Transform
    'SCROLL_PROP_SPEC',
    'transform_props',
    'host_mutation_props',
    'validate_props',

    # Resolution
    'resolve_props',
    'resolve_style',
]
