"""Animated component wrappers."""

from .wrapper import AnimatedComponent, Ref, create_animated_component, create_ref

__all__ = [
    'AnimatedComponent',
    'Ref',
    'create_animated_component',
    'create_ref',
]
