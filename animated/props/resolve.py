"""Resolve animated props to their current literal values.

Runs on every render of an animated component, so it only walks the top
level and the ``style`` bag and never logs.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from animated.animation.animated_value import AnimatedValue
from animated.constants.defaults import STYLE_PROP


def resolve_style(style: Mapping[str, Any]) -> Mapping[str, Any]:
    """Resolve the AnimatedValue fields of a style bag.

    A style without animated fields is returned as the same object.
    """
    if not any(isinstance(v, AnimatedValue) for v in style.values()):
        return style
    return {
        name: value.get_value() if isinstance(value, AnimatedValue) else value
        for name, value in style.items()
    }


def resolve_props(props: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Replace every AnimatedValue in props by its current value.

    Top-level props and the fields of ``style`` are resolved. Everything else,
    including nested containers other than style, passes through unchanged.
    Errors raised by interpolation functions propagate to the caller.
    """
    resolved: Dict[str, Any] = {}
    for name, value in props.items():
        if isinstance(value, AnimatedValue):
            resolved[name] = value.get_value()
        elif name == STYLE_PROP and isinstance(value, Mapping):
            resolved[name] = resolve_style(value)
        else:
            resolved[name] = value
    return resolved
