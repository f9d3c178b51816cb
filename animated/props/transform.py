"""
Prop-shape transformation for animated components.

transform_props() describes what the animated wrapper of a component accepts:

- scalar props (numbers, strings) take either a literal or an AnimatedValue
- the scalar fields of ``style`` get the same treatment, one level deep
- ``children`` becomes text or an animated string
- every other prop passes through as the same PropSpec object
- ``scrollLeft`` / ``scrollTop`` are always added, animated-only, and flagged
  for the renderer to set on the host node
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Dict, List, Tuple

from animated.constants.defaults import CHILDREN_PROP, SCROLL_PROPS, STYLE_PROP
from animated.logging.logger import get_logger
from animated.logging.tags import TAG_PROPS
from animated.props.schema import PropKind, PropSchema, PropSpec

logger = get_logger(__name__)

SCROLL_PROP_SPEC = PropSpec(
    PropKind.NUMBER,
    optional=True,
    type_hint=float,
    literal=False,
    animated=True,
    host_mutation=True,
)
"""Spec injected for each synthetic scroll prop."""


def _animatable(spec: PropSpec) -> PropSpec:
    if spec.kind.is_scalar:
        return replace(spec, literal=True, animated=True)
    return spec


def _animatable_style(spec: PropSpec) -> PropSpec:
    fields = PropSchema({name: _animatable(f) for name, f in spec.fields.items()})
    return replace(spec, fields=fields)


def _children_spec(spec: PropSpec) -> PropSpec:
    return PropSpec(
        PropKind.STRING,
        optional=spec.optional,
        type_hint=str,
        literal=True,
        animated=True,
    )


def transform_props(schema: Mapping[str, PropSpec]) -> PropSchema:
    """
    Build the animated counterpart of a component's prop schema.

    Args:
        schema: The component's own schema (a PropSchema or a mapping of
            PropSpec)

    Returns:
        New PropSchema flagged ``animated``; the input is not modified

    Raises:
        ValueError: schema is already an animated schema
    """
    if not isinstance(schema, PropSchema):
        schema = PropSchema(schema)
    if schema.animated:
        raise ValueError("Schema is already animated; transform_props() applies once")

    transformed: Dict[str, PropSpec] = {}
    for name, spec in schema.items():
        if name == CHILDREN_PROP:
            transformed[name] = _children_spec(spec)
        elif name == STYLE_PROP and spec.kind is PropKind.OBJECT:
            transformed[name] = _animatable_style(spec)
        else:
            transformed[name] = _animatable(spec)

    replaced = [name for name in SCROLL_PROPS if name in transformed]
    for name in SCROLL_PROPS:
        transformed[name] = SCROLL_PROP_SPEC

    if replaced:
        logger.debug("%s Declared %s replaced by synthetic scroll props", TAG_PROPS, replaced)
    logger.debug(
        "%s Transformed %d prop(s) -> %d animated prop(s)",
        TAG_PROPS,
        len(schema),
        len(transformed),
    )
    return PropSchema(transformed, animated=True)


def host_mutation_props(schema: Mapping[str, PropSpec]) -> Tuple[str, ...]:
    """Names of props the renderer must set on the host node directly."""
    return tuple(name for name, spec in schema.items() if spec.host_mutation)


def validate_props(schema: Mapping[str, PropSpec], props: Mapping[str, Any]) -> None:
    """
    Check supplied props against a schema.

    Missing required props, and values of the wrong kind (including an
    AnimatedValue where only literals are accepted), are collected and
    reported together. Undeclared props are not checked.

    Raises:
        TypeError: one or more props do not match the schema
    """
    problems: List[str] = []
    _collect_problems(schema, props, "", problems)
    if problems:
        logger.debug("%s Prop validation failed: %s", TAG_PROPS, problems)
        raise TypeError("Invalid props: " + "; ".join(problems))


def _collect_problems(schema: Mapping[str, PropSpec], props: Mapping[str, Any],
                      prefix: str, problems: List[str]) -> None:
    for name, spec in schema.items():
        if name not in props and not spec.optional:
            problems.append(f"missing required prop {prefix + name!r}")

    for name, value in props.items():
        spec = schema.get(name)
        if spec is None:
            continue
        if spec.kind is PropKind.OBJECT and isinstance(value, Mapping):
            _collect_problems(spec.fields, value, f"{prefix}{name}.", problems)
        elif not spec.accepts(value):
            problems.append(
                f"{prefix + name!r} does not accept {type(value).__name__} "
                f"(expected {_describe(spec)})"
            )


def _describe(spec: PropSpec) -> str:
    forms = []
    if spec.literal:
        forms.append(spec.kind.value)
    if spec.animated:
        forms.append(f"AnimatedValue[{spec.kind.value}]")
    text = " | ".join(forms)
    return f"optional {text}" if spec.optional else text
