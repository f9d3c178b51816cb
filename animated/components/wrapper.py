"""
Animated component wrapper factory.

create_animated_component(component) returns a callable with the same calling
convention as the wrapped component, ``component(props, ref)``, that accepts
AnimatedValue props. Each render resolves animated props to their current
values and forwards the ref handle untouched, so the wrapped component never
sees an AnimatedValue and a ref attached to the wrapper reaches the inner
component.

The renderer decides when to re-render. Scroll offsets listed in
``host_mutation_props`` are for the renderer to set on the host node.
"""
from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any, Callable, Optional, Tuple

from animated.constants.defaults import SLOW_RESOLVE_WARN_MS
from animated.logging.logger import get_logger, is_perf_metrics_enabled
from animated.logging.tags import TAG_COMPONENT, TAG_PERF
from animated.props.resolve import resolve_props
from animated.props.schema import PropSchema, PropSpec
from animated.props.transform import host_mutation_props, transform_props, validate_props

logger = get_logger(__name__)


class Ref:
    """Opaque handle the renderer fills with the host node."""

    def __init__(self, current: Any = None):
        self.current = current

    def __repr__(self) -> str:
        return f"Ref(current={self.current!r})"


def create_ref(initial: Any = None) -> Ref:
    """Create a Ref to pass to an animated (or plain) component."""
    return Ref(initial)


def _component_name(component: Any) -> str:
    return getattr(component, "__name__", None) or type(component).__name__


class AnimatedComponent:
    """
    Component wrapper that accepts AnimatedValue props.

    Example:
        AnimatedLabel = create_animated_component(Label)
        AnimatedLabel({"style": {"opacity": progress}, "children": text}, ref)
    """

    def __init__(self, component: Callable[..., Any],
                 schema: Optional[Mapping[str, PropSpec]] = None,
                 *, strict: bool = False):
        """
        Args:
            component: Callable taking ``(props, ref)``
            schema: Prop schema of the component, plain or already animated.
                Looked up with PropSchema.from_component when omitted.
            strict: Validate props against the animated schema on every render

        Raises:
            TypeError: component is not callable
            ValueError: schema cannot be transformed
        """
        if not callable(component):
            raise TypeError(f"Cannot animate non-callable {component!r}")

        if schema is None:
            schema = PropSchema.from_component(component)
        elif not isinstance(schema, PropSchema):
            schema = PropSchema(schema)

        self._component = component
        self._schema: PropSchema = schema if schema.animated else transform_props(schema)
        self._strict = bool(strict)
        self._host_mutation_props = host_mutation_props(self._schema)
        self.display_name = f"Animated({_component_name(component)})"

    @property
    def component(self) -> Callable[..., Any]:
        """The wrapped component."""
        return self._component

    @property
    def schema(self) -> PropSchema:
        """Animated prop schema of the wrapper."""
        return self._schema

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def host_mutation_props(self) -> Tuple[str, ...]:
        """Props the renderer sets on the host node instead of passing down."""
        return self._host_mutation_props

    def render(self, props: Optional[Mapping[str, Any]] = None, ref: Any = None, **kwargs: Any) -> Any:
        """
        Render the wrapped component with resolved props.

        Args:
            props: Props, any scalar of which may be an AnimatedValue
            ref: Handle forwarded unchanged to the wrapped component
            **kwargs: Extra props, merged over ``props``

        Returns:
            Whatever the wrapped component returns

        Raises:
            TypeError: strict mode and the props do not match the schema
        """
        merged = dict(props) if props is not None else {}
        if kwargs:
            merged.update(kwargs)
        if self._strict:
            validate_props(self._schema, merged)

        if is_perf_metrics_enabled():
            start = time.perf_counter()
            resolved = resolve_props(merged)
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            if elapsed_ms > SLOW_RESOLVE_WARN_MS:
                logger.warning(
                    "%s %s slow prop resolution: %.2fms for %d prop(s)",
                    TAG_PERF,
                    self.display_name,
                    elapsed_ms,
                    len(merged),
                )
        else:
            resolved = resolve_props(merged)

        return self._component(resolved, ref)

    __call__ = render

    def __repr__(self) -> str:
        return f"<{self.display_name} props={list(self._schema)}>"


def create_animated_component(component: Callable[..., Any],
                              schema: Optional[Mapping[str, PropSpec]] = None,
                              *, strict: bool = False) -> AnimatedComponent:
    """
    Wrap a component so it accepts AnimatedValue props.

    See AnimatedComponent for the arguments.
    """
    wrapped = AnimatedComponent(component, schema, strict=strict)
    logger.debug(
        "%s Created %s (animated props: %s, host mutation: %s)",
        TAG_COMPONENT,
        wrapped.display_name,
        [name for name, spec in wrapped.schema.items() if spec.animated],
        list(wrapped.host_mutation_props),
    )
    return wrapped
