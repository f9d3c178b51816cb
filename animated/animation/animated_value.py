"""
AnimatedValue: the reactive value UI code binds to properties.

An AnimatedValue is a root accessor plus an immutable lineage of
interpolation steps. interpolate() never touches the receiver; it returns a
new node that shares the root and extends the lineage by one step, so a
single root can feed any number of derived values, and a derived value can be
shared read-only between components.

get_value() walks the lineage every call. Nothing is cached across frames;
the Scheduler decides how often values are read.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from animated.animation.accessor import RootValue, ValueAccessor
from animated.animation.interpolation import create_interpolator
from animated.animation.types import (
    Extrapolate,
    InterpolationKind,
    InterpolationStep,
    ValueShape,
    shape_of,
    to_interpolation_spec,
)
from animated.logging.logger import get_logger
from animated.logging.tags import TAG_ANIM

logger = get_logger(__name__)

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _check_function_arity(function: Callable[..., Any], shape: ValueShape,
                          length: Optional[int]) -> None:
    """
    Fail fast when a function cannot take the arguments a step will pass.

    Scalar inputs are passed as one argument, sequences are spread. Callables
    without an inspectable signature (some builtins) are accepted as is.
    """
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return

    params = list(signature.parameters.values())
    positional = [p for p in params if p.kind in _POSITIONAL_KINDS]
    required = [p for p in positional if p.default is p.empty]
    has_var_positional = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
    required_keyword = [
        p.name for p in params
        if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is p.empty
    ]
    name = getattr(function, "__name__", repr(function))

    if required_keyword:
        raise TypeError(
            f"Interpolation function {name} has required keyword-only arguments: "
            f"{', '.join(required_keyword)}"
        )

    if shape is ValueShape.SEQUENCE and length is None:
        # Element count unknown until the first read
        if not positional and not has_var_positional:
            raise TypeError(f"Interpolation function {name} takes no positional argument")
        return

    if shape is ValueShape.SEQUENCE:
        count = length
        if len(required) > count or (not has_var_positional and len(positional) < count):
            raise TypeError(
                f"Interpolation function {name} cannot take the {count} spread elements "
                f"of a sequence value"
            )
        return

    if len(required) > 1:
        raise TypeError(
            f"Interpolation function {name} expects {len(required)} spread arguments, "
            f"but the value is a scalar {shape.value}"
        )
    if not positional and not has_var_positional:
        raise TypeError(f"Interpolation function {name} takes no positional argument")


class AnimatedValue(ValueAccessor):
    """
    A value that changes every frame and can be assigned to animated props.

    Example:
        progress = AnimatedValue(0.0)
        opacity = progress.interpolate([0, 1], [0, 1])
        color = progress.interpolate({"range": (0, 1), "output": ("yellow", "red")})
        label = progress.interpolate(lambda p: f"{p * 100:.0f}%")
    """

    def __init__(self, initial: Any = None, *, accessor: Optional[ValueAccessor] = None):
        """
        Create a root AnimatedValue.

        Args:
            initial: Initial literal (number, string or sequence of them)
            accessor: Existing accessor to read from instead of a literal,
                e.g. one owned by an external scheduler

        Raises:
            TypeError: neither or both of initial/accessor given, or initial
                is not animatable
        """
        if accessor is None:
            if initial is None:
                raise TypeError("AnimatedValue needs an initial value or an accessor")
            accessor = RootValue(initial)
        elif initial is not None:
            raise TypeError("Pass either an initial value or an accessor, not both")
        elif not isinstance(accessor, ValueAccessor):
            raise TypeError(f"accessor must be a ValueAccessor, got {type(accessor).__name__}")

        self._root: ValueAccessor = accessor
        self._lineage: Tuple[InterpolationStep, ...] = ()
        self._shape: Optional[ValueShape] = accessor.shape

    @classmethod
    def _derive(cls, root: ValueAccessor, lineage: Tuple[InterpolationStep, ...],
                shape: Optional[ValueShape]) -> "AnimatedValue":
        node = cls.__new__(cls)
        node._root = root
        node._lineage = lineage
        node._shape = shape
        return node

    # ------------------------------------------------------------------
    # Accessor contract
    # ------------------------------------------------------------------

    @property
    def shape(self) -> ValueShape:
        """
        Shape of get_value().

        Function steps declare no output shape unless given a hint. Reading
        this property then observes it from the (pure) lineage once and fixes
        it; interpolate() never does, so building a lineage runs no user code.
        """
        if self._shape is None:
            self._shape = shape_of(self.get_value())
        return self._shape

    def get_value(self) -> Any:
        value = self._root.get_value()
        for step in self._lineage:
            value = step.apply(value)
        return value

    # ------------------------------------------------------------------
    # Lineage
    # ------------------------------------------------------------------

    @property
    def root(self) -> ValueAccessor:
        """The accessor at the start of the lineage."""
        return self._root

    @property
    def lineage(self) -> Tuple[InterpolationStep, ...]:
        """Interpolation steps applied to the root, in evaluation order."""
        return self._lineage

    @property
    def is_derived(self) -> bool:
        return bool(self._lineage)

    def set_value(self, value: Any) -> None:
        """
        Write a new root value (Scheduler only).

        Raises:
            TypeError: this node is derived, or the root is not writable
        """
        if self._lineage:
            raise TypeError("Derived animated values are read-only; write to the root value")
        if not isinstance(self._root, RootValue):
            raise TypeError(f"{type(self._root).__name__} is owned by its scheduler and not writable here")
        self._root.set_value(value)

    def interpolate(
        self,
        spec: Union[Callable[..., Any], Any],
        output: Optional[Sequence[Any]] = None,
        *,
        extrapolate: Union[Extrapolate, str, None] = None,
        shape: Union[ValueShape, str, None] = None,
    ) -> "AnimatedValue":
        """
        Derive a new AnimatedValue.

        Args:
            spec: One of
                - a pure function of the current value (sequence values are
                  spread into separate arguments)
                - an InterpolationConfig, or a dict of its fields
                - a breakpoint array, with ``output`` as the second array
            output: Output array for the two-array form
            extrapolate: Extrapolation override for both sides
            shape: Output shape of a function step, if known up front

        Returns:
            New AnimatedValue; the receiver is unchanged

        Raises:
            TypeError: spec does not fit this value's shape
            ValueError: invalid interpolation config
        """
        request = to_interpolation_spec(spec, output, extrapolate=extrapolate)
        # None below an unhinted function step; checks then wait for the first read
        input_shape = self._shape

        if request.kind is InterpolationKind.FUNCTION:
            if input_shape is not None:
                # Only a root can be measured without running user functions
                length = None
                if input_shape is ValueShape.SEQUENCE and not self._lineage:
                    length = len(self._root.get_value())
                _check_function_arity(request.function, input_shape, length)
                spread = input_shape is ValueShape.SEQUENCE
            else:
                spread = None
            output_shape = ValueShape(shape) if shape is not None else None
            step = InterpolationStep(
                kind=request.kind,
                function=request.function,
                spread=spread,
                output_shape=output_shape,
            )
        else:
            if input_shape is not None and input_shape is not ValueShape.NUMBER:
                raise TypeError(
                    f"Range interpolation needs a numeric input, this value is a {input_shape.value}"
                )
            if shape is not None and ValueShape(shape) is not request.config.output_shape:
                raise TypeError(
                    f"shape={ValueShape(shape).value} contradicts the "
                    f"{request.config.output_shape.value} outputs"
                )
            step = InterpolationStep(
                kind=request.kind,
                function=create_interpolator(request),
                spread=False,
                output_shape=request.config.output_shape,
                config=request.config,
            )

        derived = AnimatedValue._derive(self._root, self._lineage + (step,), step.output_shape)
        logger.debug(
            "%s interpolate(%s): lineage depth %d -> %d",
            TAG_ANIM,
            request.kind.value,
            len(self._lineage),
            len(derived._lineage),
        )
        return derived

    def __repr__(self) -> str:
        shape = self._shape.value if self._shape is not None else "?"
        return f"AnimatedValue(shape={shape}, depth={len(self._lineage)}, root={self._root!r})"


def is_animated(value: Any) -> bool:
    """True when value is an AnimatedValue (what the prop resolver unwraps)."""
    return isinstance(value, AnimatedValue)
