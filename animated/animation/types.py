"""
Animation types, enums, and dataclasses.

Defines the value shapes, extrapolation policies, easing curves and the
interpolation configuration shared by the interpolation engine and
AnimatedValue.
"""
from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

from animated.constants.defaults import DEFAULT_EXTRAPOLATE, DEFAULT_INPUT_RANGE, MIN_RANGE_POINTS


class ValueShape(Enum):
    """Shape of the value an accessor returns. Fixed for the accessor's lifetime."""
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"    # ordered sequence of numbers and/or strings


class Extrapolate(Enum):
    """What happens when the input leaves the configured breakpoints."""
    EXTEND = "extend"        # Continue the slope of the nearest segment
    CLAMP = "clamp"          # Pin to the nearest output
    IDENTITY = "identity"    # Return the raw input (numeric outputs only)


class InterpolationKind(Enum):
    """Tag of an InterpolationSpec."""
    FUNCTION = "function"    # interpolate(fn)
    RANGE = "range"          # interpolate(InterpolationConfig(...)) / interpolate({...})
    ARRAYS = "arrays"        # interpolate([0, 1], [0, 100])


class EasingCurve(Enum):
    """
    Easing curve types.

    Easing reshapes the normalised position inside a range segment before it
    is mapped onto the output segment.
    """
    # Basic
    LINEAR = "linear"

    # Quadratic
    QUAD_IN = "quad_in"
    QUAD_OUT = "quad_out"
    QUAD_IN_OUT = "quad_in_out"

    # Cubic
    CUBIC_IN = "cubic_in"
    CUBIC_OUT = "cubic_out"
    CUBIC_IN_OUT = "cubic_in_out"

    # Quartic
    QUART_IN = "quart_in"
    QUART_OUT = "quart_out"
    QUART_IN_OUT = "quart_in_out"

    # Quintic
    QUINT_IN = "quint_in"
    QUINT_OUT = "quint_out"
    QUINT_IN_OUT = "quint_in_out"

    # Sine
    SINE_IN = "sine_in"
    SINE_OUT = "sine_out"
    SINE_IN_OUT = "sine_in_out"

    # Exponential
    EXPO_IN = "expo_in"
    EXPO_OUT = "expo_out"
    EXPO_IN_OUT = "expo_in_out"

    # Circular
    CIRC_IN = "circ_in"
    CIRC_OUT = "circ_out"
    CIRC_IN_OUT = "circ_in_out"

    # Back
    BACK_IN = "back_in"
    BACK_OUT = "back_out"
    BACK_IN_OUT = "back_in_out"

    # Bounce
    BOUNCE_IN = "bounce_in"
    BOUNCE_OUT = "bounce_out"
    BOUNCE_IN_OUT = "bounce_in_out"


Scalar = Union[int, float, str]
EasingFunction = Callable[[float], float]


def is_number(value: Any) -> bool:
    """True for int/float values. bool is excluded on purpose."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_value_sequence(value: Any) -> bool:
    """True for list/tuple literals (strings are scalars, not sequences)."""
    return isinstance(value, (list, tuple))


def shape_of(value: Any) -> ValueShape:
    """
    Infer the ValueShape of a literal.

    Raises:
        TypeError: value is not a number, string or flat sequence of them
        ValueError: value is an empty sequence
    """
    if is_number(value):
        return ValueShape.NUMBER
    if isinstance(value, str):
        return ValueShape.STRING
    if is_value_sequence(value):
        if not value:
            raise ValueError("Sequence values need at least one element")
        for element in value:
            if not (is_number(element) or isinstance(element, str)):
                raise TypeError(
                    f"Sequence elements must be numbers or strings, got {type(element).__name__}"
                )
        return ValueShape.SEQUENCE
    raise TypeError(
        f"Animated values hold numbers, strings or sequences of them, got {type(value).__name__}"
    )


def coerce_extrapolate(value: Union[Extrapolate, str, None]) -> Optional[Extrapolate]:
    """Accept Extrapolate members or their string names ('clamp', ...)."""
    if value is None or isinstance(value, Extrapolate):
        return value
    try:
        return Extrapolate(str(value).lower())
    except ValueError:
        raise ValueError(
            f"Unknown extrapolation {value!r}; expected one of "
            f"{', '.join(e.value for e in Extrapolate)}"
        ) from None


@dataclass(frozen=True)
class InterpolationConfig:
    """
    Declarative range interpolation.

    ``range`` holds the breakpoints, ``output`` the value at each breakpoint.
    Validation happens here so a malformed config fails at construction and
    never mid-animation.
    """
    output: Tuple[Any, ...]
    range: Tuple[float, ...] = DEFAULT_INPUT_RANGE
    extrapolate: Optional[Extrapolate] = None          # Both sides unless overridden
    extrapolate_left: Optional[Extrapolate] = None
    extrapolate_right: Optional[Extrapolate] = None
    easing: Union[EasingCurve, EasingFunction, None] = None
    map: Optional[Callable[[float], float]] = None     # Applied to the input before lookup

    def __post_init__(self):
        """Normalise and validate the config."""
        if isinstance(self.output, str) or not isinstance(self.output, Sequence):
            raise ValueError("InterpolationConfig.output must be a sequence")
        if isinstance(self.range, str) or not isinstance(self.range, Sequence):
            raise ValueError("InterpolationConfig.range must be a sequence")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "output", tuple(self.output))
        object.__setattr__(self, "range", tuple(self.range))
        object.__setattr__(self, "extrapolate", coerce_extrapolate(self.extrapolate))
        object.__setattr__(self, "extrapolate_left", coerce_extrapolate(self.extrapolate_left))
        object.__setattr__(self, "extrapolate_right", coerce_extrapolate(self.extrapolate_right))

        if len(self.range) < MIN_RANGE_POINTS:
            raise ValueError(
                f"InterpolationConfig needs at least {MIN_RANGE_POINTS} breakpoints, got {len(self.range)}"
            )
        if len(self.range) != len(self.output):
            raise ValueError(
                f"range and output must have the same length ({len(self.range)} != {len(self.output)})"
            )
        for point in self.range:
            if not is_number(point) or math.isnan(point):
                raise ValueError(f"Breakpoints must be numbers, got {point!r}")
        for left, right in zip(self.range, self.range[1:]):
            if not left < right:
                raise ValueError(f"Breakpoints must be strictly increasing: {list(self.range)}")

        if all(is_number(v) for v in self.output):
            pass
        elif all(isinstance(v, str) for v in self.output):
            if Extrapolate.IDENTITY in (self.resolved_left, self.resolved_right):
                raise ValueError("identity extrapolation is only valid for numeric outputs")
            # string_interpolation imports this module, import at call time.
            from animated.animation.string_interpolation import check_string_outputs
            check_string_outputs(self.output)
        else:
            raise ValueError("output must be all numbers or all strings")

        if isinstance(self.easing, str):
            try:
                object.__setattr__(self, "easing", EasingCurve(self.easing.lower()))
            except ValueError:
                raise ValueError(f"Unknown easing curve: {self.easing}") from None
        if self.easing is not None and not isinstance(self.easing, EasingCurve) and not callable(self.easing):
            raise ValueError(f"easing must be an EasingCurve or a callable, got {self.easing!r}")
        if self.map is not None and not callable(self.map):
            raise ValueError("map must be callable")

    @property
    def resolved_left(self) -> Extrapolate:
        return self.extrapolate_left or self.extrapolate or Extrapolate(DEFAULT_EXTRAPOLATE)

    @property
    def resolved_right(self) -> Extrapolate:
        return self.extrapolate_right or self.extrapolate or Extrapolate(DEFAULT_EXTRAPOLATE)

    @property
    def output_shape(self) -> ValueShape:
        if isinstance(self.output[0], str):
            return ValueShape.STRING
        return ValueShape.NUMBER

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InterpolationConfig":
        """Build a config from a plain dict of field names."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown InterpolationConfig keys: {', '.join(sorted(unknown))}")
        if "output" not in data:
            raise ValueError("InterpolationConfig requires an output")
        return cls(**dict(data))


@dataclass(frozen=True)
class InterpolationSpec:
    """Tagged interpolation request: exactly one payload is set for its kind."""
    kind: InterpolationKind
    function: Optional[Callable[..., Any]] = None
    config: Optional[InterpolationConfig] = None

    def __post_init__(self):
        if self.kind is InterpolationKind.FUNCTION:
            if self.function is None or self.config is not None:
                raise ValueError("FUNCTION specs carry a function and no config")
        elif self.config is None or self.function is not None:
            raise ValueError(f"{self.kind.value.upper()} specs carry a config and no function")


def to_interpolation_spec(
    spec: Any,
    output: Optional[Sequence[Any]] = None,
    *,
    extrapolate: Union[Extrapolate, str, None] = None,
) -> InterpolationSpec:
    """
    Dispatch the three interpolate() call shapes onto a tagged InterpolationSpec.

    - callable                               -> FUNCTION
    - InterpolationConfig / mapping          -> RANGE
    - breakpoints sequence + output sequence -> ARRAYS

    Raises:
        TypeError: spec matches none of the call shapes
        ValueError: the resulting config is invalid
    """
    if callable(spec) and not isinstance(spec, (InterpolationConfig, Mapping)):
        if output is not None:
            raise TypeError("An interpolation function does not take an output array")
        return InterpolationSpec(InterpolationKind.FUNCTION, function=spec)

    if isinstance(spec, (InterpolationConfig, Mapping)):
        if output is not None:
            raise TypeError("An interpolation config does not take a separate output array")
        config = spec if isinstance(spec, InterpolationConfig) else InterpolationConfig.from_mapping(spec)
        if extrapolate is not None:
            config = InterpolationConfig(
                output=config.output,
                range=config.range,
                extrapolate=extrapolate,
                extrapolate_left=config.extrapolate_left,
                extrapolate_right=config.extrapolate_right,
                easing=config.easing,
                map=config.map,
            )
        return InterpolationSpec(InterpolationKind.RANGE, config=config)

    if is_value_sequence(spec):
        if output is None or not is_value_sequence(output):
            raise TypeError("Array interpolation needs both a breakpoint array and an output array")
        if len(spec) != len(output) or len(spec) < MIN_RANGE_POINTS:
            raise ValueError(
                f"Breakpoint and output arrays must have the same length >= {MIN_RANGE_POINTS} "
                f"({len(spec)} vs {len(output)})"
            )
        config = InterpolationConfig(
            output=tuple(output),
            range=tuple(spec),
            extrapolate=extrapolate or Extrapolate.EXTEND,
        )
        return InterpolationSpec(InterpolationKind.ARRAYS, config=config)

    raise TypeError(
        f"interpolate() expects a function, a config or two arrays, got {type(spec).__name__}"
    )


@dataclass(frozen=True)
class InterpolationStep:
    """
    One link of an AnimatedValue lineage.

    ``apply`` runs on the per-frame path: no logging, no allocation beyond the
    call itself.
    """
    kind: InterpolationKind
    function: Callable[..., Any]
    spread: Optional[bool]                         # Input is a sequence -> fn(*value); None: decide per value
    output_shape: Optional[ValueShape] = None      # None until known (function steps)
    config: Optional[InterpolationConfig] = field(default=None, compare=False)

    def apply(self, value: Any) -> Any:
        spread = self.spread
        if spread is None:
            spread = is_value_sequence(value)
        if spread:
            return self.function(*value)
        return self.function(value)
