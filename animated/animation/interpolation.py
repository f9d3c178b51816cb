"""
Range interpolation engine.

Turns an InterpolationConfig into a plain ``input -> output`` callable. The
returned callables run once per animated property per frame, so everything
that can be decided up front (breakpoint tuples, extrapolation policies,
easing function) is decided when the interpolator is built.

Segment search follows the usual keyframe rule: the segment used for an
input is the one ending at the first inner breakpoint >= input, so inputs
below the range use the first segment and inputs above it use the last.
"""
from __future__ import annotations

import math
from bisect import bisect_left
from typing import Any, Callable, Optional, Sequence

from animated.animation.easing import get_easing_function, linear
from animated.animation.types import (
    Extrapolate,
    InterpolationConfig,
    InterpolationKind,
    InterpolationSpec,
    ValueShape,
)
from animated.logging.logger import get_logger, is_verbose_logging
from animated.logging.tags import TAG_INTERP

logger = get_logger(__name__)


def find_segment(value: float, breakpoints: Sequence[float]) -> int:
    """
    Index of the segment ``[breakpoints[i], breakpoints[i + 1]]`` for value.

    Values outside the range map to the first/last segment so extrapolation
    can continue their slope.
    """
    return bisect_left(breakpoints, value, 1, len(breakpoints) - 1) - 1


def interpolate_segment(
    value: float,
    input_min: float,
    input_max: float,
    output_min: float,
    output_max: float,
    easing: Callable[[float], float] = linear,
    extrapolate_left: Extrapolate = Extrapolate.EXTEND,
    extrapolate_right: Extrapolate = Extrapolate.EXTEND,
) -> float:
    """
    Map value from one input segment onto its output segment.

    Easing is applied inside the segment only; EXTEND continues the straight
    line through the segment ends, so curves that are undefined outside
    [0, 1] (circ, back) never see such inputs.
    """
    result = value

    if result < input_min:
        if extrapolate_left is Extrapolate.IDENTITY:
            return result
        if extrapolate_left is Extrapolate.CLAMP:
            result = input_min
    if result > input_max:
        if extrapolate_right is Extrapolate.IDENTITY:
            return result
        if extrapolate_right is Extrapolate.CLAMP:
            result = input_max

    if output_min == output_max:
        return output_min

    # Normalise into the input segment. Open-ended segments have no length,
    # so they pass the distance from the finite end through instead.
    if input_min == -math.inf:
        t = -result
    elif input_max == math.inf:
        t = result - input_min
    else:
        t = (result - input_min) / (input_max - input_min)

    if 0.0 <= t <= 1.0:
        t = easing(t)

    if output_min == -math.inf:
        return -t
    if output_max == math.inf:
        return t + output_min
    return output_min + t * (output_max - output_min)


def create_numeric_interpolator(config: InterpolationConfig) -> Callable[[float], float]:
    """Build the per-frame callable for a config with numeric outputs."""
    breakpoints = tuple(float(b) for b in config.range)
    outputs = tuple(float(o) for o in config.output)
    easing = get_easing_function(config.easing)
    left = config.resolved_left
    right = config.resolved_right
    map_fn = config.map

    def numeric_interpolator(value: float) -> float:
        if map_fn is not None:
            value = map_fn(value)
        i = find_segment(value, breakpoints)
        return interpolate_segment(
            value,
            breakpoints[i],
            breakpoints[i + 1],
            outputs[i],
            outputs[i + 1],
            easing,
            left,
            right,
        )

    return numeric_interpolator


def create_interpolator(
    spec: InterpolationSpec | InterpolationConfig,
) -> Callable[..., Any]:
    """
    Build the evaluation callable for an interpolation request.

    FUNCTION specs return the user function unchanged. RANGE/ARRAYS specs
    build a numeric or string interpolator depending on the outputs.
    """
    if isinstance(spec, InterpolationConfig):
        config: Optional[InterpolationConfig] = spec
    elif spec.kind is InterpolationKind.FUNCTION:
        return spec.function
    else:
        config = spec.config

    if config.output_shape is ValueShape.STRING:
        # string_interpolation builds on this module, import at call time.
        from animated.animation.string_interpolation import create_string_interpolator
        interpolator = create_string_interpolator(config)
    else:
        interpolator = create_numeric_interpolator(config)

    if is_verbose_logging():
        logger.debug(
            "%s Built %s interpolator: range=%s output=%s extrapolate=(%s, %s)",
            TAG_INTERP,
            config.output_shape.value,
            list(config.range),
            list(config.output),
            config.resolved_left.value,
            config.resolved_right.value,
        )
    return interpolator
