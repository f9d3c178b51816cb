"""
Easing functions for range interpolation.

Easing reshapes the normalised position inside one range segment. All
functions take t in [0.0, 1.0] and return 0.0 at t=0 and 1.0 at t=1; back
curves overshoot in between. The interpolation engine only calls them while t
is inside the segment.

Based on standard easing equations:
- Robert Penner's Easing Functions
- https://easings.net/
"""
import math
from typing import Callable, Dict, Union

from animated.animation.types import EasingCurve, EasingFunction

_BACK_OVERSHOOT = 1.70158
_BACK_OVERSHOOT_IN_OUT = _BACK_OVERSHOOT * 1.525
_BOUNCE_N = 7.5625
_BOUNCE_D = 2.75


# Linear (no easing)
def linear(t: float) -> float:
    """Linear interpolation - no easing."""
    return t


# Quadratic easing
def quad_in(t: float) -> float:
    """Quadratic ease-in."""
    return t * t


def quad_out(t: float) -> float:
    """Quadratic ease-out."""
    u = 1 - t
    return 1 - u * u


def quad_in_out(t: float) -> float:
    """Quadratic ease-in-out."""
    if t < 0.5:
        return 2 * t * t
    u = 2 - 2 * t
    return 1 - u * u / 2


# Cubic easing
def cubic_in(t: float) -> float:
    """Cubic ease-in."""
    return t ** 3


def cubic_out(t: float) -> float:
    """Cubic ease-out."""
    return 1 - (1 - t) ** 3


def cubic_in_out(t: float) -> float:
    """Cubic ease-in-out."""
    if t < 0.5:
        return 4 * t ** 3
    return 1 - (2 - 2 * t) ** 3 / 2


# Quartic easing
def quart_in(t: float) -> float:
    """Quartic ease-in."""
    return t ** 4


def quart_out(t: float) -> float:
    """Quartic ease-out."""
    return 1 - (1 - t) ** 4


def quart_in_out(t: float) -> float:
    """Quartic ease-in-out."""
    if t < 0.5:
        return 8 * t ** 4
    return 1 - (2 - 2 * t) ** 4 / 2


# Quintic easing
def quint_in(t: float) -> float:
    """Quintic ease-in."""
    return t ** 5


def quint_out(t: float) -> float:
    """Quintic ease-out."""
    return 1 - (1 - t) ** 5


def quint_in_out(t: float) -> float:
    """Quintic ease-in-out."""
    if t < 0.5:
        return 16 * t ** 5
    return 1 - (2 - 2 * t) ** 5 / 2


# Sine easing
def sine_in(t: float) -> float:
    """Sine ease-in - accelerating along a quarter cosine."""
    return 1 - math.cos(t * math.pi / 2)


def sine_out(t: float) -> float:
    """Sine ease-out."""
    return math.sin(t * math.pi / 2)


def sine_in_out(t: float) -> float:
    """Sine ease-in-out - half a cosine wave."""
    return (1 - math.cos(math.pi * t)) / 2


# Exponential easing
def expo_in(t: float) -> float:
    """Exponential ease-in. Exact 0 at t=0 (the raw formula gives 2**-10)."""
    if t == 0:
        return 0.0
    return math.pow(2, 10 * (t - 1))


def expo_out(t: float) -> float:
    """Exponential ease-out. Exact 1 at t=1."""
    if t == 1:
        return 1.0
    return 1 - math.pow(2, -10 * t)


def expo_in_out(t: float) -> float:
    """Exponential ease-in-out."""
    if t == 0 or t == 1:
        return float(t)
    if t < 0.5:
        return math.pow(2, 20 * t - 10) / 2
    return 1 - math.pow(2, 10 - 20 * t) / 2


# Circular easing
def circ_in(t: float) -> float:
    """Circular ease-in."""
    return 1 - math.sqrt(1 - t * t)


def circ_out(t: float) -> float:
    """Circular ease-out."""
    u = 1 - t
    return math.sqrt(1 - u * u)


def circ_in_out(t: float) -> float:
    """Circular ease-in-out."""
    if t < 0.5:
        return (1 - math.sqrt(1 - 4 * t * t)) / 2
    u = 2 - 2 * t
    return (1 + math.sqrt(1 - u * u)) / 2


# Back easing
def back_in(t: float) -> float:
    """Back ease-in - pulls back slightly before accelerating."""
    return t * t * ((_BACK_OVERSHOOT + 1) * t - _BACK_OVERSHOOT)


def back_out(t: float) -> float:
    """Back ease-out - overshoots the end, then settles."""
    u = t - 1
    return 1 + u * u * ((_BACK_OVERSHOOT + 1) * u + _BACK_OVERSHOOT)


def back_in_out(t: float) -> float:
    """Back ease-in-out."""
    s = _BACK_OVERSHOOT_IN_OUT
    if t < 0.5:
        u = 2 * t
        return u * u * ((s + 1) * u - s) / 2
    u = 2 * t - 2
    return (u * u * ((s + 1) * u + s) + 2) / 2


# Bounce easing (naturally written in its out form)
def bounce_out(t: float) -> float:
    """Bounce ease-out."""
    if t < 1 / _BOUNCE_D:
        return _BOUNCE_N * t * t
    if t < 2 / _BOUNCE_D:
        t -= 1.5 / _BOUNCE_D
        return _BOUNCE_N * t * t + 0.75
    if t < 2.5 / _BOUNCE_D:
        t -= 2.25 / _BOUNCE_D
        return _BOUNCE_N * t * t + 0.9375
    t -= 2.625 / _BOUNCE_D
    return _BOUNCE_N * t * t + 0.984375


def bounce_in(t: float) -> float:
    """Bounce ease-in."""
    return 1 - bounce_out(1 - t)


def bounce_in_out(t: float) -> float:
    """Bounce ease-in-out."""
    if t < 0.5:
        return (1 - bounce_out(1 - 2 * t)) / 2
    return (1 + bounce_out(2 * t - 1)) / 2


# Easing function lookup table
EASING_FUNCTIONS: Dict[EasingCurve, EasingFunction] = {
    EasingCurve.LINEAR: linear,
    EasingCurve.QUAD_IN: quad_in,
    EasingCurve.QUAD_OUT: quad_out,
    EasingCurve.QUAD_IN_OUT: quad_in_out,
    EasingCurve.CUBIC_IN: cubic_in,
    EasingCurve.CUBIC_OUT: cubic_out,
    EasingCurve.CUBIC_IN_OUT: cubic_in_out,
    EasingCurve.QUART_IN: quart_in,
    EasingCurve.QUART_OUT: quart_out,
    EasingCurve.QUART_IN_OUT: quart_in_out,
    EasingCurve.QUINT_IN: quint_in,
    EasingCurve.QUINT_OUT: quint_out,
    EasingCurve.QUINT_IN_OUT: quint_in_out,
    EasingCurve.SINE_IN: sine_in,
    EasingCurve.SINE_OUT: sine_out,
    EasingCurve.SINE_IN_OUT: sine_in_out,
    EasingCurve.EXPO_IN: expo_in,
    EasingCurve.EXPO_OUT: expo_out,
    EasingCurve.EXPO_IN_OUT: expo_in_out,
    EasingCurve.CIRC_IN: circ_in,
    EasingCurve.CIRC_OUT: circ_out,
    EasingCurve.CIRC_IN_OUT: circ_in_out,
    EasingCurve.BACK_IN: back_in,
    EasingCurve.BACK_OUT: back_out,
    EasingCurve.BACK_IN_OUT: back_in_out,
    EasingCurve.BOUNCE_IN: bounce_in,
    EasingCurve.BOUNCE_OUT: bounce_out,
    EasingCurve.BOUNCE_IN_OUT: bounce_in_out,
}


def get_easing_function(curve: Union[EasingCurve, str, Callable[[float], float], None]) -> EasingFunction:
    """
    Get the easing function for a curve.

    Args:
        curve: EasingCurve member, its string value ('cubic_out'), a callable
            (returned unchanged) or None (linear)

    Returns:
        Easing function mapping t in [0, 1] onto [0, 1]

    Raises:
        ValueError: If curve is not a known curve
    """
    if curve is None:
        return linear
    if isinstance(curve, EasingCurve):
        return EASING_FUNCTIONS[curve]
    if isinstance(curve, str):
        try:
            return EASING_FUNCTIONS[EasingCurve(curve.lower())]
        except ValueError:
            raise ValueError(f"Unknown easing curve: {curve}") from None
    if callable(curve):
        return curve
    raise ValueError(f"Unknown easing curve: {curve!r}")


def ease(t: float, curve: Union[EasingCurve, str, None]) -> float:
    """
    Apply an easing curve to a time value.

    Args:
        t: Time value, clamped to [0.0, 1.0]
        curve: Easing curve to apply

    Returns:
        Eased value
    """
    t = max(0.0, min(1.0, t))
    return get_easing_function(curve)(t)
