"""
String output interpolation (colors, units, transform lists).

Every output string is first normalised so colors share one notation:
hex, rgb()/rgba(), hsl()/hsla() and named colors all become
``rgba(r, g, b, a)``. The numeric parts of the normalised strings are then
interpolated independently with the config's breakpoints, easing and
extrapolation, and written back into the first output's text skeleton.

Blending is per RGB channel. Red, green and blue are rounded to integers
after interpolation; alpha keeps its fraction.

Named colors are resolved through QColor, which knows the SVG/CSS color
keywords and needs no QGuiApplication.
"""
from __future__ import annotations

import math
import re
from dataclasses import replace
from functools import lru_cache
from typing import Callable, List, Optional, Pattern, Sequence, Tuple

from PySide6.QtGui import QColor

from animated.animation.interpolation import create_numeric_interpolator
from animated.animation.types import InterpolationConfig
from animated.constants.defaults import STRING_NUMBER_PRECISION
from animated.logging.logger import get_logger
from animated.logging.tags import TAG_COLOR

logger = get_logger(__name__)

NUMBER_PATTERN = re.compile(r"[+\-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+\-]?\d+)?")

_HEX_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3,4})\b")
_FUNCTIONAL_PATTERN = re.compile(
    r"\b(rgba?|hsla?)\(\s*([^()]*?)\s*\)",
    re.IGNORECASE,
)
_RGBA_OUTPUT_PATTERN = re.compile(
    r"rgba\(([0-9.eE+\-]+), ([0-9.eE+\-]+), ([0-9.eE+\-]+), ([0-9.eE+\-]+)\)"
)


def format_number(value: float, precision: int = STRING_NUMBER_PRECISION) -> str:
    """Write a float back into a string without trailing zeros ('1', '0.25')."""
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        text = str(int(value))
    else:
        text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _round_channel(value: float) -> int:
    # Half up, not half to even: 210.5 -> 211
    return int(math.floor(value + 0.5))


def _rgba_text(red: float, green: float, blue: float, alpha: float) -> str:
    return (
        f"rgba({_round_channel(red)}, {_round_channel(green)}, "
        f"{_round_channel(blue)}, {format_number(alpha)})"
    )


@lru_cache(maxsize=1)
def _named_color_pattern() -> Pattern[str]:
    """Regex matching every color keyword QColor knows, longest first."""
    names = sorted({name.lower() for name in QColor.colorNames()}, key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(n) for n in names) + r")\b", re.IGNORECASE)


def _hex_to_rgba(match: re.Match) -> str:
    digits = match.group(0)[1:]
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    red, green, blue = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    # CSS order is #RRGGBBAA (QColor reads 8 digits as #AARRGGBB)
    alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return _rgba_text(red, green, blue, alpha)


def _channel(text: str, scale: float) -> float:
    """Parse one functional-notation channel; 'N%' is relative to scale."""
    text = text.strip()
    if text.endswith("%"):
        return float(text[:-1]) / 100.0 * scale
    return float(text)


def _functional_to_rgba(match: re.Match) -> str:
    name = match.group(1).lower()
    parts = [p for p in re.split(r"[\s,/]+", match.group(2)) if p]
    if len(parts) not in (3, 4):
        raise ValueError(f"Cannot parse color {match.group(0)!r}")
    alpha = _channel(parts[3], 1.0) if len(parts) == 4 else 1.0

    if name.startswith("rgb"):
        red, green, blue = (_channel(p, 255.0) for p in parts[:3])
        return _rgba_text(red, green, blue, alpha)

    hue = float(parts[0].rstrip("deg")) % 360.0
    saturation = _channel(parts[1], 1.0)
    lightness = _channel(parts[2], 1.0)
    color = QColor.fromHslF(hue / 360.0, saturation, lightness, 1.0)
    return _rgba_text(color.red(), color.green(), color.blue(), alpha)


def _named_to_rgba(match: re.Match) -> str:
    color = QColor(match.group(0).lower())
    if not color.isValid():
        return match.group(0)
    return _rgba_text(color.red(), color.green(), color.blue(), color.alphaF())


def normalize_colors(text: str) -> str:
    """
    Rewrite every color in text as ``rgba(r, g, b, a)``.

    Non-color text is left alone, so '10px solid red' becomes
    '10px solid rgba(255, 0, 0, 1)'.
    """
    text = _HEX_PATTERN.sub(_hex_to_rgba, text)
    text = _FUNCTIONAL_PATTERN.sub(_functional_to_rgba, text)
    return _named_color_pattern().sub(_named_to_rgba, text)


def _skeleton(text: str) -> str:
    return NUMBER_PATTERN.sub("#", text)


def check_string_outputs(outputs: Sequence[str]) -> List[str]:
    """
    Normalise string outputs and check they can be interpolated together.

    Returns:
        The color-normalised outputs, in order

    Raises:
        ValueError: the outputs are not lexically compatible (different text
            around the numbers, or a different count of numbers)
    """
    normalized: List[str] = [normalize_colors(value) for value in outputs]
    skeleton = _skeleton(normalized[0])
    for original, value in zip(outputs, normalized):
        if _skeleton(value) != skeleton:
            raise ValueError(
                f"String outputs are not compatible: {outputs[0]!r} vs {original!r}"
            )
    return normalized


def create_string_interpolator(config: InterpolationConfig) -> Callable[[float], str]:
    """
    Build the per-frame callable for a config with string outputs.

    Raises:
        ValueError: the outputs are not lexically compatible
    """
    outputs = check_string_outputs(config.output)
    template = outputs[0]

    columns: List[Tuple[float, ...]] = list(
        zip(*([float(n) for n in NUMBER_PATTERN.findall(value)] for value in outputs))
    )
    channel_interpolators = [
        create_numeric_interpolator(replace(config, output=column))
        for column in columns
    ]
    # Split the template around its numbers once; evaluation only joins.
    literal_parts = NUMBER_PATTERN.split(template)
    has_rgba = "rgba(" in template

    logger.debug(
        "%s String interpolator: %d numeric channel(s), outputs=%s",
        TAG_COLOR,
        len(channel_interpolators),
        outputs,
    )

    def string_interpolator(value: float) -> str:
        pieces: List[str] = [literal_parts[0]]
        for interpolator, tail in zip(channel_interpolators, literal_parts[1:]):
            pieces.append(format_number(interpolator(value)))
            pieces.append(tail)
        text = "".join(pieces)
        if has_rgba:
            text = _RGBA_OUTPUT_PATTERN.sub(_round_rgb, text)
        return text

    return string_interpolator


def _round_rgb(match: re.Match) -> str:
    red, green, blue, alpha = (float(g) for g in match.groups())
    return _rgba_text(red, green, blue, alpha)


def interpolate_string(value: float, breakpoints, outputs, extrapolate: Optional[str] = None) -> str:
    """One-shot helper: build a string interpolator and evaluate it once."""
    config = InterpolationConfig(output=tuple(outputs), range=tuple(breakpoints), extrapolate=extrapolate)
    return create_string_interpolator(config)(value)
