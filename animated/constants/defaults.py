"""Default values for interpolation and prop handling.

These constants replace magic strings and numbers throughout the package.
Changing them changes library-wide behaviour, so tests pin the important ones.
"""

# =============================================================================
# Interpolation
# =============================================================================

DEFAULT_EXTRAPOLATE = "extend"
"""Extrapolation used on either side when a config does not name one."""

DEFAULT_INPUT_RANGE = (0.0, 1.0)
"""Breakpoints used when an interpolation config only supplies outputs."""

MIN_RANGE_POINTS = 2
"""Smallest number of breakpoints/outputs a range interpolation accepts."""

STRING_NUMBER_PRECISION = 6
"""Decimal places kept when writing interpolated numbers back into strings."""

# =============================================================================
# Prop Names
# =============================================================================

STYLE_PROP = "style"
"""Nested prop whose own scalar fields become animatable."""

CHILDREN_PROP = "children"
"""Prop forced to text-or-animated-string."""

SCROLL_LEFT_PROP = "scrollLeft"
"""Synthetic horizontal scroll offset, set on the host node directly."""

SCROLL_TOP_PROP = "scrollTop"
"""Synthetic vertical scroll offset, set on the host node directly."""

SCROLL_PROPS = (SCROLL_LEFT_PROP, SCROLL_TOP_PROP)
"""Both synthetic scroll props, in injection order."""

# =============================================================================
# Performance
# =============================================================================

SLOW_RESOLVE_WARN_MS = 4.0
"""Prop resolution slower than this (per render) is reported as [PERF]."""
