"""Standard logging tags for consistent log filtering.

Usage:
    from animated.logging.tags import TAG_PERF
    logger.warning("%s Slow prop resolution: %.2fms", TAG_PERF, elapsed_ms)
"""

TAG_PERF = "[PERF]"
"""Performance metrics. Only emitted when perf metrics are enabled."""

TAG_ANIM = "[ANIM]"
"""Animated value construction and lineage changes."""

TAG_INTERP = "[INTERP]"
"""Interpolation config validation and interpolator construction."""

TAG_COLOR = "[COLOR]"
"""Color normalisation inside string interpolation."""

TAG_PROPS = "[PROPS]"
"""Prop schema derivation, transformation and validation."""

TAG_COMPONENT = "[COMPONENT]"
"""Animated component wrapping and rendering."""


ALL_TAGS = (TAG_PERF, TAG_ANIM, TAG_INTERP, TAG_COLOR, TAG_PROPS, TAG_COMPONENT)
