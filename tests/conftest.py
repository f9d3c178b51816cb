"""
Shared pytest fixtures for animated props tests.

No QApplication is created: QColor color lookups work without one, and the
library never touches widgets.
"""
import pytest

from animated.animation import AnimatedValue
from animated.logging.logger import is_perf_metrics_enabled, set_perf_metrics_enabled
from animated.props import PropSchema, PropSpec


@pytest.fixture
def progress():
    """Root AnimatedValue at 0.0, as a scheduler would create it."""
    return AnimatedValue(0.0)


@pytest.fixture
def xy():
    """Two-element sequence root (e.g. a drag offset)."""
    return AnimatedValue([10.0, 20.0])


@pytest.fixture
def label_schema():
    """Schema of a label-like component: opacity, label, style{color}, children."""
    return PropSchema({
        "opacity": PropSpec.number(),
        "label": PropSpec.string(),
        "style": PropSpec.nested({"color": PropSpec.string(optional=True)}, optional=True),
        "children": PropSpec.string(optional=True),
    })


@pytest.fixture
def recording_component():
    """Plain component that records every (props, ref) it is rendered with."""
    calls = []

    def component(props, ref):
        calls.append((props, ref))
        return ("rendered", props)

    component.calls = calls
    return component


@pytest.fixture
def perf_metrics():
    """Enable [PERF] metrics for one test, restoring the previous state after."""
    previous = is_perf_metrics_enabled()
    set_perf_metrics_enabled(True)
    yield
    set_perf_metrics_enabled(previous)
