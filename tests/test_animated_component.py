"""Tests for the animated component wrapper factory."""
import logging

import pytest

from animated.animation import AnimatedValue
from animated.components import AnimatedComponent, Ref, create_animated_component, create_ref
from animated.components import wrapper as wrapper_module
from animated.props import PropSchema, PropSpec, transform_props


def test_render_resolves_animated_props(recording_component, label_schema, progress):
    animated = create_animated_component(recording_component, label_schema)
    opacity = progress.interpolate([0, 1], [0, 1])
    progress.set_value(0.5)

    result = animated.render({"opacity": opacity, "label": "hi"})

    props, ref = recording_component.calls[-1]
    assert props == {"opacity": pytest.approx(0.5), "label": "hi"}
    assert ref is None
    assert result[0] == "rendered"


def test_every_render_reads_the_current_value(recording_component, progress):
    animated = create_animated_component(recording_component)
    animated({"x": progress})
    progress.set_value(2.0)
    animated({"x": progress})
    assert [call[0]["x"] for call in recording_component.calls] == [0.0, 2.0]


def test_ref_forwarded_unchanged(recording_component):
    ref = create_ref()
    animated = create_animated_component(recording_component)
    animated({}, ref)
    assert recording_component.calls[-1][1] is ref


def test_kwargs_merge_over_props(recording_component):
    animated = create_animated_component(recording_component)
    animated({"a": 1, "b": 2}, b=3)
    assert recording_component.calls[-1][0] == {"a": 1, "b": 3}


def test_schema_from_component_is_transformed():
    def component(props, ref):
        return props

    component.prop_schema = PropSchema({"opacity": PropSpec.number()})
    animated = create_animated_component(component)
    assert animated.schema.animated
    assert animated.schema["opacity"].animated
    assert animated.host_mutation_props == ("scrollLeft", "scrollTop")


def test_animated_schema_used_as_given(recording_component, label_schema):
    schema = transform_props(label_schema)
    animated = AnimatedComponent(recording_component, schema)
    assert animated.schema is schema


def test_strict_mode_validates(recording_component, label_schema):
    animated = create_animated_component(recording_component, label_schema, strict=True)
    with pytest.raises(TypeError, match="'opacity' does not accept str"):
        animated({"opacity": "1", "label": "x"})
    assert recording_component.calls == []


def test_non_strict_mode_does_not_validate(recording_component, label_schema):
    animated = create_animated_component(recording_component, label_schema)
    animated({"opacity": "1"})
    assert recording_component.calls[-1][0] == {"opacity": "1"}


def test_component_errors_propagate():
    def broken(props, ref):
        raise RuntimeError("render failed")

    with pytest.raises(RuntimeError, match="render failed"):
        create_animated_component(broken)({})


def test_non_callable_rejected():
    with pytest.raises(TypeError, match="non-callable"):
        create_animated_component("Label")


def test_display_name(recording_component):
    animated = create_animated_component(recording_component)
    assert animated.display_name == "Animated(component)"
    assert "Animated(component)" in repr(animated)


def test_ref_handle():
    ref = create_ref("node")
    assert isinstance(ref, Ref)
    assert ref.current == "node"
    ref.current = None
    assert create_ref().current is None


class TestPerfMetrics:
    """Slow prop resolution is reported as [PERF] when metrics are on."""

    def test_slow_resolution_warns(self, recording_component, perf_metrics, monkeypatch, caplog):
        monkeypatch.setattr(wrapper_module, "SLOW_RESOLVE_WARN_MS", -1.0)
        animated = create_animated_component(recording_component)

        with caplog.at_level(logging.WARNING):
            animated({"x": AnimatedValue(1.0)})

        perf = [r for r in caplog.records if "[PERF]" in r.getMessage()]
        assert len(perf) == 1
        assert "Animated(component) slow prop resolution" in perf[0].getMessage()

    def test_fast_resolution_is_quiet(self, recording_component, perf_metrics, monkeypatch, caplog):
        monkeypatch.setattr(wrapper_module, "SLOW_RESOLVE_WARN_MS", 60_000.0)
        animated = create_animated_component(recording_component)

        with caplog.at_level(logging.WARNING):
            animated({"x": 1})

        assert not [r for r in caplog.records if "[PERF]" in r.getMessage()]

    def test_metrics_off_is_quiet(self, recording_component, monkeypatch, caplog):
        monkeypatch.setattr(wrapper_module, "SLOW_RESOLVE_WARN_MS", -1.0)
        monkeypatch.setattr(wrapper_module, "is_perf_metrics_enabled", lambda: False)
        animated = create_animated_component(recording_component)

        with caplog.at_level(logging.WARNING):
            animated({"x": 1})

        assert not caplog.records
