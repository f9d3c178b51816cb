"""Tests for root value accessors and value shapes."""
import threading

import pytest

from animated.animation.accessor import RootValue, ValueAccessor
from animated.animation.types import ValueShape, shape_of


class TestShapeOf:
    """Shape inference from literals."""

    @pytest.mark.parametrize("value, shape", [
        (0, ValueShape.NUMBER),
        (1.5, ValueShape.NUMBER),
        ("10px", ValueShape.STRING),
        ([1, 2], ValueShape.SEQUENCE),
        ((1, "a"), ValueShape.SEQUENCE),
    ])
    def test_shapes(self, value, shape):
        assert shape_of(value) is shape

    def test_bool_is_not_a_number(self):
        with pytest.raises(TypeError):
            shape_of(True)

    def test_empty_sequence_rejected(self):
        with pytest.raises(ValueError, match="at least one element"):
            shape_of([])

    def test_nested_sequence_rejected(self):
        with pytest.raises(TypeError, match="Sequence elements"):
            shape_of([[1, 2]])

    def test_other_objects_rejected(self):
        with pytest.raises(TypeError):
            shape_of({"x": 1})


def test_root_value_is_an_accessor():
    """RootValue satisfies the accessor contract."""
    root = RootValue(3.0)
    assert isinstance(root, ValueAccessor)
    assert root.shape is ValueShape.NUMBER
    assert root.length is None
    assert root.get_value() == 3.0


def test_root_sequence_stored_as_tuple():
    """Sequence roots hand out immutable snapshots of a fixed length."""
    source = [1.0, 2.0, 3.0]
    root = RootValue(source)
    source.append(4.0)

    assert root.get_value() == (1.0, 2.0, 3.0)
    assert root.length == 3

    root.set_value([4.0, 5.0, 6.0])
    assert root.get_value() == (4.0, 5.0, 6.0)


def test_set_value_rejects_shape_change():
    """A number root cannot start returning strings."""
    root = RootValue(1.0)
    with pytest.raises(TypeError, match="number value into a string"):
        root.set_value("1px")
    assert root.get_value() == 1.0


def test_set_value_rejects_length_change():
    """Sequence roots keep their configured element count."""
    root = RootValue([0.0, 0.0])
    with pytest.raises(ValueError, match="keep 2 elements"):
        root.set_value([1.0, 2.0, 3.0])
    assert root.get_value() == (0.0, 0.0)


def test_concurrent_writers_leave_a_complete_snapshot():
    """Serialised writers never leave a torn sequence behind."""
    root = RootValue([0, 0, 0])

    def writer(n):
        for _ in range(200):
            root.set_value([n, n, n])

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    value = root.get_value()
    assert isinstance(value, tuple)
    assert len(set(value)) == 1
