"""Value accessors: "a thing that currently holds a value of a known shape".

The Scheduler owns the root values and is the only writer. Everything else
reads through get_value(), which runs every frame and must stay cheap.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from threading import Lock
from typing import Any, Optional

from animated.animation.types import ValueShape, shape_of


class ValueAccessor(ABC):
    """Minimal read contract shared by root values and AnimatedValue."""

    @property
    @abstractmethod
    def shape(self) -> ValueShape:
        """Shape of every value get_value() returns."""

    @abstractmethod
    def get_value(self) -> Any:
        """Return the current value. No side effects."""


class RootValue(ValueAccessor):
    """
    Writable root of an animation lineage.

    Holds a number, a string or a fixed-length sequence. Sequences are stored
    as tuples so a reader always sees one complete snapshot even while the
    Scheduler writes from another thread. Writers are serialised; readers
    never take the lock.
    """

    def __init__(self, initial: Any):
        """
        Args:
            initial: Initial literal. Its shape (and for sequences its length)
                is fixed from here on.

        Raises:
            TypeError: initial is not an animatable literal
            ValueError: initial is an empty sequence
        """
        self._shape = shape_of(initial)
        self._length: Optional[int] = len(initial) if self._shape is ValueShape.SEQUENCE else None
        self._value = tuple(initial) if self._shape is ValueShape.SEQUENCE else initial
        self._write_lock = Lock()

    @property
    def shape(self) -> ValueShape:
        return self._shape

    @property
    def length(self) -> Optional[int]:
        """Element count for sequence roots, None for scalars."""
        return self._length

    def get_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> None:
        """
        Replace the current value (Scheduler write path).

        Raises:
            TypeError: value has a different shape than the root
            ValueError: sequence length differs from the configured count
        """
        new_shape = shape_of(value)
        if new_shape is not self._shape:
            raise TypeError(
                f"Cannot change a {self._shape.value} value into a {new_shape.value} value"
            )
        if new_shape is ValueShape.SEQUENCE:
            if len(value) != self._length:
                raise ValueError(
                    f"Sequence value must keep {self._length} elements, got {len(value)}"
                )
            value = tuple(value)
        with self._write_lock:
            self._value = value

    def __repr__(self) -> str:
        return f"RootValue({self._value!r})"
