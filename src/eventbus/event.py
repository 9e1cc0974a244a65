from __future__ import annotations

"""Type-erased payload container routed through the bus.

An ``Event`` holds exactly one value of any concrete type. Reads are
type-checked: asking for the wrong type yields ``None`` rather than raising,
and it is up to the reader to decide whether that is a failure.
"""

from typing import Any, Optional, Type, TypeVar

T = TypeVar("T")


class Event:
    """Holds one payload; the payload (and its type) may be replaced later."""

    __slots__ = ("_data",)

    def __init__(self, data: Any):
        self._data = data

    @property
    def data_type(self) -> type:
        return type(self._data)

    def get_data(self, data_type: Type[T]) -> Optional[T]:
        """Return the payload if it is exactly of ``data_type``, else ``None``."""
        if type(self._data) is data_type:
            return self._data
        return None

    def set_data(self, data: Any) -> None:
        """Replace the payload; the new value may be of a different type."""
        self._data = data

    def view(self) -> "EventView":
        return EventView(self)

    def __repr__(self) -> str:
        return f"Event(data={self._data!r})"


class EventView:
    """Read-only window onto an ``Event`` (no ``set_data``)."""

    __slots__ = ("_event",)

    def __init__(self, event: Event):
        self._event = event

    @property
    def data_type(self) -> type:
        return self._event.data_type

    def get_data(self, data_type: Type[T]) -> Optional[T]:
        return self._event.get_data(data_type)

    def __repr__(self) -> str:
        return f"EventView({self._event!r})"
