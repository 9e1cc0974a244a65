from __future__ import annotations

"""Listener contract for the event bus.

A listener may implement any of three stages. Each stage returns normally on
success and raises ``ListenerError`` with a readable message on failure:

* ``on_before``  – runs first for every listener; may rewrite the payload.
* ``on_event``   – main handling.
* ``on_after``   – finalisation; receives a read-only ``EventView``.

Stages that are not overridden are no-op successes.
"""

from typing import Any, Callable, Optional, Type, TypeVar, Union

from .errors import ListenerError
from .event import Event, EventView

T = TypeVar("T")


class Listener:
    """Base class for bus listeners."""

    name: Optional[str] = None

    def __str__(self) -> str:
        return self.name or type(self).__name__

    def on_before(self, event: Event) -> None:  # noqa: D401
        """Called before ``on_event`` for every listener of the topic."""

    def on_event(self, event: Event) -> None:  # noqa: D401
        """Called once every ``on_before`` of the topic succeeded."""

    def on_after(self, event: EventView) -> None:  # noqa: D401
        """Called after every ``on_event`` of the topic succeeded."""

    # ------------------------------------------------------------------
    # Helpers for concrete listeners
    # ------------------------------------------------------------------
    def expect(self, event: Union[Event, EventView], data_type: Type[T]) -> T:
        """Return the payload if it is a ``data_type``; raise ``ListenerError`` otherwise."""
        if event.data_type is not data_type:
            raise ListenerError(
                f"{self} received {event.data_type.__name__} payload, expected {data_type.__name__}"
            )
        return event.get_data(data_type)  # type: ignore[return-value]


class CallbackListener(Listener):
    """Wraps a plain ``callback(event)`` as the ``on_event`` stage."""

    def __init__(self, callback: Callable[[Event], Any], name: Optional[str] = None):
        self.callback = callback
        self.name = name or getattr(callback, "__name__", None)

    def on_event(self, event: Event) -> None:
        self.callback(event)
