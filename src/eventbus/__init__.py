from __future__ import annotations

"""In-process publish/subscribe event bus with three-stage listeners."""

from .bus import EventBus, FailurePolicy
from .errors import EventBusError, ListenerError, PublishError
from .event import Event, EventView
from .listener import CallbackListener, Listener
from .report import PublishReport, StageFailure
from .settings import BusSettings

__all__ = [
    "EventBus",
    "FailurePolicy",
    "Event",
    "EventView",
    "Listener",
    "CallbackListener",
    "EventBusError",
    "ListenerError",
    "PublishError",
    "PublishReport",
    "StageFailure",
    "BusSettings",
]
