from __future__ import annotations

"""Exception types raised by listeners and by the bus itself."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .report import StageFailure


class EventBusError(Exception):
    """Base class for all event bus errors."""


class ListenerError(EventBusError):
    """Raised by a listener stage to signal failure.

    The message is plain human-readable text; there are no error codes.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PublishError(EventBusError):
    """Raised by ``EventBus.publish`` when the bus aborts on a listener failure."""

    def __init__(self, failure: "StageFailure"):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def message(self) -> str:
        return self.failure.message
