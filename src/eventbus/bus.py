from __future__ import annotations

"""In-process publish/subscribe bus.

Producers ``register`` events under a topic; listeners ``subscribe`` to a
topic. Nothing is delivered until ``publish`` drains the pending queues and
runs the three listener stages (before, event, after) for each event.
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, DefaultDict, List, Optional, Tuple, Union

from .errors import ListenerError, PublishError
from .event import Event
from .listener import CallbackListener, Listener
from .report import PublishReport, StageFailure

if TYPE_CHECKING:  # pragma: no cover
    from .settings import BusSettings

STAGES = ("on_before", "on_event", "on_after")


class FailurePolicy(str, Enum):
    """What ``publish`` does after a listener stage fails."""

    ABORT = "abort"  # stop the whole publish call and raise PublishError
    SKIP_TOPIC = "skip_topic"  # drop the remaining events of that topic
    SKIP_EVENT = "skip_event"  # drop only the failing event


class EventBus:
    """Topic registry plus the dispatch loop.

    The bus is an ordinary object owned by its caller; there is no shared
    global instance. It is not thread-safe.
    """

    def __init__(
        self,
        fail_on_error: bool = True,
        policy: Union[FailurePolicy, str, None] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._events: DefaultDict[str, List[Event]] = defaultdict(list)
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)
        self._suppressed: List[type] = []
        self.logger = logger or logging.getLogger(__name__)

        if policy is None:
            policy = FailurePolicy.ABORT if fail_on_error else FailurePolicy.SKIP_TOPIC
        self.policy = FailurePolicy(policy)

    @classmethod
    def from_settings(cls, settings: "BusSettings", logger: Optional[logging.Logger] = None) -> "EventBus":
        return cls(fail_on_error=settings.fail_on_error, policy=settings.policy, logger=logger)

    @property
    def fail_on_error(self) -> bool:
        return self.policy is FailurePolicy.ABORT

    @fail_on_error.setter
    def fail_on_error(self, value: bool) -> None:
        self.policy = FailurePolicy.ABORT if value else FailurePolicy.SKIP_TOPIC

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    def register(self, topic: str, event: Event) -> "EventBus":
        """Queue ``event`` under ``topic`` until the next ``publish``."""
        self.logger.info("Register '%s' event: %r", topic, event)
        self._events[topic].append(event)
        return self

    def subscribe(self, topic: str, listener: Union[Listener, Callable[[Event], Any]]) -> "EventBus":
        """Attach ``listener`` to ``topic``. A plain callable becomes an ``on_event`` listener."""
        if not isinstance(listener, Listener):
            listener = CallbackListener(listener)
        self._listeners[topic].append(listener)
        return self

    def suppress(self, listener_type: Union[type, Listener]) -> "EventBus":
        """Exclude listeners of ``listener_type`` from every stage until released."""
        if not isinstance(listener_type, type):
            listener_type = type(listener_type)
        if listener_type not in self._suppressed:
            self._suppressed.append(listener_type)
            self.logger.debug("Suppressing listeners of type %s", listener_type.__name__)
        return self

    def release(self, listener_type: Union[type, Listener]) -> "EventBus":
        if not isinstance(listener_type, type):
            listener_type = type(listener_type)
        if listener_type in self._suppressed:
            self._suppressed.remove(listener_type)
            self.logger.debug("Released listeners of type %s", listener_type.__name__)
        return self

    def clear(self) -> None:
        """Discard every pending event without calling any listener."""
        self.logger.debug("Clearing %d pending event(s)", self.pending())
        self._events.clear()

    def pending(self, topic: Optional[str] = None) -> int:
        if topic is not None:
            return len(self._events.get(topic, []))
        return sum(len(events) for events in self._events.values())

    def listeners(self, topic: str) -> List[Listener]:
        return list(self._listeners.get(topic, []))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def publish(self) -> PublishReport:
        """Deliver every pending event and empty the queues.

        Raises ``PublishError`` on the first listener failure when the policy
        is ``ABORT``; otherwise failures are logged and collected in the
        returned report.
        """
        pending, self._events = self._events, defaultdict(list)
        report = PublishReport()

        for topic, events in pending.items():
            listeners = self._active_listeners(topic)
            if not listeners:
                self.logger.warning("No event listeners for '%s'; dropping %d event(s)", topic, len(events))
                report.dropped[topic] = len(events)
                continue

            for index, event in enumerate(events):
                outcome = self._dispatch(topic, event, listeners)
                if outcome is None:
                    report.delivered += 1
                    continue

                failure, cause = outcome
                if self.policy is not FailurePolicy.SKIP_EVENT:
                    failure.skipped = len(events) - index - 1
                report.failures.append(failure)
                if self.policy is FailurePolicy.ABORT:
                    raise PublishError(failure) from cause
                if self.policy is FailurePolicy.SKIP_TOPIC:
                    break

        return report

    def _active_listeners(self, topic: str) -> List[Listener]:
        suppressed = tuple(self._suppressed)
        return [listener for listener in self._listeners.get(topic, []) if not isinstance(listener, suppressed)]

    def _dispatch(
        self, topic: str, event: Event, listeners: List[Listener]
    ) -> Optional[Tuple[StageFailure, ListenerError]]:
        """Run all three stages for one event; return the first failure, if any."""
        view = event.view()
        for stage in STAGES:
            target = view if stage == "on_after" else event
            for listener in listeners:
                try:
                    getattr(listener, stage)(target)
                except ListenerError as exc:
                    self.logger.error("Listener error on '%s' (%s.%s): %s", topic, listener, stage, exc.message)
                    failure = StageFailure(topic=topic, stage=stage, listener=str(listener), message=exc.message)
                    return failure, exc
        return None
