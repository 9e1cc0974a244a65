from __future__ import annotations

from eventbus import BusSettings, Event, EventBus, Listener, PublishError
from eventbus.utils import setup_logger


class StringEcho(Listener):
    def __init__(self, name: str):
        self.name = name

    def on_event(self, event: Event) -> None:
        value = self.expect(event, str)
        print(f"{self.name} received str message: {value}")


class NumberListener(Listener):
    """Increments the number in ``on_before`` and prints it in ``on_event``."""

    def __init__(self, name: str):
        self.name = name

    def on_before(self, event: Event) -> None:
        value = self.expect(event, int)
        print(f"Changing {value} into {value + 1}")
        event.set_data(value + 1)

    def on_event(self, event: Event) -> None:
        print(f"{self.name} received int message: {self.expect(event, int)}")


def main():
    settings = BusSettings.from_env()
    logger = setup_logger(level=settings.log_level)
    bus = EventBus.from_settings(settings, logger=logger)

    bus.subscribe("bar", StringEcho("String Listener 1"))
    bus.subscribe("bar", StringEcho("String Listener 2"))
    bus.subscribe("foo", NumberListener("Number Listener"))

    bus.register("foo", Event(32))
    bus.register("bar", Event("hello"))
    # NumberListener rejects this one
    bus.register("foo", Event("hello"))

    try:
        report = bus.publish()
    except PublishError as exc:
        print("publish aborted:", exc)
        return
    print("publish report:", report.model_dump())


if __name__ == "__main__":
    main()
