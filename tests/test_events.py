"""Unit tests for the EventBus."""

from upcheck_core.events import BUILD_AFTER, BUILD_BEFORE, STANDARD_EVENTS, EventBus


def test_event_handlers_run_in_priority_order() -> None:
    bus = EventBus()
    seen: list[str] = []

    def make_handler(label: str):
        def handler(event):
            seen.append(f"{label}:{event.payload['value']}")

        return handler

    bus.on(BUILD_BEFORE, make_handler("one"), priority=0)
    bus.on(BUILD_BEFORE, make_handler("two"), priority=0)
    bus.on(BUILD_BEFORE, make_handler("high"), priority=5)
    bus.on(BUILD_BEFORE, make_handler("low"), priority=-1)
    bus.emit(BUILD_BEFORE, {"value": "ok"})

    assert seen == ["high:ok", "one:ok", "two:ok", "low:ok"]


def test_off_removes_handler() -> None:
    bus = EventBus()
    recorded: list[str] = []

    def handler(event):
        recorded.append(event.name)

    bus.on(BUILD_AFTER, handler)
    bus.off(BUILD_AFTER, handler)
    event = bus.emit(BUILD_AFTER)

    assert recorded == []
    assert event.payload == {}


def test_standard_events_are_listed() -> None:
    assert STANDARD_EVENTS == (
        "extension.pre_init",
        "extension.post_init",
        "build.before",
        "build.after",
    )
