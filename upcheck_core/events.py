"""Synchronous event bus used around the host build."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, DefaultDict

__all__ = [
    "BUILD_AFTER",
    "BUILD_BEFORE",
    "EXTENSION_POST_INIT",
    "EXTENSION_PRE_INIT",
    "Event",
    "EventBus",
    "EventHandler",
    "STANDARD_EVENTS",
]

BUILD_BEFORE = "build.before"
BUILD_AFTER = "build.after"
EXTENSION_PRE_INIT = "extension.pre_init"
EXTENSION_POST_INIT = "extension.post_init"

STANDARD_EVENTS = (
    EXTENSION_PRE_INIT,
    EXTENSION_POST_INIT,
    BUILD_BEFORE,
    BUILD_AFTER,
)


@dataclass(frozen=True)
class Event:
    """Lightweight event descriptor."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], None]


@dataclass(frozen=True)
class _EventSubscription:
    priority: int
    order: int
    handler: EventHandler


class EventBus:
    """Deliver events to handlers by descending priority, then registration order."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, list[_EventSubscription]] = defaultdict(list)
        self._sequence = 0

    def on(self, event_name: str, handler: EventHandler, priority: int = 0) -> None:
        self._sequence += 1
        self._handlers[event_name].append(
            _EventSubscription(priority=priority, order=self._sequence, handler=handler)
        )

    def off(self, event_name: str, handler: EventHandler) -> None:
        self._handlers[event_name] = [
            subscription
            for subscription in self._handlers[event_name]
            if subscription.handler is not handler
        ]

    def emit(self, event_name: str, payload: dict[str, Any] | None = None) -> Event:
        event = Event(event_name, dict(payload or {}))
        subscriptions = sorted(
            self._handlers[event_name],
            key=lambda item: (-item.priority, item.order),
        )
        for subscription in subscriptions:
            subscription.handler(event)
        return event
