"""Event bus port used for subscription wiring."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

EventHandler = Callable[[dict[str, Any]], Awaitable[Any]]


@runtime_checkable
class IEventBus(Protocol):
    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Invoke *handler* with the payload of every *event_name* event."""
        ...
