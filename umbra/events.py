"""Global event system for narration and cross-system notifications.

The simulation core announces what happened (messages, deaths, dropped
items, level changes) through this bus so that a rendering layer
and the message log can react without the core knowing about them.

USE FOR:
- Messages to the message log
- Cross-system notifications (actor death, level changes)

DO NOT USE FOR:
- Core game mechanics (combat resolution, movement, turn processing)
- Operations that need immediate return values or synchronous confirmation
- Error handling or exception propagation

The event bus is fire-and-forget: publish an event without expecting return values
or confirmations. All handlers execute immediately (synchronously). If you need a
return value or confirmation, use direct method calls.
"""

import logging
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

from umbra import colors

logger = logging.getLogger(__name__)


@dataclass
class GameEvent:
    """Base class for all game events."""

    pass


@dataclass
class MessageEvent(GameEvent):
    """Event for adding messages to the message log.

    ``turn`` is the turn number the narrated thing happened on; None lets the
    log use the turn it currently knows about.
    """

    text: str
    color: colors.Color = colors.MESSAGE_DEFAULT
    turn: int | None = None
    stack: bool = True


@dataclass
class ActorDeathEvent(GameEvent):
    """Event for when an actor dies."""

    actor: Any  # Avoid circular imports
    location: Any


@dataclass
class ItemsDroppedEvent(GameEvent):
    """Event for items landing on a dungeon cell."""

    items: list[Any]
    location: Any


@dataclass
class LevelChangedEvent(GameEvent):
    """Event for the player arriving on a different dungeon level."""

    level_index: int
    dungeon: Any


class EventBus:
    """Simple event bus for publish/subscribe pattern."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = {}

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Callable) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._handlers:
            with suppress(ValueError):
                self._handlers[event_type].remove(handler)

    def publish(self, event: GameEvent) -> None:
        """Publish an event to all subscribed handlers."""
        event_type = type(event)
        if event_type in self._handlers:
            # Copy the handler list to allow safe subscribe/unsubscribe during dispatch
            for handler in list(self._handlers[event_type]):
                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Error handling event {event_type.__name__}")


# Global event bus instance
_global_event_bus = EventBus()


# Public API functions


def subscribe_to_event(event_type: type, handler: Callable) -> None:
    """Subscribe to an event type globally."""
    _global_event_bus.subscribe(event_type, handler)


def unsubscribe_from_event(event_type: type, handler: Callable) -> None:
    """Unsubscribe from an event type globally."""
    _global_event_bus.unsubscribe(event_type, handler)


def publish_event(event: GameEvent) -> None:
    """Publish an event globally."""
    _global_event_bus.publish(event)


def reset_event_bus_for_testing() -> None:
    """Reset the global event bus. Use only in tests."""
    global _global_event_bus
    _global_event_bus = EventBus()
