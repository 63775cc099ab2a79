"""
Notifications the service broadcasts after it changed (or refused to change) a game.

Listeners (UI, audio, logging, ...) subscribe on an EventBus they are handed. There is no global bus:
whoever builds the ChessService decides which bus (and so which listeners) it talks to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional
from uuid import UUID


@dataclass(frozen=True)
class GameCreated:
    game_id: UUID
    state: str


@dataclass(frozen=True)
class MoveMade:
    game_id: UUID
    from_square: str
    to_square: str
    special_move: Optional[str]
    captured: Optional[str]
    state: str


@dataclass(frozen=True)
class MoveRejected:
    game_id: UUID
    from_square: str
    to_square: str
    reason: str


@dataclass(frozen=True)
class GameImported:
    game_id: UUID
    old_state: str
    new_state: str


@dataclass(frozen=True)
class GameEnded:
    game_id: UUID
    end_state: str


@dataclass(frozen=True)
class GameDeleted:
    game_id: UUID


GameEvent = GameCreated | MoveMade | MoveRejected | GameImported | GameEnded | GameDeleted

EventHandler = Callable[[Any], None]


class EventBus:
    """
    Handlers are registered per event class and called in the order they subscribed.

    A handler that raises stops the emit: the error reaches whoever emitted the event.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = {}

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type, handler: EventHandler) -> None:
        """Unknown handlers are ignored"""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        # copy, so handlers may (un)subscribe while the event is delivered
        for handler in list(self._handlers.get(type(event), [])):
            handler(event)
