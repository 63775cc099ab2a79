from __future__ import annotations

import logging
from typing import Optional

from src.services.events import (
    EventBus,
    GameCreated,
    GameDeleted,
    GameEnded,
    GameEvent,
    GameImported,
    MoveMade,
    MoveRejected,
)

_LOGGER = logging.getLogger(__name__)


def describe(event: GameEvent) -> str:
    """One line summary of an event, as it ends up in the log"""
    match event:
        case GameCreated():
            return f"game {event.game_id} created"
        case MoveMade():
            extra = f" ({event.special_move})" if event.special_move else ""
            return f"game {event.game_id}: move {event.from_square} -> {event.to_square}{extra}"
        case MoveRejected():
            return f"game {event.game_id}: invalid move {event.from_square} -> {event.to_square}: {event.reason}"
        case GameImported():
            return f"game {event.game_id} imported from text"
        case GameEnded():
            return f"game {event.game_id} end state: {event.end_state}"
        case GameDeleted():
            return f"game {event.game_id} deleted"


def register_logging_listener(bus: EventBus, logger: Optional[logging.Logger] = None) -> None:
    """Write every game event to the given logger (refused moves as warnings)."""
    log = logger or _LOGGER

    def _on_event(event: GameEvent) -> None:
        level = logging.WARNING if isinstance(event, MoveRejected) else logging.INFO
        log.log(level, describe(event))

    for event_type in (GameCreated, MoveMade, MoveRejected, GameImported, GameEnded, GameDeleted):
        bus.subscribe(event_type, _on_event)
