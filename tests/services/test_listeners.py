"""Unit tests for src/services/listeners.py"""

import logging
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.services.events import (
    EventBus,
    GameCreated,
    GameDeleted,
    GameEnded,
    GameImported,
    MoveMade,
    MoveRejected,
)
from src.services.listeners import describe, register_logging_listener

GAME_ID = uuid4()


@pytest.mark.parametrize(
    "event, expected",
    [
        (GameCreated(game_id=GAME_ID, state="WHITE"), f"game {GAME_ID} created"),
        (
            MoveMade(GAME_ID, "e1", "g1", special_move="Castle", captured=None, state="BLACK"),
            f"game {GAME_ID}: move e1 -> g1 (Castle)",
        ),
        (
            MoveMade(GAME_ID, "e2", "e4", special_move=None, captured=None, state="BLACK"),
            f"game {GAME_ID}: move e2 -> e4",
        ),
        (
            MoveRejected(GAME_ID, "e2", "e5", reason="Move not allowed"),
            f"game {GAME_ID}: invalid move e2 -> e5: Move not allowed",
        ),
        (
            GameImported(GAME_ID, old_state="WHITE", new_state="BLACK"),
            f"game {GAME_ID} imported from text",
        ),
        (GameEnded(GAME_ID, end_state="White Won"), f"game {GAME_ID} end state: White Won"),
        (GameDeleted(GAME_ID), f"game {GAME_ID} deleted"),
    ],
)
def test_describe(event: object, expected: str) -> None:
    assert describe(event) == expected


def test_logging_listener_levels() -> None:
    bus = EventBus()
    logger = MagicMock(spec=logging.Logger)
    register_logging_listener(bus, logger)

    bus.emit(GameCreated(game_id=GAME_ID, state="WHITE"))
    bus.emit(MoveRejected(GAME_ID, "e2", "e5", reason="Move not allowed"))

    levels = [log_call.args[0] for log_call in logger.log.call_args_list]
    assert levels == [logging.INFO, logging.WARNING]


def test_logging_listener_default_logger(caplog: pytest.LogCaptureFixture) -> None:
    bus = EventBus()
    register_logging_listener(bus)
    with caplog.at_level(logging.INFO, logger="src.services.listeners"):
        bus.emit(GameDeleted(GAME_ID))
    assert caplog.messages == [f"game {GAME_ID} deleted"]
