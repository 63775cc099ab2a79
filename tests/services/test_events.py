"""Unit tests for src/services/events.py"""

from unittest.mock import MagicMock, call
from uuid import uuid4

import pytest

from src.services.events import EventBus, GameCreated, GameDeleted, MoveRejected


def test_handlers_receive_their_event_type() -> None:
    bus = EventBus()
    on_created = MagicMock()
    on_deleted = MagicMock()
    bus.subscribe(GameCreated, on_created)
    bus.subscribe(GameDeleted, on_deleted)

    event = GameCreated(game_id=uuid4(), state="WHITE")
    bus.emit(event)

    on_created.assert_called_once_with(event)
    on_deleted.assert_not_called()


def test_handlers_called_in_subscription_order() -> None:
    bus = EventBus()
    manager = MagicMock()
    bus.subscribe(GameDeleted, manager.first)
    bus.subscribe(GameDeleted, manager.second)

    event = GameDeleted(game_id=uuid4())
    bus.emit(event)
    assert manager.mock_calls == [call.first(event), call.second(event)]


def test_unsubscribe() -> None:
    bus = EventBus()
    handler = MagicMock()
    bus.subscribe(GameDeleted, handler)
    bus.unsubscribe(GameDeleted, handler)
    bus.unsubscribe(GameDeleted, handler)  # unknown handlers are ignored

    bus.emit(GameDeleted(game_id=uuid4()))
    handler.assert_not_called()


def test_emit_without_subscribers() -> None:
    EventBus().emit(GameDeleted(game_id=uuid4()))


def test_handler_may_unsubscribe_while_emitting() -> None:
    bus = EventBus()
    later = MagicMock()

    def once(event: GameDeleted) -> None:
        bus.unsubscribe(GameDeleted, once)

    bus.subscribe(GameDeleted, once)
    bus.subscribe(GameDeleted, later)
    bus.emit(GameDeleted(game_id=uuid4()))
    bus.emit(GameDeleted(game_id=uuid4()))
    assert later.call_count == 2


def test_handler_errors_propagate() -> None:
    bus = EventBus()
    bus.subscribe(MoveRejected, MagicMock(side_effect=RuntimeError("listener broke")))
    with pytest.raises(RuntimeError):
        bus.emit(MoveRejected(game_id=uuid4(), from_square="e2", to_square="e5", reason="no"))


def test_events_are_frozen() -> None:
    event = GameDeleted(game_id=uuid4())
    with pytest.raises(AttributeError):
        event.game_id = uuid4()  # type: ignore[misc]
