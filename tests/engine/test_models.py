"""Tests for the values exchanged between engine and plugin."""

import pytest
from pydantic import ValidationError

from src.engine.models import (
    Action,
    Event,
    ExpectedAction,
    GameConfig,
    GameResult,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)


def test_player_without_bot():
    player = Player(player_id=PlayerId("p1"), display_name="Alice", seat_index=0)
    assert player.bot_id is None


def test_config_options_are_not_shared():
    first = GameConfig()
    first.options["board_radius"] = 3
    assert GameConfig().options == {}


def test_expected_action_needs_a_player():
    with pytest.raises(ValidationError):
        ExpectedAction(action_type="play")


def test_action_needs_a_payload():
    with pytest.raises(ValidationError):
        Action(action_type="play", player_id=PlayerId("p1"))


def test_game_wide_event():
    event = Event(event_type="game_started", payload={"board_radius": 6})
    assert event.player_id is None


def test_finished_phase_round_trip():
    result = TransitionResult(
        game_data={"state": {}},
        events=[Event(event_type="piece_set", player_id=PlayerId("p1"))],
        next_phase=Phase(name="game_over"),
        scores={"p1": 1.0, "p2": 0.0},
        game_over=GameResult(
            winners=[PlayerId("p1")],
            final_scores={"p1": 1.0, "p2": 0.0},
            reason="bee_surrounded",
        ),
    )
    restored = TransitionResult.model_validate(result.model_dump())
    assert restored == result
    assert restored.next_phase.expected_actions == []


def test_result_needs_a_reason():
    with pytest.raises(ValidationError):
        GameResult(winners=[], final_scores={})
