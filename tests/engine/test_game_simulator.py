"""Tests for the synchronous game simulator."""

import pytest

from src.engine.bot_strategy import RandomStrategy
from src.engine.game_simulator import (
    SimulationState,
    apply_action,
    clone_state,
    play_game,
)
from src.engine.models import Action, GameConfig, Player, PlayerId
from src.games.hive.plugin import HivePlugin
from src.games.hive.serialization import state_from_node

SMALL_BOARD = GameConfig(options={"board_radius": 4})


def _make_players() -> list[Player]:
    return [
        Player(player_id=PlayerId(f"p{i}"), display_name=f"P{i}", seat_index=i)
        for i in range(2)
    ]


def _make_initial_state() -> tuple:
    """Create an initial Hive simulation state."""
    plugin = HivePlugin()
    players = _make_players()
    game_data, phase, _events = plugin.create_initial_state(players, SMALL_BOARD)

    state = SimulationState(
        game_data=game_data,
        phase=phase,
        players=players,
        scores={p.player_id: 0.0 for p in players},
    )
    return plugin, state


def _first_action(plugin, state: SimulationState) -> Action:
    pid = state.phase.expected_actions[0].player_id
    valid = plugin.get_valid_actions(state.game_data, state.phase, pid)
    return Action(action_type=state.phase.name, player_id=pid, payload=valid[0])


def test_apply_action_passes_the_turn():
    plugin, state = _make_initial_state()

    apply_action(plugin, state, _first_action(plugin, state))

    assert state.actions_played == 1
    assert state.phase.expected_actions[0].player_id == "p1"
    assert state_from_node(state.game_data["state"], radius=4).turn == 1


def test_clone_state_independence():
    """Modifying cloned state must not affect the original."""
    plugin, state = _make_initial_state()
    apply_action(plugin, state, _first_action(plugin, state))

    cloned = clone_state(state)
    apply_action(plugin, cloned, _first_action(plugin, cloned))

    assert state.actions_played == 1
    assert state.phase.expected_actions[0].player_id == "p1"
    assert state_from_node(state.game_data["state"], radius=4).turn == 1
    assert cloned.actions_played == 2
    # A player left without moves is skipped, so the turn may run ahead
    assert state_from_node(cloned.game_data["state"], radius=4).turn >= 2


def test_full_game_via_simulator():
    """Two random players finish a game before the round limit runs out."""
    plugin = HivePlugin()
    players = _make_players()
    strategies = {"p0": RandomStrategy(seed=1), "p1": RandomStrategy(seed=2)}

    state = play_game(plugin, players, strategies, SMALL_BOARD, max_actions=200)

    assert state.game_over is not None
    assert state.game_over.reason in {
        "bee_surrounded",
        "both_bees_surrounded",
        "round_limit",
        "no_moves",
    }
    assert state.actions_played <= 60
    assert sum(state.scores.values()) in (0.0, 1.0)


def test_play_game_respects_action_limit():
    plugin = HivePlugin()
    strategies = {"p0": RandomStrategy(seed=5), "p1": RandomStrategy(seed=6)}

    state = play_game(plugin, _make_players(), strategies, SMALL_BOARD, max_actions=3)

    assert state.game_over is None
    assert state.actions_played == 3


def test_play_game_rejects_invalid_choice():
    class OpponentPieceStrategy:
        def choose_action(self, game_data, phase, player_id, plugin, players=None):
            return {
                "class": "setmove",
                "piece": {"owner": "BLUE", "type": "BEE"},
                "destination": {"x": 0, "y": 0, "z": 0, "isObstructed": False},
            }

    strategies = {"p0": OpponentPieceStrategy(), "p1": OpponentPieceStrategy()}
    with pytest.raises(ValueError, match="invalid action"):
        play_game(HivePlugin(), _make_players(), strategies, SMALL_BOARD)


def test_play_game_uses_bot_ids():
    players = [
        Player(player_id=PlayerId(f"p{i}"), display_name=f"Bot{i}", seat_index=i, bot_id="random")
        for i in range(2)
    ]

    state = play_game(HivePlugin(), players, config=SMALL_BOARD, max_actions=4)

    assert state.actions_played == 4
    assert state_from_node(state.game_data["state"], radius=4).turn >= 4
