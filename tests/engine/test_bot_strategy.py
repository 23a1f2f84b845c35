"""Tests for the bot strategy abstraction."""

import pytest

from src.engine.bot_strategy import RandomStrategy, get_strategy, register_strategy
from src.engine.models import GameConfig, Phase, Player, PlayerId
from src.games.hive.plugin import HivePlugin


def _make_initial_state():
    """Create a Hive game at its first move."""
    plugin = HivePlugin()
    players = [
        Player(player_id=PlayerId("p0"), display_name="P0", seat_index=0),
        Player(player_id=PlayerId("p1"), display_name="P1", seat_index=1),
    ]
    game_data, phase, _ = plugin.create_initial_state(players, GameConfig(options={"board_radius": 3}))
    return plugin, game_data, phase


def test_random_strategy_returns_valid_action():
    plugin, game_data, phase = _make_initial_state()
    strategy = RandomStrategy(seed=123)
    valid = plugin.get_valid_actions(game_data, phase, PlayerId("p0"))

    chosen = strategy.choose_action(game_data, phase, PlayerId("p0"), plugin)
    assert chosen in valid


def test_random_strategy_deterministic_with_seed():
    plugin, game_data, phase = _make_initial_state()

    s1 = RandomStrategy(seed=7)
    s2 = RandomStrategy(seed=7)
    c1 = s1.choose_action(game_data, phase, PlayerId("p0"), plugin)
    c2 = s2.choose_action(game_data, phase, PlayerId("p0"), plugin)
    assert c1 == c2


def test_random_strategy_without_actions_raises():
    plugin, game_data, phase = _make_initial_state()
    with pytest.raises(ValueError, match="No valid action"):
        RandomStrategy(seed=1).choose_action(game_data, phase, PlayerId("p1"), plugin)


def test_get_strategy_random():
    s = get_strategy("random", seed=3)
    assert isinstance(s, RandomStrategy)


def test_get_strategy_unknown_raises():
    with pytest.raises(ValueError, match="Unknown bot_id"):
        get_strategy("does_not_exist")


def test_register_strategy():
    class FirstActionStrategy:
        def choose_action(self, game_data, phase: Phase, player_id, plugin, players=None):
            return plugin.get_valid_actions(game_data, phase, player_id)[0]

    register_strategy("first", FirstActionStrategy)
    plugin, game_data, phase = _make_initial_state()
    chosen = get_strategy("first").choose_action(game_data, phase, PlayerId("p0"), plugin)
    assert chosen == plugin.get_valid_actions(game_data, phase, PlayerId("p0"))[0]
