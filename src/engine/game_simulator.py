"""Synchronous game simulator: plays games without any transport in between.

Used to drive complete games between bot strategies and to explore
positions ahead of the live game.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from src.engine.bot_strategy import BotStrategy, get_strategy
from src.engine.models import Action, GameConfig, GameResult, Phase, Player, PlayerId
from src.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Mutable game state for synchronous simulation."""

    game_data: dict
    phase: Phase
    players: list[Player]
    scores: dict[str, float] = field(default_factory=dict)
    game_over: GameResult | None = None
    actions_played: int = 0


def apply_action(
    plugin: GamePlugin,
    state: SimulationState,
    action: Action,
) -> None:
    """Apply an action to *state* in place."""
    result = plugin.apply_action(
        state.game_data, state.phase, action, state.players
    )
    state.game_data = result.game_data
    state.phase = result.next_phase
    state.scores = result.scores or state.scores
    state.game_over = result.game_over
    state.actions_played += 1


def clone_state(state: SimulationState) -> SimulationState:
    """Deep-copy a simulation state.

    ``players`` is shared (immutable during a game).
    """
    return SimulationState(
        game_data=copy.deepcopy(state.game_data),
        phase=state.phase.model_copy(deep=True),
        players=state.players,  # shared, never mutated
        scores=dict(state.scores),
        game_over=state.game_over,
        actions_played=state.actions_played,
    )


def play_game(
    plugin: GamePlugin,
    players: list[Player],
    strategies: dict[str, BotStrategy] | None = None,
    config: GameConfig | None = None,
    max_actions: int = 500,
) -> SimulationState:
    """Play one game, asking each player's strategy for its action.

    *strategies* maps player ids to strategies; when omitted, each player's
    ``bot_id`` is looked up in the strategy registry (default "random").
    Stops when the game is over or after *max_actions* actions, whichever
    comes first.
    """
    if strategies is None:
        strategies = {p.player_id: get_strategy(p.bot_id or "random") for p in players}

    game_data, phase, _events = plugin.create_initial_state(players, config or GameConfig())
    state = SimulationState(
        game_data=game_data,
        phase=phase,
        players=players,
        scores={p.player_id: 0.0 for p in players},
    )

    while state.game_over is None and state.actions_played < max_actions:
        pid = _phase_player_id(state.phase)
        payload = strategies[pid].choose_action(
            state.game_data, state.phase, pid, plugin, state.players
        )
        action = Action(action_type=state.phase.name, player_id=pid, payload=payload)

        error = plugin.validate_action(state.game_data, state.phase, action)
        if error is not None:
            raise ValueError(f"Strategy for {pid} chose an invalid action: {error}")
        apply_action(plugin, state, action)

    logger.info(
        f"Game finished after {state.actions_played} actions: "
        f"{state.game_over.reason if state.game_over else 'action limit reached'}"
    )
    return state


def _phase_player_id(phase: Phase) -> PlayerId:
    """The player *phase* is waiting on."""
    if not phase.expected_actions:
        raise ValueError(f"Phase {phase.name} expects no action")
    return phase.expected_actions[0].player_id
