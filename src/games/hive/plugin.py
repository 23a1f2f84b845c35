"""HivePlugin: implements the GamePlugin protocol for Hive."""

from __future__ import annotations

import logging
from typing import ClassVar

from src.config import settings
from src.engine.errors import InvalidActionError, NotYourTurnError
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
from src.games.hive.errors import DeserializationError, MoveValidationError
from src.games.hive.moves import SetMove
from src.games.hive.serialization import (
    move_from_node,
    move_to_node,
    state_from_node,
    state_to_node,
)
from src.games.hive.state import GameState
from src.games.hive.types import PlayerColor

logger = logging.getLogger(__name__)

SEAT_COLORS = [PlayerColor.RED, PlayerColor.BLUE]


def _make_phase(player_id: PlayerId) -> Phase:
    return Phase(
        name="play",
        expected_actions=[
            ExpectedAction(player_id=player_id, action_type="play"),
        ],
    )


class HivePlugin:
    """Hive: two players place and move insects until a bee is surrounded."""

    game_id: ClassVar[str] = "hive"
    display_name: ClassVar[str] = "Hive"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 2

    # ── Lifecycle ──

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        errors = self.validate_config(config.options)
        if errors:
            raise ValueError(f"Invalid game config: {'; '.join(errors)}")
        radius = config.options.get("board_radius", settings.board_radius)
        state = GameState.initial(
            red_name=players[0].display_name,
            blue_name=players[1].display_name,
            radius=radius,
        )
        game_data: dict = {
            "state": state_to_node(state),
            "board_radius": radius,
            "colors": {p.player_id: SEAT_COLORS[p.seat_index].value for p in players},
        }

        events = [
            Event(event_type="game_started", payload={
                "players": [p.player_id for p in players],
                "board_radius": radius,
            }),
        ]

        return game_data, _make_phase(players[0].player_id), events

    def validate_config(self, options: dict) -> list[str]:
        errors: list[str] = []
        radius = options.get("board_radius")
        if radius is not None and (type(radius) is not int or radius < 2):
            errors.append("board_radius must be an integer >= 2")
        return errors

    # ── Core game loop ──

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        if phase.name != "play":
            return []

        expected_pid = phase.expected_actions[0].player_id if phase.expected_actions else None
        if player_id != expected_pid:
            return []

        state = self._state(game_data)
        color = self._color(game_data, player_id)
        return [move_to_node(m) for m in state.possible_moves(color)]

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        if phase.name != "play":
            return f"Unexpected phase: {phase.name}"

        try:
            move = move_from_node(action.payload)
        except DeserializationError as e:
            return e.message

        state = self._state(game_data)
        color = self._color(game_data, action.player_id)
        if color != state.current_player_color:
            return "Not your turn"
        try:
            state.validate_move(color, move)
        except MoveValidationError as e:
            return e.reason
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        if phase.name != "play":
            raise ValueError(f"Unknown phase: {phase.name}")

        try:
            move = move_from_node(action.payload)
        except DeserializationError as e:
            raise InvalidActionError(e.message, action) from e

        state = self._state(game_data)
        if self._color(game_data, action.player_id) != state.current_player_color:
            raise NotYourTurnError(f"{action.player_id} acted out of turn")

        state = state.apply_move(move)
        events = [
            Event(
                event_type="piece_set" if isinstance(move, SetMove) else "piece_dragged",
                player_id=action.player_id,
                payload=move_to_node(move),
            ),
        ]

        state, game_over = self._advance(state, players, events)
        game_data["state"] = state_to_node(state)

        if game_over is not None:
            return TransitionResult(
                game_data=game_data,
                events=events,
                next_phase=Phase(name="game_over"),
                scores=game_over.final_scores,
                game_over=game_over,
            )

        next_idx = SEAT_COLORS.index(state.current_player_color)
        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=_make_phase(players[next_idx].player_id),
            scores={p.player_id: 0.0 for p in players},
            game_over=None,
        )

    # ── View filtering ──

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        # No hidden info, return everything
        return {
            "state": game_data["state"],
            "colors": game_data["colors"],
        }

    # ── Private helpers ──

    def _state(self, game_data: dict) -> GameState:
        return state_from_node(game_data["state"], radius=game_data.get("board_radius"))

    def _color(self, game_data: dict, player_id: PlayerId) -> PlayerColor:
        return PlayerColor(game_data["colors"][player_id])

    def _advance(
        self,
        state: GameState,
        players: list[Player],
        events: list[Event],
    ) -> tuple[GameState, GameResult | None]:
        """Check for the end of the game and skip turns of players who cannot move."""
        game_over = self._check_game_over(state, players)
        if game_over is not None:
            return state, game_over

        for _ in range(2):
            if state.possible_moves(state.current_player_color):
                return state, None
            skipped = players[SEAT_COLORS.index(state.current_player_color)]
            logger.info(f"{skipped.player_id} has no legal move at turn {state.turn}, skipping")
            events.append(Event(event_type="turn_skipped", player_id=skipped.player_id, payload={}))
            state = state.skip_turn()

        return state, self._end_game(players, winner=None, reason="no_moves")

    def _check_game_over(self, state: GameState, players: list[Player]) -> GameResult | None:
        red_lost = state.board.is_bee_surrounded(PlayerColor.RED)
        blue_lost = state.board.is_bee_surrounded(PlayerColor.BLUE)

        if red_lost and blue_lost:
            return self._end_game(players, winner=None, reason="both_bees_surrounded")
        if red_lost:
            return self._end_game(players, winner=players[1], reason="bee_surrounded")
        if blue_lost:
            return self._end_game(players, winner=players[0], reason="bee_surrounded")
        if state.round >= settings.round_limit:
            return self._end_game(players, winner=None, reason="round_limit")
        return None

    def _end_game(self, players: list[Player], winner: Player | None, reason: str) -> GameResult:
        final_scores = {
            p.player_id: 1.0 if winner is not None and p.player_id == winner.player_id else 0.0
            for p in players
        }
        return GameResult(
            winners=[winner.player_id] if winner is not None else [],
            final_scores=final_scores,
            reason=reason,
        )
