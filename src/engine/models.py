"""Values passed between the engine and a game plugin."""

from __future__ import annotations

from typing import NewType

from pydantic import BaseModel, Field

PlayerId = NewType("PlayerId", str)


class Player(BaseModel):
    """A seat at the table; seat 0 moves first."""

    player_id: PlayerId
    display_name: str
    seat_index: int
    bot_id: str | None = None  # strategy play_game() falls back to


class GameConfig(BaseModel):
    options: dict = Field(default_factory=dict)


class ExpectedAction(BaseModel):
    player_id: PlayerId
    action_type: str


class Phase(BaseModel):
    """Who has to act next.

    Turns are sequential, so a running game expects exactly one action and
    a finished one expects none.
    """

    name: str
    expected_actions: list[ExpectedAction] = Field(default_factory=list)


class Action(BaseModel):
    action_type: str
    player_id: PlayerId
    payload: dict


class Event(BaseModel):
    event_type: str
    player_id: PlayerId | None = None  # None for game-wide events
    payload: dict = Field(default_factory=dict)


class GameResult(BaseModel):
    winners: list[PlayerId]  # empty for a draw
    final_scores: dict[str, float]
    reason: str


class TransitionResult(BaseModel):
    game_data: dict
    events: list[Event]
    next_phase: Phase
    scores: dict[str, float]
    game_over: GameResult | None = None
