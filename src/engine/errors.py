from __future__ import annotations

from src.engine.models import Action


class GameEngineError(Exception):
    """Base class for engine errors."""
    pass


class InvalidActionError(GameEngineError):
    """Action payload cannot be understood by the game."""

    def __init__(self, message: str, action: Action | None = None):
        self.message = message
        self.action = action
        super().__init__(message)


class NotYourTurnError(GameEngineError):
    """Player tried to act when it's not their turn."""
    pass


class PluginError(GameEngineError):
    """Game plugin failed its sanity checks at registration."""
    pass
