"""Error taxonomy for the Hive rules engine."""

from __future__ import annotations

from src.engine.errors import GameEngineError


class HiveError(GameEngineError):
    """Base class for Hive rules errors."""
    pass


class GeometryError(HiveError):
    """Coordinates violate a geometric invariant (e.g. x + y + z != 0)."""
    pass


class MoveValidationError(HiveError):
    """A move was rejected by a game rule."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class LogicPreconditionError(MoveValidationError):
    """An operation was asked to act on a piece that is not there."""
    pass


class DeserializationError(HiveError):
    """An external state or move description could not be decoded."""

    def __init__(self, message: str, location: str = ""):
        self.message = message
        self.location = location
        super().__init__(message)


class MissingFieldError(DeserializationError):
    """A required attribute is absent."""
    pass


class UnrecognizedLiteralError(DeserializationError):
    """An enum literal (color, piece type, move kind) is unknown."""
    pass


class MalformedNumberError(DeserializationError):
    """A numeric or boolean attribute (or a coordinate triple) is malformed."""
    pass
