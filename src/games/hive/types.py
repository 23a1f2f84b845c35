"""Domain types for Hive: colors, piece types, pieces and game constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlayerColor(str, Enum):
    RED = "RED"
    BLUE = "BLUE"

    def opponent(self) -> PlayerColor:
        return PlayerColor.BLUE if self is PlayerColor.RED else PlayerColor.RED

    @property
    def char(self) -> str:
        return self.value[0]

    @classmethod
    def from_char(cls, c: str) -> PlayerColor:
        for color in cls:
            if color.char == c.upper():
                return color
        raise ValueError(f"Did not recognize player color {c}")


class PieceType(str, Enum):
    ANT = "ANT"
    BEE = "BEE"
    BEETLE = "BEETLE"
    GRASSHOPPER = "GRASSHOPPER"
    SPIDER = "SPIDER"

    @property
    def char(self) -> str:
        return _PIECE_CHARS[self]

    @classmethod
    def from_char(cls, c: str) -> PieceType:
        for piece_type, char in _PIECE_CHARS.items():
            if char == c.upper():
                return piece_type
        raise ValueError(f"Did not recognize piece type {c}")


# Beetle is 'T' so it does not collide with Bee.
_PIECE_CHARS: dict[PieceType, str] = {
    PieceType.ANT: "A",
    PieceType.BEE: "B",
    PieceType.BEETLE: "T",
    PieceType.GRASSHOPPER: "G",
    PieceType.SPIDER: "S",
}


@dataclass(frozen=True)
class Piece:
    owner: PlayerColor
    piece_type: PieceType

    def __str__(self) -> str:
        return f"{self.owner.char}{self.piece_type.char}"


@dataclass(frozen=True)
class HivePlayer:
    """Identity of one side of the game."""
    color: PlayerColor
    display_name: str


# --- Constants ---

ROUND_LIMIT = 30
BOARD_RADIUS = 6
FIELD_COUNT = 91  # count(1) = 1, count(r) = count(r - 1) + 6 * (r - 1)

INITIAL_PIECE_TYPES: list[PieceType] = [
    PieceType.BEE,
    PieceType.SPIDER,
    PieceType.SPIDER,
    PieceType.SPIDER,
    PieceType.GRASSHOPPER,
    PieceType.GRASSHOPPER,
    PieceType.BEETLE,
    PieceType.BEETLE,
    PieceType.ANT,
    PieceType.ANT,
    PieceType.ANT,
]


def initial_pieces(color: PlayerColor) -> list[Piece]:
    """Return the full undeployed pool for one color."""
    return [Piece(owner=color, piece_type=t) for t in INITIAL_PIECE_TYPES]
