"""A single board cell: a stack of pieces plus an obstruction flag."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.games.hive.types import Piece, PieceType, PlayerColor

# Two-character cell notation used by ASCII hex grids: <color><type>, e.g. "RB".
FIELD_SYNTAX = re.compile(r"^([A-Z])([A-Z])$")


@dataclass
class Field:
    """Contents of one cell. Only the top of the stack is movable and owns the cell."""

    piece_stack: list[Piece] = field(default_factory=list)
    is_obstructed: bool = False

    @classmethod
    def from_token(cls, raw: str) -> Field:
        """Parse the two-character notation. An empty token is an empty field.

        Obstructed fields and stacks cannot be expressed in this notation.
        """
        if not raw:
            return cls()
        match = FIELD_SYNTAX.match(raw)
        if match is None:
            raise ValueError(f"{raw} does not match field syntax {FIELD_SYNTAX.pattern}")
        piece = Piece(
            owner=PlayerColor.from_char(match.group(1)),
            piece_type=PieceType.from_char(match.group(2)),
        )
        return cls(piece_stack=[piece])

    @property
    def owner(self) -> PlayerColor | None:
        top = self.piece
        return top.owner if top is not None else None

    @property
    def piece(self) -> Piece | None:
        """The top-most piece, if any."""
        return self.piece_stack[-1] if self.piece_stack else None

    def is_owned_by(self, color: PlayerColor) -> bool:
        return self.owner == color

    def has_pieces(self) -> bool:
        return bool(self.piece_stack)

    def is_occupied(self) -> bool:
        return self.is_obstructed or self.has_pieces()

    def is_empty(self) -> bool:
        return not self.is_occupied()

    def push(self, piece: Piece) -> None:
        self.piece_stack.append(piece)

    def pop(self) -> Piece | None:
        return self.piece_stack.pop() if self.piece_stack else None

    def copy(self) -> Field:
        return Field(piece_stack=list(self.piece_stack), is_obstructed=self.is_obstructed)

    def __str__(self) -> str:
        top = self.piece
        return str(top) if top is not None else "[]"
