from __future__ import annotations

import pytest

from src.games.hive.field import Field
from src.games.hive.types import (
    INITIAL_PIECE_TYPES,
    Piece,
    PieceType,
    PlayerColor,
    initial_pieces,
)


class TestTypes:
    def test_opponent(self) -> None:
        assert PlayerColor.RED.opponent() is PlayerColor.BLUE
        assert PlayerColor.BLUE.opponent() is PlayerColor.RED

    def test_piece_chars(self) -> None:
        assert PieceType.BEETLE.char == "T"
        assert PieceType.from_char("b") is PieceType.BEE
        with pytest.raises(ValueError):
            PieceType.from_char("X")
        with pytest.raises(ValueError):
            PlayerColor.from_char("G")

    def test_initial_pool(self) -> None:
        pool = initial_pieces(PlayerColor.BLUE)
        assert len(pool) == len(INITIAL_PIECE_TYPES) == 11
        assert all(p.owner is PlayerColor.BLUE for p in pool)
        assert pool.count(Piece(PlayerColor.BLUE, PieceType.ANT)) == 3
        assert pool.count(Piece(PlayerColor.BLUE, PieceType.BEE)) == 1


class TestField:
    def test_from_token(self) -> None:
        cell = Field.from_token("BG")
        assert cell.piece == Piece(PlayerColor.BLUE, PieceType.GRASSHOPPER)
        assert cell.owner is PlayerColor.BLUE
        assert not cell.is_obstructed

    def test_empty_token(self) -> None:
        cell = Field.from_token("")
        assert cell.is_empty()
        assert cell.owner is None

    @pytest.mark.parametrize("token", ["R", "rb", "RBB", "GB", "RX"])
    def test_invalid_token(self, token: str) -> None:
        with pytest.raises(ValueError):
            Field.from_token(token)

    def test_stack_owner_is_top_piece(self) -> None:
        cell = Field.from_token("RB")
        cell.push(Piece(PlayerColor.BLUE, PieceType.BEETLE))
        assert cell.is_owned_by(PlayerColor.BLUE)
        assert not cell.is_owned_by(PlayerColor.RED)
        assert str(cell) == "BT"
        assert cell.pop() == Piece(PlayerColor.BLUE, PieceType.BEETLE)
        assert cell.is_owned_by(PlayerColor.RED)

    def test_pop_empty(self) -> None:
        assert Field().pop() is None

    def test_obstructed(self) -> None:
        cell = Field(is_obstructed=True)
        assert cell.is_occupied()
        assert not cell.has_pieces()
        assert not cell.is_empty()
        assert str(cell) == "[]"
