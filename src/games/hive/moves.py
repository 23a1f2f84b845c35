"""Moves: placing an undeployed piece or dragging a placed one."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Union

from src.games.hive.coords import AxialCoords
from src.games.hive.field import Field
from src.games.hive.types import Piece


@dataclass(frozen=True)
class PositionedField:
    """A position together with the field observed there.

    The field is a snapshot for display and serialization; it is never
    used to re-validate a move.
    """
    coords: AxialCoords
    field: Field = dataclass_field(default_factory=Field, compare=False)


@dataclass(frozen=True)
class SetMove:
    piece: Piece
    destination: PositionedField


@dataclass(frozen=True)
class DragMove:
    start: PositionedField
    destination: PositionedField


Move = Union[SetMove, DragMove]
