"""Boundary between GameState/Move and their external tree representation.

The external format is an attribute tree (as carried by the game server's
protocol messages), represented here as nested dicts:

    {
        "turn": 3, "startPlayerColor": "RED", "currentPlayerColor": "BLUE",
        "red": {"color": "RED", "displayName": "Alice"},
        "blue": {"color": "BLUE", "displayName": "Bob"},
        "board": {"fields": [
            {"x": 0, "y": 0, "z": 0, "isObstructed": False,
             "piece": [{"owner": "RED", "type": "BEE"}]},
            ...
        ]},
        "undeployedRedPieces": [{"owner": "RED", "type": "ANT"}, ...],
        "undeployedBluePieces": [...],
    }

Attribute values may also be strings ("3", "true"), as in XML. Decoding
failures are raised as MissingFieldError, UnrecognizedLiteralError or
MalformedNumberError.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from src.config import settings
from src.games.hive.board import Board
from src.games.hive.coords import AxialCoords, CubeCoords
from src.games.hive.errors import (
    DeserializationError,
    GeometryError,
    MalformedNumberError,
    MissingFieldError,
    UnrecognizedLiteralError,
)
from src.games.hive.field import Field as BoardField
from src.games.hive.moves import DragMove, Move, PositionedField, SetMove
from src.games.hive.state import GameState
from src.games.hive.types import HivePlayer, Piece, PieceType, PlayerColor

logger = logging.getLogger(__name__)

_MISSING_ERRORS = {"missing", "union_tag_not_found"}
_LITERAL_ERRORS = {"enum", "literal_error", "union_tag_invalid"}
_NUMBER_ERRORS = {
    "int_parsing",
    "int_type",
    "int_from_float",
    "bool_parsing",
    "bool_type",
    "greater_than_equal",
}


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


# --- Wire models ---

class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PieceNode(WireModel):
    owner: PlayerColor
    piece_type: PieceType = Field(alias="type")

    @field_validator("owner", "piece_type", mode="before")
    @classmethod
    def upper_literals(cls, value: Any) -> Any:
        return _upper(value)

    @classmethod
    def from_piece(cls, piece: Piece) -> PieceNode:
        return cls(owner=piece.owner, piece_type=piece.piece_type)

    def to_piece(self) -> Piece:
        return Piece(owner=self.owner, piece_type=self.piece_type)


class FieldNode(WireModel):
    kind: Literal["field"] = Field(default="field", alias="class")
    x: int
    y: int
    z: int
    is_obstructed: bool = Field(alias="isObstructed")
    pieces: list[PieceNode] = Field(default_factory=list, alias="piece")

    @classmethod
    def from_positioned(cls, coords: AxialCoords, cell: BoardField) -> FieldNode:
        cube = coords.to_cube()
        return cls(
            x=cube.x,
            y=cube.y,
            z=cube.z,
            is_obstructed=cell.is_obstructed,
            pieces=[PieceNode.from_piece(p) for p in cell.piece_stack],
        )

    def to_positioned(self) -> tuple[AxialCoords, BoardField]:
        try:
            coords = CubeCoords.checked(self.x, self.y, self.z).to_axial()
        except GeometryError as e:
            raise MalformedNumberError(str(e), location="field") from e
        cell = BoardField(piece_stack=[p.to_piece() for p in self.pieces], is_obstructed=self.is_obstructed)
        return coords, cell


class PlayerNode(WireModel):
    color: PlayerColor
    display_name: str = Field(alias="displayName")

    @field_validator("color", mode="before")
    @classmethod
    def upper_literals(cls, value: Any) -> Any:
        return _upper(value)


class BoardNode(WireModel):
    cells: list[FieldNode] = Field(default_factory=list, alias="fields")


class GameStateNode(WireModel):
    turn: int = Field(ge=0)
    start_player_color: PlayerColor = Field(alias="startPlayerColor")
    current_player_color: PlayerColor = Field(alias="currentPlayerColor")
    red: PlayerNode
    blue: PlayerNode
    board: BoardNode
    undeployed_red_pieces: list[PieceNode] = Field(alias="undeployedRedPieces")
    undeployed_blue_pieces: list[PieceNode] = Field(alias="undeployedBluePieces")

    @field_validator("start_player_color", "current_player_color", mode="before")
    @classmethod
    def upper_literals(cls, value: Any) -> Any:
        return _upper(value)


class SetMoveNode(WireModel):
    kind: Literal["setmove"] = Field(default="setmove", alias="class")
    piece: PieceNode
    destination: FieldNode


class DragMoveNode(WireModel):
    kind: Literal["dragmove"] = Field(default="dragmove", alias="class")
    start: FieldNode
    destination: FieldNode


MoveNode = Annotated[Union[SetMoveNode, DragMoveNode], Field(discriminator="kind")]
_move_adapter: TypeAdapter[SetMoveNode | DragMoveNode] = TypeAdapter(MoveNode)


# --- Error translation ---

def _translate(exc: ValidationError, subject: str) -> DeserializationError:
    """Map the first pydantic error onto the deserialization taxonomy."""
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    kind = error["type"]
    detail = f"{subject}: {error['msg']} at '{location}' (got {error.get('input')!r})"

    if kind in _MISSING_ERRORS:
        return MissingFieldError(f"Missing attribute '{location}' in {subject}", location)
    if kind in _LITERAL_ERRORS:
        return UnrecognizedLiteralError(f"Unrecognized literal in {detail}", location)
    if kind in _NUMBER_ERRORS:
        return MalformedNumberError(f"Malformed value in {detail}", location)
    return DeserializationError(f"Invalid {detail}", location)


# --- Deserialization ---

def state_from_node(node: dict, radius: int | None = None) -> GameState:
    """Convert an external state description into a GameState.

    The board is padded with empty fields up to *radius* (defaults to the
    configured board radius).
    """
    try:
        parsed = GameStateNode.model_validate(node)
    except ValidationError as e:
        raise _translate(e, "game state") from e

    fields = dict(f.to_positioned() for f in parsed.board.cells)
    board = Board.filling_radius(radius if radius is not None else settings.board_radius, fields)
    logger.debug(f"Decoded state at turn {parsed.turn} with {len(fields)} described fields")

    return GameState(
        turn=parsed.turn,
        start_player_color=parsed.start_player_color,
        current_player_color=parsed.current_player_color,
        board=board,
        red_player=HivePlayer(parsed.red.color, parsed.red.display_name),
        blue_player=HivePlayer(parsed.blue.color, parsed.blue.display_name),
        undeployed_red_pieces=tuple(p.to_piece() for p in parsed.undeployed_red_pieces),
        undeployed_blue_pieces=tuple(p.to_piece() for p in parsed.undeployed_blue_pieces),
    )


def move_from_node(node: dict) -> Move:
    try:
        parsed = _move_adapter.validate_python(node)
    except ValidationError as e:
        raise _translate(e, "move") from e

    if isinstance(parsed, SetMoveNode):
        return SetMove(piece=parsed.piece.to_piece(), destination=_positioned(parsed.destination))
    return DragMove(start=_positioned(parsed.start), destination=_positioned(parsed.destination))


def _positioned(node: FieldNode) -> PositionedField:
    coords, cell = node.to_positioned()
    return PositionedField(coords, cell)


# --- Serialization ---

def _dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)


def state_to_node(state: GameState) -> dict:
    node = GameStateNode(
        turn=state.turn,
        start_player_color=state.start_player_color,
        current_player_color=state.current_player_color,
        red=PlayerNode(color=state.red_player.color, display_name=state.red_player.display_name),
        blue=PlayerNode(color=state.blue_player.color, display_name=state.blue_player.display_name),
        board=BoardNode(cells=[FieldNode.from_positioned(c, f) for c, f in state.board.fields()]),
        undeployed_red_pieces=[PieceNode.from_piece(p) for p in state.undeployed_red_pieces],
        undeployed_blue_pieces=[PieceNode.from_piece(p) for p in state.undeployed_blue_pieces],
    )
    return _dump(node)


def move_to_node(move: Move) -> dict:
    """Convert a move into its external representation, tagged by "class"."""
    if isinstance(move, SetMove):
        node: BaseModel = SetMoveNode(
            piece=PieceNode.from_piece(move.piece),
            destination=FieldNode.from_positioned(move.destination.coords, move.destination.field),
        )
    else:
        node = DragMoveNode(
            start=FieldNode.from_positioned(move.start.coords, move.start.field),
            destination=FieldNode.from_positioned(move.destination.coords, move.destination.field),
        )
    return _dump(node)
