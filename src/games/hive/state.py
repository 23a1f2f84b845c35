"""GameState: a snapshot of one turn plus the Hive move rules.

Validation and enumeration are read-only queries against one snapshot.
Drag-move enumeration runs every candidate through validate_move(), so
both share one source of truth.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from src.games.hive.board import Board
from src.games.hive.coords import AxialCoords
from src.games.hive.errors import LogicPreconditionError, MoveValidationError
from src.games.hive.moves import DragMove, Move, PositionedField, SetMove
from src.games.hive.types import (
    BOARD_RADIUS,
    INITIAL_PIECE_TYPES,
    HivePlayer,
    Piece,
    PieceType,
    PlayerColor,
    initial_pieces,
)

logger = logging.getLogger(__name__)

# Round index (0-based) in which a player's bee must be placed at the latest.
BEE_DEADLINE_ROUND = 3


@dataclass(frozen=True)
class GameState:
    turn: int
    start_player_color: PlayerColor
    current_player_color: PlayerColor
    board: Board = field(hash=False)
    red_player: HivePlayer
    blue_player: HivePlayer
    undeployed_red_pieces: tuple[Piece, ...]
    undeployed_blue_pieces: tuple[Piece, ...]

    @classmethod
    def initial(
        cls,
        red_name: str = "Red",
        blue_name: str = "Blue",
        radius: int = BOARD_RADIUS,
        start_player_color: PlayerColor = PlayerColor.RED,
    ) -> GameState:
        return cls(
            turn=0,
            start_player_color=start_player_color,
            current_player_color=start_player_color,
            board=Board.filling_radius(radius),
            red_player=HivePlayer(PlayerColor.RED, red_name),
            blue_player=HivePlayer(PlayerColor.BLUE, blue_name),
            undeployed_red_pieces=tuple(initial_pieces(PlayerColor.RED)),
            undeployed_blue_pieces=tuple(initial_pieces(PlayerColor.BLUE)),
        )

    @property
    def round(self) -> int:
        return self.turn // 2

    def undeployed_pieces(self, color: PlayerColor) -> tuple[Piece, ...]:
        if color is PlayerColor.RED:
            return self.undeployed_red_pieces
        return self.undeployed_blue_pieces

    def player(self, color: PlayerColor) -> HivePlayer:
        return self.red_player if color is PlayerColor.RED else self.blue_player

    # ── Validation ──

    def validate_move(self, color: PlayerColor, move: Move) -> None:
        """Raise MoveValidationError if *color* may not play *move*."""
        if isinstance(move, SetMove):
            self._validate_set_move(color, move.piece, move.destination.coords)
        else:
            self._validate_drag_move(color, move.start.coords, move.destination.coords)

    def is_valid_move(self, color: PlayerColor, move: Move) -> bool:
        try:
            self.validate_move(color, move)
        except MoveValidationError as e:
            logger.debug(f"Rejected {move}: {e.reason}")
            return False
        return True

    def _validate_set_move(self, color: PlayerColor, piece: Piece, destination: AxialCoords) -> None:
        board = self.board
        target = board.field(destination)
        if target is None:
            raise MoveValidationError(f"Move destination is out of bounds: {destination}")
        if target.is_obstructed:
            raise MoveValidationError(f"Move destination is obstructed: {destination}")
        if target.has_pieces():
            raise MoveValidationError(f"Move destination is already occupied: {destination}")
        if piece not in self.undeployed_pieces(color):
            raise MoveValidationError("Piece is not undeployed")

        if not board.has_pieces():
            return

        if not any(True for _ in board.fields_owned_by(color)):
            if not board.is_next_to(color.opponent(), destination):
                raise MoveValidationError("Piece has to be placed next to an opponent's piece")
            return

        if (
            self.round == BEE_DEADLINE_ROUND
            and not board.has_placed_bee(color)
            and piece.piece_type is not PieceType.BEE
        ):
            raise MoveValidationError("Bee has to be placed in the fourth round or earlier")
        if not board.is_next_to(color, destination):
            raise MoveValidationError("Piece is not placed next to an own piece")
        if board.is_next_to(color.opponent(), destination):
            raise MoveValidationError("Piece must not be placed next to an opponent's piece")

    def _validate_drag_move(self, color: PlayerColor, start: AxialCoords, destination: AxialCoords) -> None:
        board = self.board
        if not board.has_placed_bee(color):
            raise MoveValidationError("Bee has to be placed before committing a drag move")
        if not board.contains_coords(start):
            raise MoveValidationError(f"Move start is out of bounds: {start}")
        target = board.field(destination)
        if target is None:
            raise MoveValidationError(f"Move destination is out of bounds: {destination}")

        dragged = board.field(start).piece
        if dragged is None:
            raise LogicPreconditionError("No piece to move")
        if dragged.owner != color:
            raise MoveValidationError("Cannot move opponent's piece")
        if start == destination:
            raise MoveValidationError("Cannot move when start == destination")
        if target.is_obstructed:
            raise MoveValidationError(f"Move destination is obstructed: {destination}")
        if target.has_pieces() and dragged.piece_type is not PieceType.BEETLE:
            raise MoveValidationError("Only beetles can climb other pieces")
        if not board.without_piece_at(start).is_swarm_connected():
            raise MoveValidationError("Drag move would disconnect the swarm")

        if dragged.piece_type is PieceType.ANT:
            self._validate_ant_move(start, destination)
        elif dragged.piece_type is PieceType.BEE:
            self._validate_bee_move(start, destination)
        elif dragged.piece_type is PieceType.BEETLE:
            self._validate_beetle_move(start, destination)
        elif dragged.piece_type is PieceType.GRASSHOPPER:
            self._validate_grasshopper_move(start, destination)
        else:
            self._validate_spider_move(start, destination)

    @staticmethod
    def _validate_adjacent(start: AxialCoords, destination: AxialCoords) -> None:
        if not start.is_adjacent_to(destination):
            raise MoveValidationError("Coords are not adjacent to each other")

    def _validate_ant_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        if not self.board.connected_by_boundary_path(start, destination):
            raise MoveValidationError("Could not find path for ant")

    def _validate_bee_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        self._validate_adjacent(start, destination)
        if not self.board.can_move_between(start, destination):
            raise MoveValidationError(f"Cannot move between {start} and {destination}")

    def _validate_beetle_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        self._validate_adjacent(start, destination)
        along_swarm = any(f.has_pieces() for _, f in self.board.shared_neighbors(start, destination))
        if not along_swarm and not self.board.field(destination).has_pieces():
            raise MoveValidationError("Beetle has to move along swarm")

    def _validate_grasshopper_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        if not start.forms_line_with(destination):
            raise MoveValidationError("Grasshopper can only move along straight lines")
        if start.is_adjacent_to(destination):
            raise MoveValidationError("Grasshopper must not move to a neighbor")
        if not all(self.board.is_occupied(c) for c in start.line_iter(destination)):
            raise MoveValidationError("Grasshopper cannot move over empty fields")

    def _validate_spider_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        if not self.board.bfs_reachable_in_3_steps(start, destination):
            raise MoveValidationError("No 3-step path found for Spider move")

    # ── Enumeration ──

    def possible_moves(self, color: PlayerColor) -> list[Move]:
        """All legal moves for *color*: SetMoves first, then DragMoves."""
        logger.debug(f"Finding possible moves for {color.value} at turn {self.turn}:\n{self.board}")
        moves: list[Move] = list(self.possible_set_moves(color))
        moves.extend(self.possible_drag_moves(color))
        return moves

    def possible_set_moves(self, color: PlayerColor) -> list[SetMove]:
        board = self.board
        undeployed = self.undeployed_pieces(color)
        opponent = color.opponent()
        full_pool = len(INITIAL_PIECE_TYPES)

        if len(undeployed) == full_pool:
            if len(self.undeployed_pieces(opponent)) == full_pool:
                # First turn of the game
                coords = [c for c, _ in board.empty_fields()]
            else:
                # First placement of the second player
                coords = [
                    n for c, _ in board.fields_owned_by(opponent)
                    for n, _ in board.empty_neighbors(c)
                ]
        else:
            coords = board.possible_set_move_destinations(color)

        destinations = [
            PositionedField(c, board.field(c).copy())
            for c in dict.fromkeys(coords)
        ]

        if not board.has_placed_bee(color) and self.turn > 5:
            bee = Piece(owner=color, piece_type=PieceType.BEE)
            pieces = [bee] if bee in undeployed else []
        else:
            pieces = list(dict.fromkeys(undeployed))

        moves = [SetMove(piece=p, destination=d) for d in destinations for p in pieces]
        logger.debug(f"Found {len(moves)} SetMoves ({len(destinations)} destinations x {len(pieces)} pieces)")
        return moves

    def possible_drag_moves(self, color: PlayerColor) -> list[DragMove]:
        board = self.board
        boundary = board.swarm_boundary()
        moves: list[DragMove] = []

        for start_coords, start_field in list(board.fields_owned_by(color)):
            targets = dict(boundary)
            if start_field.piece.piece_type is PieceType.BEETLE:
                targets.update(board.neighbors(start_coords))

            start = PositionedField(start_coords, start_field.copy())
            for coords, cell in targets.items():
                move = DragMove(start=start, destination=PositionedField(coords, cell.copy()))
                if self.is_valid_move(color, move):
                    moves.append(move)

        logger.debug(f"Found {len(moves)} DragMoves")
        return moves

    # ── Transitions ──

    def apply_move(self, move: Move) -> GameState:
        """Return the state after *move*; the move is assumed to be valid."""
        board = self.board.copy()
        red = self.undeployed_red_pieces
        blue = self.undeployed_blue_pieces

        if isinstance(move, SetMove):
            board.field(move.destination.coords).push(move.piece)
            if move.piece.owner is PlayerColor.RED:
                red = _without_one(red, move.piece)
            else:
                blue = _without_one(blue, move.piece)
        else:
            piece = board.field(move.start.coords).pop()
            if piece is None:
                raise LogicPreconditionError("No piece to move")
            board.field(move.destination.coords).push(piece)

        return replace(
            self,
            turn=self.turn + 1,
            current_player_color=self.current_player_color.opponent(),
            board=board,
            undeployed_red_pieces=red,
            undeployed_blue_pieces=blue,
        )

    def skip_turn(self) -> GameState:
        return replace(
            self,
            turn=self.turn + 1,
            current_player_color=self.current_player_color.opponent(),
        )


def _without_one(pieces: tuple[Piece, ...], piece: Piece) -> tuple[Piece, ...]:
    if piece not in pieces:
        raise LogicPreconditionError(f"Piece {piece} is not undeployed")
    index = pieces.index(piece)
    return pieces[:index] + pieces[index + 1:]
