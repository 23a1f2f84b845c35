"""Board state for Hive.

The board is a sparse mapping from axial coordinates to fields. Coordinates
missing from the mapping do not exist (off-board), which is distinct from a
present-but-empty field. Besides occupancy queries it answers the
connectivity questions move validation depends on: swarm connectivity,
slide feasibility and boundary pathfinding.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator

from src.games.hive.coords import AnyCoords, AxialCoords, DoubledCoords, hexagon, to_axial
from src.games.hive.errors import LogicPreconditionError
from src.games.hive.field import Field
from src.games.hive.types import Piece, PieceType, PlayerColor

logger = logging.getLogger(__name__)

PositionedCell = tuple[AxialCoords, Field]


class Board:
    def __init__(self, fields: dict[AxialCoords, Field] | None = None) -> None:
        self._fields: dict[AxialCoords, Field] = dict(fields or {})

    # ── Construction ──

    @classmethod
    def filling_radius(cls, radius: int, fields: dict[AxialCoords, Field] | None = None) -> Board:
        """Create a hexagonal board, padding the given fields with empty ones up to *radius*.

        Existing entries are never removed or overwritten.
        """
        filled = dict(fields or {})
        for coords in hexagon(radius):
            if coords not in filled:
                filled[coords] = Field()
        board = cls(filled)
        logger.debug(
            f"Created board of radius {radius} with {len(board)} fields, "
            f"occupied: {[str(c) for c, _ in board.occupied_fields()]}"
        )
        return board

    @classmethod
    def from_ascii_hex_grid(cls, grid: str) -> Board:
        """Parse a board from a plain text hex grid such as::

                /\\  /\\
               /  \\/  \\
               |BR |   |
              /\\  /\\  /\\
             /  \\/  \\/  \\
             |   |GB |   |
             \\  /\\  /\\  /
              \\/  \\/  \\/
               |   |   |
               \\  /\\  /
                \\/  \\/

        Rows are indented alternately, starting indented, and the grid must
        have a centered field. Each cell may hold a two-character token
        (see Field.from_token); empty or invalid tokens become empty fields.
        Stacks and obstructed fields cannot be expressed.

        The result uses axial coordinates with the origin at the center
        field, x pointing right and y pointing to the top-left.
        """
        lines = [line.strip() for line in grid.splitlines()]
        while lines and not lines[0]:
            lines.pop(0)

        parsed: list[tuple[DoubledCoords, Field]] = []
        for y, line in enumerate(lines[2::3]):
            fragments = [frag for frag in line.split("|") if frag]
            for x, fragment in enumerate(fragments):
                coords = DoubledCoords((2 * x) + ((y + 1) % 2), y)
                try:
                    cell = Field.from_token(fragment.strip())
                except ValueError as e:
                    logger.debug(f"Could not parse {fragment!r}: {e}")
                    cell = Field()
                parsed.append((coords, cell))

        center = DoubledCoords(
            max((c.x for c, _ in parsed), default=0),
            max((c.y for c, _ in parsed), default=0),
        ) // 2
        logger.debug(f"Determined center at {center}")

        return cls({(c - center).to_axial(): f for c, f in parsed})

    def copy(self) -> Board:
        """Return an independent value copy (fields are copied too)."""
        return Board({c: f.copy() for c, f in self._fields.items()})

    def without_piece_at(self, coords: AnyCoords) -> Board:
        """Return a copy of the board with the top piece at *coords* removed."""
        board = self.copy()
        cell = board.field(coords)
        if cell is None or cell.pop() is None:
            raise LogicPreconditionError(f"No piece to remove at {to_axial(coords)}")
        return board

    # ── Queries ──

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Board):
            return self._fields == other._fields
        return NotImplemented

    def field(self, coords: AnyCoords) -> Field | None:
        """Look up a field by any coordinates convertible to axial."""
        return self._fields.get(to_axial(coords))

    def contains_coords(self, coords: AnyCoords) -> bool:
        return to_axial(coords) in self._fields

    def is_occupied(self, coords: AnyCoords) -> bool:
        """Off-board positions count as occupied."""
        cell = self.field(coords)
        return cell.is_occupied() if cell is not None else True

    def fields(self) -> Iterator[PositionedCell]:
        return iter(self._fields.items())

    def fields_owned_by(self, color: PlayerColor) -> Iterator[PositionedCell]:
        return ((c, f) for c, f in self._fields.items() if f.is_owned_by(color))

    def empty_fields(self) -> Iterator[PositionedCell]:
        return ((c, f) for c, f in self._fields.items() if f.is_empty())

    def occupied_fields(self) -> Iterator[PositionedCell]:
        return ((c, f) for c, f in self._fields.items() if f.is_occupied())

    def swarm_boundary(self) -> list[PositionedCell]:
        """Empty fields adjacent to an occupied field, without duplicates."""
        seen: set[AxialCoords] = set()
        boundary: list[PositionedCell] = []
        for coords, _ in self.occupied_fields():
            for neighbor, cell in self.empty_neighbors(coords):
                if neighbor not in seen:
                    seen.add(neighbor)
                    boundary.append((neighbor, cell))
        return boundary

    def has_pieces(self) -> bool:
        return any(f.has_pieces() for f in self._fields.values())

    def neighbors(self, coords: AnyCoords) -> list[PositionedCell]:
        """Existing neighbor fields; off-board neighbors are dropped."""
        result: list[PositionedCell] = []
        for neighbor in to_axial(coords).coord_neighbors():
            cell = self._fields.get(neighbor)
            if cell is not None:
                result.append((neighbor, cell))
        return result

    def empty_neighbors(self, coords: AnyCoords) -> list[PositionedCell]:
        return [(c, f) for c, f in self.neighbors(coords) if f.is_empty()]

    def has_placed_bee(self, color: PlayerColor) -> bool:
        """Scan every stack, so a bee buried under a beetle still counts."""
        bee = Piece(owner=color, piece_type=PieceType.BEE)
        return any(bee in f.piece_stack for f in self._fields.values())

    def bee_coords(self, color: PlayerColor) -> AxialCoords | None:
        bee = Piece(owner=color, piece_type=PieceType.BEE)
        for coords, cell in self._fields.items():
            if bee in cell.piece_stack:
                return coords
        return None

    def is_bee_surrounded(self, color: PlayerColor) -> bool:
        coords = self.bee_coords(color)
        if coords is None:
            return False
        return all(self.is_occupied(n) for n in coords.coord_neighbors())

    def is_next_to(self, color: PlayerColor, coords: AnyCoords) -> bool:
        return any(f.is_owned_by(color) for _, f in self.neighbors(coords))

    def is_next_to_piece(self, coords: AnyCoords) -> bool:
        return any(f.has_pieces() for _, f in self.neighbors(coords))

    def possible_set_move_destinations(self, color: PlayerColor) -> list[AxialCoords]:
        """Empty fields next to own pieces that do not touch an opponent's piece."""
        opponent = color.opponent()
        seen: set[AxialCoords] = set()
        destinations: list[AxialCoords] = []
        for coords, _ in self.fields_owned_by(color):
            for neighbor, _ in self.empty_neighbors(coords):
                if neighbor in seen:
                    continue
                seen.add(neighbor)
                if not self.is_next_to(opponent, neighbor):
                    destinations.append(neighbor)
        logger.debug(f"SetMove destinations for {color.value}: {[str(c) for c in destinations]}")
        return destinations

    # ── Connectivity ──

    def is_swarm_connected(self) -> bool:
        """Depth-first search over fields with pieces. An empty swarm is connected."""
        unvisited = {c for c, f in self._fields.items() if f.has_pieces()}
        if not unvisited:
            return True

        stack = [next(iter(unvisited))]
        while stack:
            coords = stack.pop()
            if coords not in unvisited:
                continue
            unvisited.remove(coords)
            for neighbor, _ in self.neighbors(coords):
                if neighbor in unvisited:
                    stack.append(neighbor)

        return not unvisited

    def shared_neighbors(
        self,
        a: AnyCoords,
        b: AnyCoords,
        exception: AxialCoords | None = None,
    ) -> list[PositionedCell]:
        """Fields adjacent to both *a* and *b*.

        Fields holding exactly one piece are left out, unless they are the
        *exception* field.
        """
        b_neighbors = {c for c, _ in self.neighbors(b)}
        return [
            (c, f) for c, f in self.neighbors(a)
            if c in b_neighbors and (len(f.piece_stack) != 1 or c == exception)
        ]

    def can_move_between_except(
        self,
        exception: AxialCoords | None,
        a: AnyCoords,
        b: AnyCoords,
    ) -> bool:
        """Whether a piece can slide between the adjacent fields *a* and *b*.

        The piece must keep contact with the swarm (a shared neighbor with
        pieces) and must not squeeze through a gap closed on both sides.
        """
        shared = self.shared_neighbors(a, b, exception)
        open_gap = len(shared) == 1 or any(f.is_empty() for _, f in shared)
        return open_gap and any(f.has_pieces() for _, f in shared)

    def can_move_between(self, a: AnyCoords, b: AnyCoords) -> bool:
        return self.can_move_between_except(None, a, b)

    def accessible_neighbors_except(
        self,
        exception: AxialCoords | None,
        coords: AnyCoords,
    ) -> list[PositionedCell]:
        """Empty neighbors that can be reached by sliding from *coords*."""
        return [
            (c, f) for c, f in self.neighbors(coords)
            if f.is_empty() and self.can_move_between_except(exception, coords, c)
        ]

    def accessible_neighbors(self, coords: AnyCoords) -> list[PositionedCell]:
        return self.accessible_neighbors_except(None, coords)

    def connected_by_boundary_path(self, start: AnyCoords, destination: AnyCoords) -> bool:
        """Breadth-first search along the swarm boundary from *start* to *destination*."""
        start = to_axial(start)
        destination = to_axial(destination)
        queue: deque[AxialCoords] = deque([start])
        visited = {start}

        while queue:
            coords = queue.popleft()
            if coords == destination:
                return True
            for neighbor, _ in self.accessible_neighbors_except(start, coords):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        return False

    def bfs_reachable_in_3_steps(self, start: AnyCoords, destination: AnyCoords) -> bool:
        """Whether *destination* is exactly 3 accessible steps away from *start*.

        Fields may not repeat within one path, but different paths may share
        fields.
        """
        start = to_axial(start)
        destination = to_axial(destination)
        paths: deque[list[AxialCoords]] = deque([[start]])

        while paths:
            path = paths.popleft()
            candidates = [
                c for c, _ in self.accessible_neighbors_except(start, path[-1])
                if c not in path
            ]
            if len(path) < 3:
                paths.extend(path + [c] for c in candidates)
            elif destination in candidates:
                return True

        return False

    # ── Display ──

    def __str__(self) -> str:
        if not self._fields:
            return ""
        xs = [c.x for c in self._fields]
        ys = [c.y for c in self._fields]
        rows: list[str] = []
        for y in range(min(ys), max(ys) + 1):
            row = ""
            for x in range(min(xs), max(xs) + 1):
                cell = self._fields.get(AxialCoords(-y, -x))
                row += str(cell) if cell is not None else "00"
            rows.append(row)
        return "\n".join(rows) + "\n"

    def __repr__(self) -> str:
        return f"Board({len(self._fields)} fields, {sum(1 for _ in self.occupied_fields())} occupied)"
