"""Hex grid geometry: axial, cube and doubled coordinates.

Axial (x, y) is the primary addressing scheme for board cells. Cube
(x, y, z) with x + y + z == 0 is used for straight lines. Doubled offset
coordinates are only used to read ASCII hex grids:

    +--> x          y ^   ^ x
    |                  \\ /
    v y                 +

    doubled              axial

Conversions: Axial <-> Cube and Axial <-> Doubled are direct, Cube <->
Doubled always goes through Axial.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from src.games.hive.errors import GeometryError

# The 6 axial neighbor offsets, in a fixed order.
AXIAL_DIRECTIONS: list[tuple[int, int]] = [
    (0, 1), (1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1),
]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _div(value: int, divisor: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(value) // abs(divisor)
    return quotient if _sign(value) * _sign(divisor) >= 0 else -quotient


@dataclass(frozen=True, order=True)
class AxialCoords:
    x: int
    y: int

    def __add__(self, other: AxialCoords) -> AxialCoords:
        return AxialCoords(self.x + other.x, self.y + other.y)

    def __sub__(self, other: AxialCoords) -> AxialCoords:
        return AxialCoords(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: int) -> AxialCoords:
        return AxialCoords(self.x * factor, self.y * factor)

    def __floordiv__(self, divisor: int) -> AxialCoords:
        return AxialCoords(_div(self.x, divisor), _div(self.y, divisor))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def coord_neighbors(self) -> list[AxialCoords]:
        """Return all 6 neighbors, regardless of any board boundaries."""
        return [AxialCoords(self.x + dx, self.y + dy) for dx, dy in AXIAL_DIRECTIONS]

    def to_axial(self) -> AxialCoords:
        return self

    def to_cube(self) -> CubeCoords:
        return CubeCoords(self.x, self.y, -(self.x + self.y))

    def to_doubled(self) -> DoubledCoords:
        return DoubledCoords(self.x - self.y, -(self.x + self.y))

    def is_adjacent_to(self, other: AnyCoords) -> bool:
        return to_axial(other) in self.coord_neighbors()

    def forms_line_with(self, other: AnyCoords) -> bool:
        return self.to_cube().forms_line_with(other)

    def line_iter(self, other: AnyCoords) -> Iterator[CubeCoords]:
        return self.to_cube().line_iter(other)


@dataclass(frozen=True, order=True)
class CubeCoords:
    x: int
    y: int
    z: int

    @classmethod
    def checked(cls, x: int, y: int, z: int) -> CubeCoords:
        """Create cube coordinates, raising GeometryError unless x + y + z == 0."""
        if x + y + z != 0:
            raise GeometryError(f"Invalid cube coordinates ({x}, {y}, {z}): components must sum to 0")
        return cls(x, y, z)

    def __add__(self, other: CubeCoords) -> CubeCoords:
        return CubeCoords(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: CubeCoords) -> CubeCoords:
        return CubeCoords(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: int) -> CubeCoords:
        return CubeCoords(self.x * factor, self.y * factor, self.z * factor)

    def __floordiv__(self, divisor: int) -> CubeCoords:
        return CubeCoords(_div(self.x, divisor), _div(self.y, divisor), _div(self.z, divisor))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def to_axial(self) -> AxialCoords:
        return AxialCoords(self.x, self.y)

    def to_cube(self) -> CubeCoords:
        return self

    def to_doubled(self) -> DoubledCoords:
        return self.to_axial().to_doubled()

    def is_adjacent_to(self, other: AnyCoords) -> bool:
        return self.to_axial().is_adjacent_to(other)

    def forms_line_with(self, other: AnyCoords) -> bool:
        """Two cells form a straight line iff they share a cube component."""
        rhs = to_cube(other)
        return self.x == rhs.x or self.y == rhs.y or self.z == rhs.z

    def line_iter(self, other: AnyCoords) -> Iterator[CubeCoords]:
        """Yield the cells strictly between self and other.

        Steps by the componentwise sign of the difference, so callers must
        check forms_line_with() first.
        """
        destination = to_cube(other)
        diff = destination - self
        step = CubeCoords(_sign(diff.x), _sign(diff.y), _sign(diff.z))
        current = self + step
        while current != destination:
            yield current
            current = current + step


@dataclass(frozen=True, order=True)
class DoubledCoords:
    x: int
    y: int

    def __add__(self, other: DoubledCoords) -> DoubledCoords:
        return DoubledCoords(self.x + other.x, self.y + other.y)

    def __sub__(self, other: DoubledCoords) -> DoubledCoords:
        return DoubledCoords(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: int) -> DoubledCoords:
        return DoubledCoords(self.x * factor, self.y * factor)

    def __floordiv__(self, divisor: int) -> DoubledCoords:
        return DoubledCoords(_div(self.x, divisor), _div(self.y, divisor))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def to_axial(self) -> AxialCoords:
        # Only exact when x + y is even.
        return AxialCoords(_div(self.x - self.y, 2), _div(-(self.x + self.y), 2))

    def to_cube(self) -> CubeCoords:
        return self.to_axial().to_cube()

    def to_doubled(self) -> DoubledCoords:
        return self

    def is_adjacent_to(self, other: AnyCoords) -> bool:
        return self.to_axial().is_adjacent_to(other)

    def forms_line_with(self, other: AnyCoords) -> bool:
        return self.to_cube().forms_line_with(other)

    def line_iter(self, other: AnyCoords) -> Iterator[CubeCoords]:
        return self.to_cube().line_iter(other)


AnyCoords = Union[AxialCoords, CubeCoords, DoubledCoords]


def to_axial(coords: AnyCoords) -> AxialCoords:
    return coords.to_axial()


def to_cube(coords: AnyCoords) -> CubeCoords:
    return coords.to_cube()


def hexagon(radius: int) -> Iterator[AxialCoords]:
    """Yield every axial coordinate of a hexagon with the given radius.

    A radius of 1 is the single origin cell; radius R contains every cell
    within hex distance R - 1 of the origin.
    """
    inner = radius - 1
    for y in range(-inner, inner + 1):
        for x in range(max(-(inner + y), -inner), min(inner - y, inner) + 1):
            yield AxialCoords(x, y)
