"""
Shared type definitions for the pipe loop solver.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


# =============================================================================
# Errors
# =============================================================================


class PipeError(ValueError):
    """Base class for every failure raised while solving a pipe network."""


class ParseError(PipeError):
    """Input text is not a well-formed pipe network."""


class AmbiguousStartError(PipeError):
    """The start cell does not have exactly two connecting neighbours."""


class MalformedLoopError(PipeError):
    """Following the pipes from the start does not close a simple loop."""


# =============================================================================
# Directions
# =============================================================================


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing y)
    E = "E"  # Right (increasing x)
    S = "S"  # Down (increasing y)
    W = "W"  # Left (decreasing x)

    def cw(self) -> Direction:
        """Rotate 90° clockwise."""
        return _ROTATIONS[(self, Rotation.CW)]

    def ccw(self) -> Direction:
        """Rotate 90° counter-clockwise."""
        return _ROTATIONS[(self, Rotation.CCW)]

    def reverse(self) -> Direction:
        return _ROTATIONS[(self, Rotation.REVERSE)]

    @property
    def offset(self) -> tuple[int, int]:
        """(dx, dy) of one step in this direction."""
        return _OFFSETS[self]


class Rotation(Enum):
    """Kinds of rotation applicable to a Direction."""

    CW = "cw"
    CCW = "ccw"
    REVERSE = "reverse"


_CLOCKWISE_ORDER = (Direction.N, Direction.E, Direction.S, Direction.W)

_ROTATIONS: dict[tuple[Direction, Rotation], Direction] = {
    (Direction.N, Rotation.CW): Direction.E,
    (Direction.E, Rotation.CW): Direction.S,
    (Direction.S, Rotation.CW): Direction.W,
    (Direction.W, Rotation.CW): Direction.N,
    (Direction.N, Rotation.CCW): Direction.W,
    (Direction.E, Rotation.CCW): Direction.N,
    (Direction.S, Rotation.CCW): Direction.E,
    (Direction.W, Rotation.CCW): Direction.S,
    (Direction.N, Rotation.REVERSE): Direction.S,
    (Direction.E, Rotation.REVERSE): Direction.W,
    (Direction.S, Rotation.REVERSE): Direction.N,
    (Direction.W, Rotation.REVERSE): Direction.E,
}

_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.E: (1, 0),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
}


@dataclass(frozen=True)
class Coordinate:
    """A cell position: x is the column, y is the row."""

    x: int
    y: int

    def step(self, direction: Direction) -> Coordinate:
        dx, dy = direction.offset
        return Coordinate(self.x + dx, self.y + dy)

    def direction_to(self, other: Coordinate) -> Direction:
        """Direction of a 4-adjacent coordinate."""
        for direction in _CLOCKWISE_ORDER:
            if self.step(direction) == other:
                return direction
        raise MalformedLoopError(f"{other} is not adjacent to {self}")


# =============================================================================
# Connectors
# =============================================================================


# Glyph -> the two open ends of the pipe it draws
PIPE_GLYPHS: dict[str, tuple[Direction, Direction]] = {
    "|": (Direction.N, Direction.S),
    "-": (Direction.E, Direction.W),
    "L": (Direction.N, Direction.E),
    "J": (Direction.N, Direction.W),
    "7": (Direction.S, Direction.W),
    "F": (Direction.S, Direction.E),
}


@dataclass(frozen=True)
class Connector:
    """A pipe segment with exactly two open ends."""

    ends: tuple[Direction, Direction]

    def __post_init__(self) -> None:
        if len(self.ends) != 2 or self.ends[0] == self.ends[1]:
            raise ValueError(f"A connector needs two distinct ends, got {self.ends}")

    @classmethod
    def from_glyph(cls, glyph: str) -> Connector:
        return cls(PIPE_GLYPHS[glyph])

    @property
    def glyph(self) -> str:
        ends = set(self.ends)
        for glyph, glyph_ends in PIPE_GLYPHS.items():
            if set(glyph_ends) == ends:
                return glyph
        raise AssertionError(f"No glyph for {self.ends}")  # every pair of ends has one

    def opens(self, direction: Direction) -> bool:
        return direction in self.ends

    def other(self, direction: Direction) -> Direction:
        """
        The open end that is not `direction`.

        Raises MalformedLoopError if `direction` is not one of the open ends,
        i.e. the pipe was entered from a side it does not connect to.
        """
        first, second = self.ends
        if direction == first:
            return second
        if direction == second:
            return first
        raise MalformedLoopError(
            f"Pipe '{self.glyph}' has no opening toward {direction.name}"
        )


# =============================================================================
# Cells and Grid
# =============================================================================


class Region(Enum):
    """Which side of the loop an empty cell lies on."""

    INTERIOR = "interior"
    EXTERIOR = "exterior"


@dataclass(frozen=True)
class Empty:
    """An empty cell, tagged with a region once classified."""

    region: Region | None = None


@dataclass(frozen=True)
class Pipe:
    """A cell holding a connector. `connector` is None for the unresolved start."""

    connector: Connector | None


Cell = Empty | Pipe

# Returned for every out-of-bounds read: the border behaves as settled exterior
OUTSIDE = Empty(Region.EXTERIOR)


@dataclass
class Grid:
    """A rectangular, row-major 2D grid of cells."""

    cells: list[list[Cell]]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def __contains__(self, coord: object) -> bool:
        return (
            isinstance(coord, Coordinate)
            and 0 <= coord.y < self.rows
            and 0 <= coord.x < self.cols
        )

    def get(self, coord: Coordinate) -> Cell:
        if coord not in self:
            return OUTSIDE
        return self.cells[coord.y][coord.x]

    def set(self, coord: Coordinate, cell: Cell) -> None:
        if coord not in self:
            raise IndexError(f"{coord} is outside the {self.cols}x{self.rows} grid")
        self.cells[coord.y][coord.x] = cell

    def coordinates(self) -> Iterator[Coordinate]:
        """All in-bounds coordinates in row-major order."""
        for y in range(self.rows):
            for x in range(self.cols):
                yield Coordinate(x, y)


@dataclass
class Network:
    """A parsed grid together with its start position."""

    grid: Grid
    start: Coordinate
