"""Tests for pipe_types module."""

import pytest

from pipe_types import (
    OUTSIDE,
    PIPE_GLYPHS,
    Connector,
    Coordinate,
    Direction,
    Empty,
    Grid,
    MalformedLoopError,
    Pipe,
    Region,
)


ALL_DIRECTIONS = [Direction.N, Direction.E, Direction.S, Direction.W]


class TestDirection:
    """Tests for direction rotations."""

    def test_clockwise_cycle(self) -> None:
        """Clockwise rotation visits N, E, S, W in order."""
        assert Direction.N.cw() == Direction.E
        assert Direction.E.cw() == Direction.S
        assert Direction.S.cw() == Direction.W
        assert Direction.W.cw() == Direction.N

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    def test_ccw_undoes_cw(self, direction: Direction) -> None:
        assert direction.cw().ccw() == direction
        assert direction.ccw().cw() == direction

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    def test_reverse_is_half_turn(self, direction: Direction) -> None:
        assert direction.reverse() == direction.cw().cw()
        assert direction.reverse() == direction.ccw().ccw()
        assert direction.reverse().reverse() == direction

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    def test_four_turns_return_home(self, direction: Direction) -> None:
        assert direction.cw().cw().cw().cw() == direction

    def test_offsets_point_opposite_for_reverse(self) -> None:
        """Reverse directions have opposite offsets; y grows southward."""
        assert Direction.N.offset == (0, -1)
        assert Direction.S.offset == (0, 1)
        for direction in ALL_DIRECTIONS:
            dx, dy = direction.offset
            assert direction.reverse().offset == (-dx, -dy)


class TestCoordinate:
    """Tests for coordinate stepping."""

    def test_step(self) -> None:
        c = Coordinate(2, 3)
        assert c.step(Direction.N) == Coordinate(2, 2)
        assert c.step(Direction.E) == Coordinate(3, 3)
        assert c.step(Direction.S) == Coordinate(2, 4)
        assert c.step(Direction.W) == Coordinate(1, 3)

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    def test_direction_to_neighbour(self, direction: Direction) -> None:
        c = Coordinate(0, 0)
        assert c.direction_to(c.step(direction)) == direction

    def test_direction_to_non_neighbour_raises(self) -> None:
        with pytest.raises(MalformedLoopError, match="not adjacent"):
            Coordinate(0, 0).direction_to(Coordinate(1, 1))


class TestConnector:
    """Tests for pipe connectors."""

    @pytest.mark.parametrize("glyph", list(PIPE_GLYPHS))
    def test_glyph_round_trip(self, glyph: str) -> None:
        assert Connector.from_glyph(glyph).glyph == glyph

    def test_glyph_ignores_end_order(self) -> None:
        assert Connector((Direction.E, Direction.N)).glyph == "L"

    def test_opens(self) -> None:
        corner = Connector.from_glyph("7")
        assert corner.opens(Direction.S)
        assert corner.opens(Direction.W)
        assert not corner.opens(Direction.N)
        assert not corner.opens(Direction.E)

    def test_other_end(self) -> None:
        corner = Connector.from_glyph("F")
        assert corner.other(Direction.S) == Direction.E
        assert corner.other(Direction.E) == Direction.S

    def test_other_from_closed_side_raises(self) -> None:
        with pytest.raises(MalformedLoopError, match="no opening toward N"):
            Connector.from_glyph("-").other(Direction.N)

    def test_duplicate_ends_rejected(self) -> None:
        with pytest.raises(ValueError, match="two distinct ends"):
            Connector((Direction.N, Direction.N))


class TestGrid:
    """Tests for the grid container."""

    def make_grid(self) -> Grid:
        return Grid([
            [Empty(), Pipe(Connector.from_glyph("-"))],
            [Pipe(None), Empty(Region.INTERIOR)],
        ])

    def test_dimensions(self) -> None:
        grid = Grid([[Empty(), Empty(), Empty()], [Empty(), Empty(), Empty()]])
        assert grid.rows == 2
        assert grid.cols == 3
        assert grid.size == 6

    def test_get_is_row_major(self) -> None:
        grid = self.make_grid()
        assert grid.get(Coordinate(1, 0)) == Pipe(Connector.from_glyph("-"))
        assert grid.get(Coordinate(0, 1)) == Pipe(None)

    @pytest.mark.parametrize("coord", [
        Coordinate(-1, 0), Coordinate(0, -1), Coordinate(2, 0), Coordinate(0, 2),
    ])
    def test_out_of_bounds_reads_outside(self, coord: Coordinate) -> None:
        """The border reads as already-classified exterior, never as a pipe."""
        grid = self.make_grid()
        assert coord not in grid
        assert grid.get(coord) == OUTSIDE
        assert grid.get(coord) == Empty(Region.EXTERIOR)

    def test_set_replaces_cell(self) -> None:
        grid = self.make_grid()
        grid.set(Coordinate(0, 0), Empty(Region.EXTERIOR))
        assert grid.get(Coordinate(0, 0)) == Empty(Region.EXTERIOR)

    def test_set_out_of_bounds_raises(self) -> None:
        with pytest.raises(IndexError):
            self.make_grid().set(Coordinate(5, 5), Empty())

    def test_coordinates_row_major(self) -> None:
        assert list(self.make_grid().coordinates()) == [
            Coordinate(0, 0), Coordinate(1, 0), Coordinate(0, 1), Coordinate(1, 1),
        ]
