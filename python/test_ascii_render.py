"""Tests for ascii_render module."""

import re

import pytest

from ascii_render import (
    cell_glyph,
    connector_glyph,
    render,
    render_framed,
    render_lines,
    render_side_by_side,
)
from pipe_loop import solve
from pipe_parser import parse_network
from pipe_types import PIPE_GLYPHS, Connector, Coordinate, Empty, Pipe, Region

from test_pipe_loop import JUNK_INSIDE, SQUARE

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str) -> str:
    return ANSI_ESCAPE.sub("", s)


class TestGlyphs:
    """Tests for single-cell glyphs."""

    @pytest.mark.parametrize("glyph,box", [
        ("L", "└"), ("F", "┌"), ("7", "┐"), ("J", "┘"), ("|", "│"), ("-", "─"),
    ])
    def test_connector_glyphs(self, glyph: str, box: str) -> None:
        assert connector_glyph(Connector.from_glyph(glyph)) == box

    def test_every_pipe_has_a_box_glyph(self) -> None:
        boxes = {connector_glyph(Connector.from_glyph(g)) for g in PIPE_GLYPHS}
        assert len(boxes) == len(PIPE_GLYPHS)

    def test_cell_glyphs(self) -> None:
        assert cell_glyph(Pipe(None)) == "S"
        assert cell_glyph(Empty()) == "."
        assert cell_glyph(Empty(Region.INTERIOR)) == "█"
        assert cell_glyph(Empty(Region.EXTERIOR)) == "░"


class TestRender:
    """Tests for the render function."""

    def test_render_parsed_network(self) -> None:
        grid = parse_network(SQUARE).grid
        assert render(grid, color=False) == (
            ".....\n"
            ".S─┐.\n"
            ".│.│.\n"
            ".└─┘.\n"
            "....."
        )

    def test_render_classified_network(self) -> None:
        solution = solve(SQUARE)
        assert render(solution.grid, solution.loop, color=False) == (
            "░░░░░\n"
            "░┌─┐░\n"
            "░│█│░\n"
            "░└─┘░\n"
            "░░░░░"
        )

    def test_color_only_adds_escape_codes(self) -> None:
        solution = solve(JUNK_INSIDE)
        colored = render(solution.grid, solution.loop, highlight=Coordinate(2, 2))
        assert strip_ansi(colored) == render(solution.grid, color=False)

    def test_render_lines_one_per_row(self) -> None:
        grid = parse_network(JUNK_INSIDE).grid
        lines = render_lines(grid, color=False)
        assert len(lines) == grid.rows
        assert all(len(line) == grid.cols for line in lines)


class TestFramedRender:
    """Tests for framed and side-by-side rendering."""

    def test_frame_with_title(self) -> None:
        grid = parse_network(SQUARE).grid
        lines = render_framed(grid, "t", color=False)

        assert lines[0] == "┌─ t ─┐"
        assert lines[1] == "│.....│"
        assert lines[-1] == "└─────┘"
        assert len(lines) == grid.rows + 2

    def test_title_too_long_is_dropped(self) -> None:
        grid = parse_network("S7\nLJ").grid
        assert render_framed(grid, "long title", color=False)[0] == "┌──┐"

    def test_colored_frame_same_visible_text(self) -> None:
        grid = parse_network(SQUARE).grid
        colored = render_framed(grid, "t")
        plain = render_framed(grid, "t", color=False)
        assert [strip_ansi(line) for line in colored] == plain

    def test_side_by_side(self) -> None:
        left = (["ab", "cd", "ef"], 2)
        right = (["xyz"], 3)
        assert render_side_by_side([left, right], spacing=1) == (
            "ab xyz\n"
            "cd    \n"
            "ef    "
        )

    def test_side_by_side_empty(self) -> None:
        assert render_side_by_side([]) == ""
