"""
ASCII rendering for pipe networks.

Provides two rendering approaches:
1. Plain grid rendering - one box-drawing character per cell
2. Framed rendering - titled frames laid out side by side (e.g. before/after)
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from pipe_types import Connector, Coordinate, Direction, Empty, Grid, Pipe, Region

logger = logging.getLogger(__name__)

Colorizer = Callable[[str], str]

# Pipe glyphs keyed by the set of open ends
BOX_GLYPHS: dict[frozenset[Direction], str] = {
    frozenset((Direction.N, Direction.E)): "└",
    frozenset((Direction.S, Direction.E)): "┌",
    frozenset((Direction.S, Direction.W)): "┐",
    frozenset((Direction.N, Direction.W)): "┘",
    frozenset((Direction.N, Direction.S)): "│",
    frozenset((Direction.E, Direction.W)): "─",
}

REGION_GLYPHS: dict[Region | None, str] = {
    None: ".",
    Region.INTERIOR: "█",
    Region.EXTERIOR: "░",
}

START_GLYPH = "S"


def _plain(s: str) -> str:
    return s


def connector_glyph(connector: Connector) -> str:
    return BOX_GLYPHS[frozenset(connector.ends)]


def cell_glyph(cell: Empty | Pipe) -> str:
    """Single display character for a cell."""
    match cell:
        case Pipe(connector=None):
            return START_GLYPH
        case Pipe(connector=connector):
            return connector_glyph(connector)
        case Empty(region=region):
            return REGION_GLYPHS[region]
    raise ValueError(f"Unknown cell type: {cell}")


# =============================================================================
# Plain Grid Rendering
# =============================================================================


def render_lines(
    grid: Grid,
    loop: Iterable[Coordinate] | None = None,
    highlight: Coordinate | None = None,
    color: bool = True,
) -> list[str]:
    """
    Render a grid as one line of characters per row.

    Args:
        grid: The grid to render
        loop: Optional loop coordinates; their pipes are drawn in yellow and
            every other pipe in magenta
        highlight: Optional coordinate drawn black on white
        color: False for plain text without ANSI codes

    Returns:
        List of strings, one per grid row
    """
    on_loop = set(loop) if loop is not None else set()
    lines: list[str] = []

    for y, row in enumerate(grid.cells):
        line_parts: list[str] = []
        for x, cell in enumerate(row):
            char = cell_glyph(cell)
            if not color:
                line_parts.append(char)
                continue

            coord = Coordinate(x, y)
            if coord == highlight:
                colorize: Colorizer = chalk.bgWhite.black
            elif isinstance(cell, Pipe) and cell.connector is None:
                colorize = chalk.redBright
            elif isinstance(cell, Pipe):
                colorize = chalk.yellow if coord in on_loop else chalk.magenta
            elif cell.region is Region.INTERIOR:
                colorize = chalk.green
            elif cell.region is Region.EXTERIOR:
                colorize = chalk.blue
            else:
                colorize = _plain
            line_parts.append(colorize(char))

        lines.append("".join(line_parts))

    return lines


def render(
    grid: Grid,
    loop: Iterable[Coordinate] | None = None,
    highlight: Coordinate | None = None,
    color: bool = True,
) -> str:
    """
    Render a grid to a string, colored with ANSI codes unless color=False.

    Returns:
        Rendered string, rows separated by newlines
    """
    return "\n".join(render_lines(grid, loop, highlight, color))


# =============================================================================
# Framed Rendering
# =============================================================================


def render_framed(
    grid: Grid,
    title: str,
    loop: Iterable[Coordinate] | None = None,
    highlight: Coordinate | None = None,
    color: bool = True,
) -> list[str]:
    """
    Render a grid inside a box with its title centered in the top border.

    Returns:
        List of strings; every line is grid.cols + 2 visible characters wide
    """
    frame = chalk.cyan if color else _plain
    inner_width = grid.cols
    label = f" {title} "

    if len(label) <= inner_width:
        title_start = (inner_width - len(label)) // 2
        top = "┌" + "─" * title_start + label + "─" * (inner_width - title_start - len(label)) + "┐"
    else:
        top = "┌" + "─" * inner_width + "┐"

    lines = [frame(top)]
    for body in render_lines(grid, loop, highlight, color):
        lines.append(frame("│") + body + frame("│"))
    lines.append(frame("└" + "─" * inner_width + "┘"))
    return lines


def render_side_by_side(
    frames: list[tuple[list[str], int]],
    spacing: int = 2,
) -> str:
    """
    Combine framed renderings horizontally.

    Args:
        frames: (lines, visible width) pairs; widths are passed explicitly
            since ANSI codes make len() unreliable
        spacing: Spaces between frames

    Returns:
        The combined block of text
    """
    if not frames:
        return ""

    max_height = max(len(lines) for lines, _ in frames)
    logger.debug("render_side_by_side: %d frames, %d lines tall", len(frames), max_height)

    output_lines: list[str] = []
    for line_idx in range(max_height):
        line_parts = []
        for lines, width in frames:
            if line_idx < len(lines):
                line_parts.append(lines[line_idx])
            else:
                line_parts.append(" " * width)
        output_lines.append((" " * spacing).join(line_parts))

    return "\n".join(output_lines)
