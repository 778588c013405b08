"""
Parsing of pipe network text into a Grid and its start position.
"""

from __future__ import annotations

import logging

from pipe_types import (
    PIPE_GLYPHS,
    Cell,
    Connector,
    Coordinate,
    Empty,
    Grid,
    Network,
    ParseError,
    Pipe,
)

__all__ = ["parse_network", "EMPTY_GLYPH", "START_GLYPH"]

logger = logging.getLogger(__name__)

EMPTY_GLYPH = "."
START_GLYPH = "S"


def parse_network(text: str) -> Network:
    """
    Parse a pipe network from its text form.

    Format:
    - One row per line (\\n or \\r\\n); surrounding whitespace is ignored
    - One character per cell:
      * '.': Empty cell
      * '|' '-' 'L' 'J' '7' 'F': Pipe connecting N+S, E+W, N+E, N+W, S+W, S+E
      * 'S': Start, a pipe whose connections are not known yet

    Example:
        .....
        .S-7.
        .|.|.
        .L-J.
        .....

        Creates a 5x5 grid with the start at Coordinate(1, 1).

    Args:
        text: The network, exactly one start marker

    Returns:
        Network holding the grid and the start coordinate. The start cell is
        Pipe(None) until resolved.

    Raises:
        ParseError: On an unknown character, ragged rows, empty input, or a
            missing or repeated start marker
    """
    row_strings = [line.strip() for line in text.strip().splitlines()]
    if not row_strings:
        raise ParseError("Empty network: expected at least one row of cells")

    rows: list[list[Cell]] = []
    starts: list[Coordinate] = []

    for y, row_str in enumerate(row_strings):
        cells: list[Cell] = []

        for x, char in enumerate(row_str):
            if char == EMPTY_GLYPH:
                cells.append(Empty())
            elif char in PIPE_GLYPHS:
                cells.append(Pipe(Connector.from_glyph(char)))
            elif char == START_GLYPH:
                starts.append(Coordinate(x, y))
                cells.append(Pipe(None))
            else:
                valid = " ".join(f"'{g}'" for g in (EMPTY_GLYPH, *PIPE_GLYPHS, START_GLYPH))
                raise ParseError(
                    f"Invalid character {char!r} in network\n"
                    f"  Row {y}: \"{row_str}\"\n"
                    f"  Position: column {x}\n"
                    f"  Valid characters: {valid}"
                )

        rows.append(cells)

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in network\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ParseError(error_msg)

    if not starts:
        raise ParseError(f"No start marker '{START_GLYPH}' in network")
    if len(starts) > 1:
        positions = ", ".join(f"(x={c.x}, y={c.y})" for c in starts)
        raise ParseError(
            f"Multiple start markers '{START_GLYPH}' in network\n"
            f"  Found {len(starts)} at: {positions}\n"
            f"  Exactly one start is allowed"
        )

    grid = Grid(rows)
    logger.debug(
        "parse_network: %dx%d grid, start at (%d, %d)",
        grid.cols,
        grid.rows,
        starts[0].x,
        starts[0].y,
    )
    return Network(grid, starts[0])
