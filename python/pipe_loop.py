"""
Loop tracing and enclosed-area classification for pipe networks.
Pipeline: parse -> resolve start -> trace loop -> curvature -> classify -> count.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator

from pipe_parser import parse_network
from pipe_types import (
    AmbiguousStartError,
    Connector,
    Coordinate,
    Direction,
    Empty,
    Grid,
    MalformedLoopError,
    Pipe,
    Region,
)

logger = logging.getLogger(__name__)

# Scan order for the start's neighbours; also the order of its resolved ends
SCAN_ORDER = (Direction.N, Direction.E, Direction.S, Direction.W)

# Total turning of a simple closed loop on the integer grid
FULL_TURN = 4


@dataclass(frozen=True)
class TraceRules:
    """Rules governing loop tracing."""

    reverse: bool = False  # Leave the start through its second open end
    max_steps: int | None = None  # None = number of cells in the grid


# =============================================================================
# Start Resolution
# =============================================================================


def resolve_start(grid: Grid, start: Coordinate) -> Connector:
    """
    Infer the start cell's connector from the pipes around it.

    A neighbour connects when it is a pipe opening back toward the start.
    The start cell is replaced with a Pipe holding the resolved connector.

    Raises:
        AmbiguousStartError: If the number of connecting neighbours is not 2
    """
    cell = grid.get(start)
    if isinstance(cell, Pipe) and cell.connector is not None:
        return cell.connector

    ends: list[Direction] = []
    for direction in SCAN_ORDER:
        neighbour = grid.get(start.step(direction))
        if (
            isinstance(neighbour, Pipe)
            and neighbour.connector is not None
            and neighbour.connector.opens(direction.reverse())
        ):
            ends.append(direction)

    if len(ends) != 2:
        found = ", ".join(d.name for d in ends) or "none"
        raise AmbiguousStartError(
            f"Start at (x={start.x}, y={start.y}) has {len(ends)} connecting "
            f"neighbours ({found}), expected exactly 2"
        )

    connector = Connector((ends[0], ends[1]))
    grid.set(start, Pipe(connector))
    logger.debug("resolve_start: start resolved to '%s'", connector.glyph)
    return connector


# =============================================================================
# Loop Tracing
# =============================================================================


def _connector_at(grid: Grid, coord: Coordinate) -> Connector:
    cell = grid.get(coord)
    if not isinstance(cell, Pipe) or cell.connector is None:
        raise MalformedLoopError(
            f"Loop runs into a cell without a pipe at (x={coord.x}, y={coord.y})"
        )
    return cell.connector


def iter_loop(
    grid: Grid, start: Coordinate, rules: TraceRules | None = None
) -> Iterator[Coordinate]:
    """
    Walk the loop from the resolved start, yielding each coordinate once.

    The start is yielded first. Each step leaves the current pipe through the
    open end it did not arrive by. The walk ends when the next step would
    return to the start.

    Raises:
        MalformedLoopError: If a pipe does not connect back to the cell it is
            entered from, the walk leaves the pipes, or the step budget runs
            out before the start is reached again
    """
    rules = rules or TraceRules()
    max_steps = rules.max_steps if rules.max_steps is not None else grid.size

    cell = grid.get(start)
    if not isinstance(cell, Pipe) or cell.connector is None:
        raise MalformedLoopError(
            f"Start at (x={start.x}, y={start.y}) must be resolved before tracing"
        )

    heading = cell.connector.ends[1 if rules.reverse else 0]
    current = start
    steps = 0

    while True:
        yield current
        steps += 1
        if steps > max_steps:
            raise MalformedLoopError(
                f"Loop did not return to the start within {max_steps} steps"
            )

        current = current.step(heading)
        arrived_from = heading.reverse()
        connector = _connector_at(grid, current)
        if not connector.opens(arrived_from):
            raise MalformedLoopError(
                f"Pipe '{connector.glyph}' at (x={current.x}, y={current.y}) "
                f"does not connect back toward {arrived_from.name}"
            )
        if current == start:
            return
        heading = connector.other(arrived_from)


def trace_loop(
    grid: Grid, start: Coordinate, rules: TraceRules | None = None
) -> list[Coordinate]:
    """Ordered loop coordinates, starting at the start, without repeating it."""
    loop = list(iter_loop(grid, start, rules))
    logger.info("trace_loop: loop of %d cells from (%d, %d)", len(loop), start.x, start.y)
    return loop


def discard_junk(grid: Grid, loop: list[Coordinate]) -> int:
    """
    Clear every cell that is not on the loop to an untagged Empty.

    Returns:
        Number of pipes removed
    """
    on_loop = set(loop)
    discarded = 0
    for coord in grid.coordinates():
        if coord in on_loop:
            continue
        if isinstance(grid.get(coord), Pipe):
            discarded += 1
        grid.set(coord, Empty())
    logger.debug("discard_junk: removed %d pipes not on the loop", discarded)
    return discarded


# =============================================================================
# Curvature
# =============================================================================


def loop_turns(loop: list[Coordinate]) -> Iterator[tuple[Coordinate, Coordinate, Coordinate]]:
    """Cyclic (previous, current, next) triples along the loop."""
    n = len(loop)
    for i, current in enumerate(loop):
        yield loop[i - 1], current, loop[(i + 1) % n]


def turn_value(entry_direction: Direction, exit_direction: Direction) -> int:
    """
    Turn made at a cell.

    `entry_direction` points back at the previous cell, `exit_direction` at
    the next one. +1 if the exit is the entry rotated counter-clockwise, -1
    if rotated clockwise, 0 for a straight pipe.
    """
    if exit_direction == entry_direction.ccw():
        return 1
    if exit_direction == entry_direction.cw():
        return -1
    return 0


def total_curvature(loop: list[Coordinate]) -> int:
    """
    Sum of turn values around the loop: +4 or -4.

    With y growing downward, +4 means the loop runs clockwise on screen.

    Raises:
        MalformedLoopError: If consecutive cells are not adjacent or the
            turns do not add up to one full turn
    """
    total = 0
    for previous, current, following in loop_turns(loop):
        total += turn_value(current.direction_to(previous), current.direction_to(following))

    if abs(total) != FULL_TURN:
        raise MalformedLoopError(
            f"Loop turns sum to {total}, a simple closed loop turns by ±{FULL_TURN}"
        )
    logger.info("total_curvature: %+d", total)
    return total


# =============================================================================
# Region Classification
# =============================================================================


def perpendicular(direction: Direction, sign: int) -> Direction:
    """The side of `direction` selected by sign: clockwise if positive."""
    return direction.cw() if sign > 0 else direction.ccw()


def side_cells(
    previous: Coordinate, current: Coordinate, following: Coordinate, sign: int
) -> set[Coordinate]:
    """
    Cells bordering the loop at `current`, on the side selected by `sign`.

    Straight pipes have one such cell. A corner turning toward that side only
    touches it diagonally; a corner turning away touches two orthogonal
    neighbours and the diagonal between them.
    """
    entry_direction = current.direction_to(previous)
    exit_direction = current.direction_to(following)
    side = perpendicular(exit_direction, sign)
    turn = turn_value(entry_direction, exit_direction)

    if turn == 0:
        return {current.step(side)}
    if (turn > 0) == (sign > 0):
        return {current.step(side).step(exit_direction)}

    heading = entry_direction.reverse()
    behind = current.step(perpendicular(heading, sign))
    return {current.step(side), behind, behind.step(heading)}


def _untagged(grid: Grid, coord: Coordinate) -> bool:
    cell = grid.get(coord)
    return isinstance(cell, Empty) and cell.region is None


def flood_fill(grid: Grid, region: Region, seed: Coordinate) -> int:
    """
    Tag the untagged empty cells 4-connected to `seed` with `region`.

    Pipes, already tagged cells and the grid border stop the fill.

    Returns:
        Number of cells tagged
    """
    tagged = 0
    worklist = deque([seed])
    while worklist:
        coord = worklist.popleft()
        if not _untagged(grid, coord):
            continue
        grid.set(coord, Empty(region))
        tagged += 1
        for direction in SCAN_ORDER:
            neighbour = coord.step(direction)
            if _untagged(grid, neighbour):
                worklist.append(neighbour)
    return tagged


def classify_regions(grid: Grid, loop: list[Coordinate], curvature: int) -> None:
    """
    Tag every empty cell as Interior or Exterior.

    For each loop cell, the cells bordering it on the inside (the side the
    loop turns toward) seed an Interior fill and those on the outside seed
    an Exterior fill. Junk pipes must be discarded first, otherwise they
    wall off cells from their seeds.
    """
    if abs(curvature) != FULL_TURN:
        raise MalformedLoopError(f"Cannot classify with curvature {curvature}")

    inside = 1 if curvature > 0 else -1
    counts = {Region.INTERIOR: 0, Region.EXTERIOR: 0}
    for previous, current, following in loop_turns(loop):
        for region, sign in ((Region.INTERIOR, inside), (Region.EXTERIOR, -inside)):
            for seed in side_cells(previous, current, following, sign):
                if _untagged(grid, seed):
                    counts[region] += flood_fill(grid, region, seed)

    logger.info(
        "classify_regions: %d interior, %d exterior",
        counts[Region.INTERIOR],
        counts[Region.EXTERIOR],
    )


def unclassified(grid: Grid) -> list[Coordinate]:
    """Empty cells that have no region yet."""
    return [coord for coord in grid.coordinates() if _untagged(grid, coord)]


def count_region(grid: Grid, region: Region) -> int:
    return sum(1 for coord in grid.coordinates() if grid.get(coord) == Empty(region))


def count_interior(grid: Grid) -> int:
    return count_region(grid, Region.INTERIOR)


# =============================================================================
# Answers
# =============================================================================


@dataclass
class Solution:
    """A fully classified network."""

    grid: Grid
    start: Coordinate
    loop: list[Coordinate]
    curvature: int
    discarded: int

    @property
    def half_length(self) -> int:
        return len(self.loop) // 2

    @property
    def interior(self) -> int:
        return count_interior(self.grid)


def solve(text: str, rules: TraceRules | None = None) -> Solution:
    """Run the whole pipeline over a network's text."""
    network = parse_network(text)
    grid, start = network.grid, network.start
    resolve_start(grid, start)
    loop = trace_loop(grid, start, rules)
    discarded = discard_junk(grid, loop)
    curvature = total_curvature(loop)
    classify_regions(grid, loop, curvature)
    return Solution(grid, start, loop, curvature, discarded)


def loop_half_length(text: str, rules: TraceRules | None = None) -> int:
    """Distance along the loop from the start to its farthest point."""
    network = parse_network(text)
    resolve_start(network.grid, network.start)
    return len(trace_loop(network.grid, network.start, rules)) // 2


def enclosed_area(text: str, rules: TraceRules | None = None) -> int:
    """Number of cells enclosed by the loop."""
    return solve(text, rules).interior
