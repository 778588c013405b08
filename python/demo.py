"""
Demonstration script for the pipe loop solver.

Solves the built-in example networks, or a network read from a file, and
shows the input next to the classified grid.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_framed, render_side_by_side
from pipe_loop import Solution, TraceRules, solve
from pipe_parser import parse_network
from pipe_types import PipeError

EXAMPLES = dict(
    square="""
        .....
        .S-7.
        .|.|.
        .L-J.
        .....
    """,
    winding="""
        ..F7.
        .FJ|.
        SJ.L7
        |F--J
        LJ...
    """,
    squeezed="""
        ..........
        .S------7.
        .|F----7|.
        .||....||.
        .||....||.
        .|L-7F-J|.
        .|..||..|.
        .L--JL--J.
        ..........
    """,
    junk="""
        FF7FSF7F7F7F7F7F---7
        L|LJ||||||||||||F--J
        FL-7LJLJ||||||LJL-77
        F--JF--7||LJLJ7F7FJ-
        L---JF-JLJ.||-FJLJJ7
        |F|F-JF---7F7-L7L|7|
        |FFJF7L7F-JF7|JL---7
        7-L-JL7||F7|L7F-7F7|
        L.L7LFJ|||||FJL7||LJ
        L7JLJL-JLJLJL--JLJ.L
    """,
)


def render_summary(text: str, solution: Solution, title: str, color: bool = True) -> Panel:
    """Panel with the input grid, the classified grid and both answers."""
    before = parse_network(text).grid
    after = solution.grid
    width = after.cols + 2
    grids = render_side_by_side(
        [
            (render_framed(before, "input", color=color), width),
            (render_framed(after, "regions", solution.loop, color=color), width),
        ]
    )

    body = Text()
    body.append("Loop length: ", style="bold")
    body.append(f"{len(solution.loop)}\n")
    body.append("Farthest point: ", style="bold")
    body.append(f"{solution.half_length}\n")
    body.append("Enclosed cells: ", style="bold")
    body.append(f"{solution.interior}\n")
    body.append("Curvature: ", style="bold")
    body.append(f"{solution.curvature:+d}")
    body.append(" (clockwise)\n" if solution.curvature > 0 else " (counter-clockwise)\n")
    if solution.discarded:
        body.append("Junk pipes discarded: ", style="bold")
        body.append(f"{solution.discarded}\n")
    body.append("\n")
    body.append(Text.from_ansi(grids))

    return Panel(body, title=title, border_style="green")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Trace a pipe loop and count the cells it encloses.")
    parser.add_argument("file", nargs="?", help="network file (default: run the built-in examples)")
    parser.add_argument("--reverse", action="store_true", help="trace the loop the other way round")
    parser.add_argument("--plain", action="store_true", help="disable colors")
    parser.add_argument("--verbose", "-v", action="store_true", help="log pipeline stages")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    console = Console(no_color=args.plain)
    rules = TraceRules(reverse=args.reverse)

    if args.file:
        with open(args.file, encoding="utf-8") as f:
            networks = {args.file: f.read()}
    else:
        networks = EXAMPLES

    status = 0
    for name, text in networks.items():
        try:
            solution = solve(text, rules)
        except PipeError as e:
            console.print(Panel(Text(str(e), style="red"), title=f"{name} - Error", border_style="red"))
            status = 1
            continue
        console.print(render_summary(text, solution, name, color=not args.plain))

    return status


if __name__ == "__main__":
    sys.exit(main())
