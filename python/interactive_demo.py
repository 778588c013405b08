"""
Interactive demo for the pipe loop solver.
Step along the traced loop with the keyboard, then reveal the classified regions.
"""

from __future__ import annotations

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from demo import EXAMPLES
from pipe_loop import Solution, TraceRules, resolve_start, solve
from pipe_parser import parse_network
from pipe_types import Coordinate, PipeError


class InteractiveTracer:
    """Walks a highlight along a solved loop."""

    def __init__(self, text: str, rules: TraceRules | None = None) -> None:
        self.solution: Solution = solve(text, rules)
        network = parse_network(text)
        resolve_start(network.grid, network.start)
        self.network_grid = network.grid  # unclassified, junk pipes kept
        self.step = 0
        self.show_regions = False
        self.console = Console()
        self.status_message = "Ready"

    @property
    def position(self) -> Coordinate:
        return self.solution.loop[self.step]

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        solution = self.solution
        pos = self.position
        loop = solution.loop[: self.step + 1]

        status = Text()
        status.append("Step: ", style="bold")
        status.append(f"{self.step} / {len(solution.loop) - 1}\n")
        status.append("Position: ", style="bold")
        status.append(f"(x={pos.x}, y={pos.y})\n")
        status.append("Distance from start: ", style="bold")
        status.append(f"{min(self.step, len(solution.loop) - self.step)}\n\n")

        if self.show_regions:
            grid_text = render(solution.grid, solution.loop, highlight=pos)
        else:
            grid_text = render(self.network_grid, loop, highlight=pos)
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")

        if self.show_regions:
            status.append("Enclosed cells: ", style="bold")
            status.append(f"{solution.interior}\n\n")

        status.append("Keys:\n", style="bold cyan")
        status.append("  D / Space - Step forward\n")
        status.append("  A - Step back\n")
        status.append("  F - Toggle regions\n")
        status.append("  R - Back to the start\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Pipe Loop Interactive Demo", border_style="green", width=80)

    def move(self, delta: int) -> None:
        n = len(self.solution.loop)
        self.step = (self.step + delta) % n
        if self.step == 0:
            self.status_message = "Back at the start"
        elif self.step == n // 2:
            self.status_message = f"Farthest point: {n // 2} steps from the start"
        else:
            self.status_message = f"Moved {'forward' if delta > 0 else 'back'}"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'r':
                        self.step = 0
                        self.status_message = "Reset to the start"
                    elif key.lower() == 'd' or key == ' ':
                        self.move(1)
                    elif key.lower() == 'a':
                        self.move(-1)
                    elif key.lower() == 'f':
                        self.show_regions = not self.show_regions
                        self.status_message = "Regions shown" if self.show_regions else "Regions hidden"
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    if len(sys.argv) > 2 and sys.argv[2] == 'verbose':
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    name = sys.argv[1] if len(sys.argv) > 1 else 'winding'
    try:
        tracer = InteractiveTracer(EXAMPLES[name])
    except PipeError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    tracer.run()
