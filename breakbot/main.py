# main.py

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from breakbot.config import LOG_LEVEL
from breakbot.engine import Simulation
from breakbot.grid_map import MalformedGridError, parse_grid, render_map

err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breakbot",
        description="Replay the robot's fixed policy on a grid and print its moves (or LOOP).",
    )
    parser.add_argument("grid", nargs="?", help="grid file (defaults to stdin)")
    parser.add_argument("--render", action="store_true", help="draw the final grid on stderr")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every step")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.grid:
        with open(args.grid, encoding="utf-8") as fh:
            text = fh.read()
    else:
        text = sys.stdin.read()

    try:
        grid_map = parse_grid(text)
    except MalformedGridError as exc:
        err_console.print(f"[red]Invalid grid:[/red] {exc}")
        return 2

    simulation = Simulation(grid_map)
    result = simulation.run()

    for line in result.output_lines():
        print(line)

    if args.render:
        render_map(
            grid_map,
            robot=result.final_position,
            destroyed=result.destroyed,
            trail=result.trail,
            out=err_console,
        )
        err_console.print(f"{result.status.name}: {result.steps} moves, "
                          f"{len(result.destroyed)} walls destroyed")

    return 0 if result.reached_goal else 1


if __name__ == "__main__":
    sys.exit(main())
