# grid_map.py

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from rich.console import Console

from breakbot.config import EMPTY_SYMBOL, TELEPORTER_SYMBOLS

console = Console(markup=True)

Position = Tuple[int, int]


class MalformedGridError(ValueError):
    """Raised when grid text cannot describe a valid simulation."""


# -----------------------------
# Directions
# -----------------------------
class Direction(Enum):
    SOUTH = (1, 0)
    EAST = (0, 1)
    NORTH = (-1, 0)
    WEST = (0, -1)

    def step(self, pos: Position) -> Position:
        dr, dc = self.value
        return pos[0] + dr, pos[1] + dc


# -----------------------------
# Cell types for the grid
# -----------------------------
class CellType(Enum):
    EMPTY = " "
    WALL = "#"
    BREAKABLE = "X"
    START = "@"
    GOAL = "$"
    SOUTH = "S"
    EAST = "E"
    NORTH = "N"
    WEST = "W"
    BREAKER = "B"
    INVERTER = "I"
    TELEPORTER = "1"

    @classmethod
    def from_symbol(cls, symbol: str) -> "CellType":
        if symbol in TELEPORTER_SYMBOLS:
            return cls.TELEPORTER
        try:
            return cls(symbol)
        except ValueError:
            # unknown symbols behave like empty floor
            return cls.EMPTY

    @property
    def override(self) -> Optional[Direction]:
        if self.name in Direction.__members__:
            return Direction[self.name]
        return None


# -----------------------------
# Map data container
# -----------------------------
@dataclass(frozen=True)
class GridMap:
    """
    Immutable base grid. Wall destruction is tracked outside of it
    (see walls.WallLayer), so one GridMap can back any number of runs.
    """

    width: int
    height: int
    cells: Dict[Position, str]
    start: Position
    goals: FrozenSet[Position]
    teleporters: Dict[Position, Position]
    breakable: Tuple[Position, ...]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def symbol(self, pos: Position) -> str:
        return self.cells[pos]

    def cell_type(self, pos: Position) -> CellType:
        return CellType.from_symbol(self.cells[pos])

    def is_goal(self, pos: Position) -> bool:
        return pos in self.goals

    def rows(self) -> List[str]:
        return [
            "".join(self.cells[(r, c)] for c in range(self.width))
            for r in range(self.height)
        ]

    def __repr__(self):
        return (
            f"GridMap({self.height}x{self.width}, start={self.start}, "
            f"goals={sorted(self.goals)}, breakable={len(self.breakable)}, "
            f"teleporters={len(self.teleporters) // 2})"
        )


# -----------------------------
# Loading
# -----------------------------
def _fit_row(line: str, width: int) -> str:
    line = line.rstrip("\r\n")
    if len(line) < width:
        return line + EMPTY_SYMBOL * (width - len(line))
    return line[:width]


def load_grid(lines: Sequence[str], height: int, width: int) -> GridMap:
    """
    Build a GridMap from raw row strings. Short rows are padded with blanks,
    long rows truncated to `width`.
    """
    if height <= 0 or width <= 0:
        raise MalformedGridError("height and width must be positive")
    if len(lines) < height:
        raise MalformedGridError(f"expected {height} rows, got {len(lines)}")

    cells: Dict[Position, str] = {}
    starts: List[Position] = []
    goals: List[Position] = []
    breakable: List[Position] = []
    pads: Dict[str, List[Position]] = {}

    for r in range(height):
        row = _fit_row(lines[r], width)
        for c, symbol in enumerate(row):
            pos = (r, c)
            cells[pos] = symbol
            kind = CellType.from_symbol(symbol)
            if kind == CellType.START:
                starts.append(pos)
            elif kind == CellType.GOAL:
                goals.append(pos)
            elif kind == CellType.BREAKABLE:
                breakable.append(pos)
            elif kind == CellType.TELEPORTER:
                pads.setdefault(symbol, []).append(pos)

    if len(starts) != 1:
        raise MalformedGridError(f"expected exactly one start '@', found {len(starts)}")
    if not goals:
        raise MalformedGridError("grid has no goal '$'")

    teleporters: Dict[Position, Position] = {}
    for digit, positions in sorted(pads.items()):
        if len(positions) != 2:
            raise MalformedGridError(
                f"teleporter '{digit}' appears {len(positions)} times, expected 2"
            )
        a, b = positions
        teleporters[a] = b
        teleporters[b] = a

    return GridMap(
        width=width,
        height=height,
        cells=cells,
        start=starts[0],
        goals=frozenset(goals),
        teleporters=teleporters,
        breakable=tuple(breakable),
    )


def parse_grid(text: str) -> GridMap:
    """Parse the `H W` header followed by H grid rows."""
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise MalformedGridError("missing 'H W' header")

    header = lines[0].split()
    try:
        height, width = int(header[0]), int(header[1])
    except (IndexError, ValueError):
        raise MalformedGridError(f"bad header line: {lines[0]!r}") from None

    return load_grid(lines[1:], height, width)


# -----------------------------
# Rich renderer (visual only)
# -----------------------------
_STYLES = {
    CellType.WALL: "[white]#[/white]",
    CellType.BREAKABLE: "[yellow]X[/yellow]",
    CellType.START: "[green]@[/green]",
    CellType.GOAL: "[red]$[/red]",
    CellType.BREAKER: "[bold magenta]B[/bold magenta]",
    CellType.INVERTER: "[bold cyan]I[/bold cyan]",
}


def render_map(
    grid_map: GridMap,
    robot: Optional[Position] = None,
    destroyed: Iterable[Position] = (),
    trail: Iterable[Position] = (),
    out: Optional[Console] = None,
) -> None:
    out = out or console
    destroyed = set(destroyed)
    trail = set(trail)

    for r in range(grid_map.height):
        row = []
        for c in range(grid_map.width):
            pos = (r, c)

            if robot is not None and pos == robot:
                row.append("[bold blue]R[/bold blue]")
                continue
            if pos in destroyed:
                row.append("[dim yellow].[/dim yellow]")
                continue

            kind = grid_map.cell_type(pos)
            symbol = grid_map.symbol(pos)
            if kind in _STYLES:
                row.append(_STYLES[kind])
            elif kind == CellType.TELEPORTER:
                row.append(f"[bold green]{symbol}[/bold green]")
            elif kind.override is not None:
                row.append(f"[blue]{symbol}[/blue]")
            elif pos in trail:
                row.append("[dim blue]·[/dim blue]")
            else:
                row.append("[dim] [/dim]")

        out.print("".join(row))
