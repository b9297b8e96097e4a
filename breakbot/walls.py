# walls.py

import logging
from typing import Dict, FrozenSet, Set, Tuple

from breakbot.grid_map import CellType, GridMap

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class WallLayer:
    """
    Mutable delta over an immutable GridMap: the set of breakable walls
    destroyed so far in one run. Walls never regenerate.
    """

    def __init__(self, grid_map: GridMap):
        self.grid_map = grid_map
        self.destroyed: Set[Position] = set()
        # fixed enumeration order for the fingerprint bits
        self._bit: Dict[Position, int] = {
            pos: i for i, pos in enumerate(grid_map.breakable)
        }
        self._mask = 0

    # -----------------------------
    # Queries
    # -----------------------------
    def is_intact_breakable(self, pos: Position) -> bool:
        return pos in self._bit and pos not in self.destroyed

    def is_passable(self, pos: Position, breaker: bool) -> bool:
        row, col = pos
        if not self.grid_map.in_bounds(row, col):
            return False
        if self.grid_map.cell_type(pos) == CellType.WALL:
            return False
        if self.is_intact_breakable(pos):
            return breaker
        return True

    def fingerprint(self) -> int:
        """One bit per breakable-wall cell, set once that wall is gone."""
        return self._mask

    def snapshot(self) -> FrozenSet[Position]:
        return frozenset(self.destroyed)

    # -----------------------------
    # Mutation
    # -----------------------------
    def destroy(self, pos: Position) -> None:
        if not self.is_intact_breakable(pos):
            raise ValueError(f"No intact breakable wall at {pos}")

        self.destroyed.add(pos)
        self._mask |= 1 << self._bit[pos]
        logger.debug("Destroyed wall at %s (%d/%d gone)",
                     pos, len(self.destroyed), len(self._bit))

    def __len__(self) -> int:
        return len(self.destroyed)
