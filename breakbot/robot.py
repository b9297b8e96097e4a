# robot.py

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from breakbot.config import INITIAL_FACING, PRIORITY_INVERTED, PRIORITY_NORMAL
from breakbot.grid_map import CellType, Direction, GridMap
from breakbot.walls import WallLayer

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

NORMAL_ORDER: Tuple[Direction, ...] = tuple(Direction[name] for name in PRIORITY_NORMAL)
INVERTED_ORDER: Tuple[Direction, ...] = tuple(Direction[name] for name in PRIORITY_INVERTED)


@dataclass
class RobotState:
    position: Position
    facing: Direction = Direction[INITIAL_FACING]
    breaker: bool = False
    inverted: bool = False


class Robot:
    def __init__(self, grid_map: GridMap, walls: WallLayer):
        self.grid_map = grid_map
        self.walls = walls
        self.state = RobotState(position=grid_map.start)

    @property
    def position(self) -> Position:
        return self.state.position

    # -----------------------------
    # Tile effects
    # -----------------------------
    def apply_tile_effect(self) -> None:
        """
        Apply the behaviour of the cell the robot stands on.
        A teleporter always lands on its own partner, whose effect would
        only send the robot back, so at most one effect fires per step.
        """
        state = self.state
        kind = self.grid_map.cell_type(state.position)

        if kind.override is not None:
            state.facing = kind.override
        elif kind == CellType.BREAKER:
            state.breaker = not state.breaker
        elif kind == CellType.INVERTER:
            state.inverted = not state.inverted
        elif kind == CellType.TELEPORTER:
            target = self.grid_map.teleporters[state.position]
            logger.debug("Teleport %s -> %s", state.position, target)
            state.position = target

    # -----------------------------
    # Movement
    # -----------------------------
    def priority_order(self) -> Tuple[Direction, ...]:
        return INVERTED_ORDER if self.state.inverted else NORMAL_ORDER

    def can_move(self, direction: Direction) -> bool:
        return self.walls.is_passable(direction.step(self.state.position), self.state.breaker)

    def resolve_move(self) -> Optional[Direction]:
        """
        Forward if passable, otherwise the first passable direction in the
        current priority order. Returns None when the robot is boxed in.
        """
        if self.can_move(self.state.facing):
            return self.state.facing

        for direction in self.priority_order():
            if self.can_move(direction):
                return direction
        return None

    def advance(self, direction: Direction) -> Position:
        """Face `direction` and step into it, breaking a wall if needed."""
        target = direction.step(self.state.position)
        if not self.walls.is_passable(target, self.state.breaker):
            raise ValueError(f"Cannot move {direction.name} from {self.state.position}")

        if self.walls.is_intact_breakable(target):
            self.walls.destroy(target)

        self.state.facing = direction
        self.state.position = target
        return target
