# engine.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Sequence, Tuple

from breakbot.config import LOOP_TOKEN
from breakbot.grid_map import Direction, GridMap
from breakbot.loop_detector import LoopDetector, make_signature, state_space_bound
from breakbot.robot import Robot
from breakbot.walls import WallLayer

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SimulationStatus(Enum):
    RUNNING = "running"
    SUCCESS = "success"
    CYCLE_DETECTED = "cycle_detected"
    STUCK = "stuck"

    @property
    def terminal(self) -> bool:
        return self is not SimulationStatus.RUNNING


class ReplayError(ValueError):
    """Raised when a move sequence cannot be replayed on a grid."""


@dataclass(frozen=True)
class SimulationResult:
    status: SimulationStatus
    path: Tuple[Direction, ...]
    destroyed: FrozenSet[Position]
    final_position: Position
    steps: int
    visited: int
    trail: Tuple[Position, ...] = ()

    @property
    def reached_goal(self) -> bool:
        return self.status == SimulationStatus.SUCCESS

    def output_lines(self) -> List[str]:
        if not self.reached_goal:
            return [LOOP_TOKEN]
        return [direction.name for direction in self.path]

    def format(self) -> str:
        return "\n".join(self.output_lines())


class Simulation:
    """
    One deterministic run of the robot over a grid.
    Call step() to advance one iteration, or run() to go to the end.
    """

    def __init__(self, grid_map: GridMap):
        self.grid_map = grid_map
        self.walls = WallLayer(grid_map)
        self.robot = Robot(grid_map, self.walls)
        self.detector = LoopDetector()
        self.path: List[Direction] = []
        self.status = SimulationStatus.RUNNING
        self.steps = 0
        self.trail: List[Position] = [grid_map.start]

    # -----------------------------
    # Public API
    # -----------------------------
    def step(self) -> SimulationStatus:
        if self.status.terminal:
            return self.status

        state = self.robot.state

        if self.grid_map.is_goal(state.position):
            return self._finish(SimulationStatus.SUCCESS)

        if self.detector.seen_before(make_signature(state, self.walls)):
            return self._finish(SimulationStatus.CYCLE_DETECTED)

        self.robot.apply_tile_effect()
        if state.position != self.trail[-1]:
            self.trail.append(state.position)

        direction = self.robot.resolve_move()
        if direction is None:
            return self._finish(SimulationStatus.STUCK)

        self.robot.advance(direction)
        self.path.append(direction)
        self.trail.append(state.position)
        self.steps += 1
        logger.debug("Step %d: %s -> %s", self.steps, direction.name, state.position)
        return self.status

    def run(self) -> SimulationResult:
        while not self.step().terminal:
            pass
        return self.result()

    def result(self) -> SimulationResult:
        return SimulationResult(
            status=self.status,
            path=tuple(self.path),
            destroyed=self.walls.snapshot(),
            final_position=self.robot.position,
            steps=self.steps,
            visited=len(self.detector),
            trail=tuple(self.trail),
        )

    def state_space_bound(self) -> int:
        return state_space_bound(
            self.grid_map.height, self.grid_map.width, len(self.grid_map.breakable)
        )

    # -----------------------------
    # Internals
    # -----------------------------
    def _finish(self, status: SimulationStatus) -> SimulationStatus:
        self.status = status
        logger.info("Simulation finished: %s after %d steps (%d configurations)",
                    status.name, self.steps, len(self.detector))
        return status


def simulate(grid_map: GridMap) -> SimulationResult:
    return Simulation(grid_map).run()


def replay_path(
    grid_map: GridMap,
    moves: Sequence[Direction],
) -> Tuple[Position, FrozenSet[Position]]:
    """
    Re-drive a robot along `moves` on a pristine copy of the grid, applying
    the same tile effects. Returns the final position and destroyed walls.
    """
    walls = WallLayer(grid_map)
    robot = Robot(grid_map, walls)

    for index, direction in enumerate(moves):
        robot.apply_tile_effect()
        if not robot.can_move(direction):
            raise ReplayError(
                f"Move {index} ({direction.name}) is blocked at {robot.position}"
            )
        robot.advance(direction)

    return robot.position, walls.snapshot()
