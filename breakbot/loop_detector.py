# loop_detector.py

from typing import NamedTuple, Set, Tuple

from breakbot.grid_map import Direction
from breakbot.robot import RobotState
from breakbot.walls import WallLayer

Position = Tuple[int, int]


class Signature(NamedTuple):
    position: Position
    facing: Direction
    breaker: bool
    inverted: bool
    destroyed: int


def make_signature(state: RobotState, walls: WallLayer) -> Signature:
    """
    Full configuration key. The destroyed-wall fingerprint is part of it:
    the same position and flags can lead elsewhere once a wall is gone.
    """
    return Signature(
        position=state.position,
        facing=state.facing,
        breaker=state.breaker,
        inverted=state.inverted,
        destroyed=walls.fingerprint(),
    )


class LoopDetector:
    def __init__(self):
        self.visited: Set[Signature] = set()

    def seen_before(self, signature: Signature) -> bool:
        """
        Record `signature`. Returns True if it had already been recorded,
        which means the run has entered a cycle.
        """
        if signature in self.visited:
            return True
        self.visited.add(signature)
        return False

    def reset(self) -> None:
        self.visited.clear()

    def __len__(self) -> int:
        return len(self.visited)


def state_space_bound(height: int, width: int, breakable: int) -> int:
    """Upper bound on distinct configurations for one run."""
    return height * width * len(Direction) * 2 * 2 * 2 ** breakable
