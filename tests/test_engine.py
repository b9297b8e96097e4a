import pytest

from breakbot.engine import (
    ReplayError,
    Simulation,
    SimulationStatus,
    replay_path,
    simulate,
)
from breakbot.grid_map import Direction, parse_grid
from scenarios import (
    SCENARIO_BOX,
    SCENARIO_BREAKER,
    SCENARIO_INVERTER,
    SCENARIO_OVERRIDE_TOUR,
    SCENARIO_OVERRIDES,
    SCENARIO_TELEPORTER,
)

S, E, N, W = "SOUTH", "EAST", "NORTH", "WEST"

ALL_SCENARIOS = [
    SCENARIO_OVERRIDES,
    SCENARIO_OVERRIDE_TOUR,
    SCENARIO_BREAKER,
    SCENARIO_INVERTER,
    SCENARIO_TELEPORTER,
    SCENARIO_BOX,
]


@pytest.mark.parametrize("text, expected", [
    (SCENARIO_OVERRIDES, [S, E, N, E, E]),
    (SCENARIO_OVERRIDE_TOUR, [S] * 2 + [E] * 6 + [N] * 6 + [W] * 4 + [S] * 2),
    (SCENARIO_BREAKER, [S] * 4 + [E] * 6),
    (SCENARIO_INVERTER, [S] * 4 + [W] * 7 + [N] * 7 + [E] * 7 + [S] * 2),
    (SCENARIO_TELEPORTER, [S] * 3 + [E] * 7 + [S] * 7),
    (SCENARIO_BOX, ["LOOP"]),
])
def test_known_grids(text, expected):
    result = simulate(parse_grid(text))
    assert result.output_lines() == expected


def test_enclosed_box_is_a_cycle():
    result = simulate(parse_grid(SCENARIO_BOX))

    assert result.status == SimulationStatus.CYCLE_DETECTED
    assert not result.reached_goal
    assert result.format() == "LOOP"


def test_boxed_in_start_is_stuck():
    result = simulate(parse_grid("3 4\n####\n#@#$\n####\n"))

    assert result.status == SimulationStatus.STUCK
    assert result.output_lines() == ["LOOP"]
    assert result.path == ()


def test_breaker_then_breakable_wall():
    result = simulate(parse_grid("3 6\n######\n#@BX$#\n######\n"))

    assert result.output_lines() == [E, E, E]
    assert result.destroyed == frozenset({(1, 3)})


def test_breaker_scenario_destroys_exactly_the_crossed_walls():
    result = simulate(parse_grid(SCENARIO_BREAKER))
    assert result.destroyed == frozenset({(3, 2), (5, 6), (5, 7)})
    assert result.final_position == (5, 8)


def test_teleport_hop_adds_no_move():
    sim = Simulation(parse_grid(SCENARIO_TELEPORTER))
    result = sim.run()

    hop = result.trail.index((8, 5))
    assert result.trail[hop + 1] == (1, 5)
    # every trail entry but the start and the hop landing is one move
    assert len(result.trail) == len(result.path) + 2


def test_goal_next_to_start():
    result = simulate(parse_grid("1 3\n$@$\n"))
    # the start cell itself is never a goal
    assert result.reached_goal
    assert len(result.path) == 1


def test_step_is_idempotent_after_termination():
    sim = Simulation(parse_grid(SCENARIO_OVERRIDES))
    sim.run()

    assert sim.step() == SimulationStatus.SUCCESS
    assert sim.steps == 5


def test_runs_are_deterministic():
    for text in ALL_SCENARIOS:
        grid = parse_grid(text)
        assert simulate(grid) == simulate(grid)


def test_destroyed_set_only_grows():
    sim = Simulation(parse_grid(SCENARIO_BREAKER))
    previous = frozenset()

    while not sim.step().terminal:
        current = sim.walls.snapshot()
        assert previous <= current
        previous = current

    assert len(previous) == 3


def test_visited_configurations_stay_within_bound():
    for text in ALL_SCENARIOS:
        sim = Simulation(parse_grid(text))
        result = sim.run()
        assert result.visited <= sim.state_space_bound()


def test_replay_reproduces_final_state():
    for text in ALL_SCENARIOS:
        grid = parse_grid(text)
        result = simulate(grid)
        if not result.reached_goal:
            continue

        final_position, destroyed = replay_path(grid, result.path)

        assert final_position == result.final_position
        assert destroyed == result.destroyed
        assert grid.is_goal(final_position)


def test_replay_rejects_blocked_move():
    grid = parse_grid(SCENARIO_OVERRIDES)
    with pytest.raises(ReplayError, match="Move 0"):
        replay_path(grid, [Direction.NORTH])


def test_base_grid_is_not_mutated():
    grid = parse_grid(SCENARIO_BREAKER)
    before = grid.rows()

    simulate(grid)

    assert grid.rows() == before
