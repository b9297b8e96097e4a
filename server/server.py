import logging
from typing import Dict, List
from uuid import uuid4

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from breakbot.config import MAX_SESSIONS
from breakbot.engine import ReplayError, Simulation, SimulationResult, replay_path
from breakbot.grid_map import Direction, GridMap, MalformedGridError, load_grid

logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class GridData(BaseModel):
    height: int
    width: int
    rows: List[str]


class StepRequest(BaseModel):
    session_id: str
    steps: int = Field(default=1, ge=1)


class ReplayRequest(BaseModel):
    grid: GridData
    moves: List[str]


sessions: Dict[str, Simulation] = {}


@app.get("/ping")
def ping():
    return {"status": "alive"}


def build_gridmap(grid_data: GridData) -> GridMap:
    try:
        return load_grid(grid_data.rows, grid_data.height, grid_data.width)
    except MalformedGridError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _to_directions(moves: List[str]) -> List[Direction]:
    directions = []
    for move in moves:
        name = move.strip().upper()
        if name not in Direction.__members__:
            raise HTTPException(status_code=400, detail=f"Unknown direction: {move}")
        directions.append(Direction[name])
    return directions


def _result_payload(result: SimulationResult) -> dict:
    return {
        "outcome": result.status.name,
        "reached_goal": result.reached_goal,
        "moves": [d.name for d in result.path],
        "output": result.output_lines(),
        "destroyed": sorted([r, c] for r, c in result.destroyed),
        "final_position": list(result.final_position),
        "steps": result.steps,
        "visited": result.visited,
    }


def _snapshot(session_id: str, simulation: Simulation) -> dict:
    state = simulation.robot.state
    return {
        "session_id": session_id,
        "status": simulation.status.name,
        "game_over": simulation.status.terminal,
        "robot_position": list(state.position),
        "facing": state.facing.name,
        "breaker": state.breaker,
        "inverted": state.inverted,
        "destroyed": sorted([r, c] for r, c in simulation.walls.destroyed),
        "moves": [d.name for d in simulation.path],
        "steps": simulation.steps,
    }


@app.post("/simulate")
def simulate(grid_data: GridData):
    grid_map = build_gridmap(grid_data)
    result = Simulation(grid_map).run()
    return _result_payload(result)


@app.post("/start-simulation")
def start_simulation(grid_data: GridData):
    grid_map = build_gridmap(grid_data)

    if len(sessions) >= MAX_SESSIONS:
        # drop the oldest session
        oldest = next(iter(sessions))
        del sessions[oldest]
        logger.info("Session limit reached, dropped %s", oldest)

    session_id = str(uuid4())
    sessions[session_id] = Simulation(grid_map)
    return _snapshot(session_id, sessions[session_id])


@app.post("/next-step")
def next_step(payload: StepRequest):
    simulation = sessions.get(payload.session_id)
    if simulation is None:
        raise HTTPException(status_code=404, detail="Session not found")

    for _ in range(payload.steps):
        if simulation.step().terminal:
            break

    return _snapshot(payload.session_id, simulation)


@app.post("/replay")
def replay(payload: ReplayRequest):
    grid_map = build_gridmap(payload.grid)
    moves = _to_directions(payload.moves)

    try:
        final_position, destroyed = replay_path(grid_map, moves)
    except ReplayError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return {
        "final_position": list(final_position),
        "destroyed": sorted([r, c] for r, c in destroyed),
        "reached_goal": grid_map.is_goal(final_position),
    }
