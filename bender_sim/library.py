from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .hashing import maze_fingerprint, trace_fingerprint
from .simulation import SimulationConfig, SimulationRuntime
from .world import Direction, MazeGrid


@dataclass
class SimulationSummary:
    steps_executed: int
    terminated: bool
    looped: bool
    directions: List[Direction]
    obstacles_destroyed: int
    teleports: int
    maze_hash: str
    trace_hash: str


class BenderGameLibrary:
    """Factory + orchestration API for running Bender through a maze."""

    def create_world(
        self, rows: Iterable[str], height: int | None = None, width: int | None = None
    ) -> MazeGrid:
        return MazeGrid.from_rows(rows, height=height, width=width)

    def run_simulation(
        self,
        world: MazeGrid,
        config: SimulationConfig | None = None,
    ) -> tuple[SimulationRuntime, SimulationSummary]:
        runtime = SimulationRuntime(world=world, config=config or SimulationConfig())
        runtime.run()
        summary = SimulationSummary(
            steps_executed=runtime.steps,
            terminated=runtime.terminated,
            looped=runtime.looped,
            directions=list(runtime.directions),
            obstacles_destroyed=runtime.obstacles_destroyed,
            teleports=runtime.teleports,
            maze_hash=maze_fingerprint(world),
            trace_hash=trace_fingerprint(runtime.directions, runtime.looped),
        )
        return runtime, summary


def solve(world: MazeGrid, config: SimulationConfig | None = None) -> str:
    runtime = SimulationRuntime(world=world, config=config or SimulationConfig())
    runtime.run()
    return runtime.output()
