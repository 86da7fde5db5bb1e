from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .agents import Bender
from .world import CellType, Direction, MazeGrid

logger = logging.getLogger(__name__)

LOOP_SENTINEL = "LOOP"

_CELL_NOTES = {
    CellType.SUICIDE: "suicide",
    CellType.BEER: "beer",
    CellType.INVERTOR: "invert",
    CellType.TELEPORTER: "teleport",
    CellType.OBSTACLE: "obstacle",
    CellType.SOUTH: "override",
    CellType.NORTH: "override",
    CellType.EAST: "override",
    CellType.WEST: "override",
}


@dataclass(frozen=True)
class SimulationConfig:
    max_steps: int = 10000
    record_events: bool = True


@dataclass
class StepEvent:
    step: int
    direction: Direction
    position: Tuple[int, int]
    note: str = ""


@dataclass
class SimulationRuntime:
    world: MazeGrid
    config: SimulationConfig = field(default_factory=SimulationConfig)
    bender: Optional[Bender] = None
    steps: int = 0
    looped: bool = False
    obstacles_destroyed: int = 0
    teleports: int = 0
    directions: List[Direction] = field(default_factory=list)
    events: List[StepEvent] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.config.max_steps < 1:
            raise ValueError("max_steps must be positive.")
        # obstacles get destroyed in place; never touch the caller's grid
        self.world = self.world.copy()

    @property
    def terminated(self) -> bool:
        return self.bender is not None and self.bender.terminated

    def spawn(self) -> Bender:
        if self.bender is None:
            self.bender = Bender.spawn(self.world)
            logger.debug("INIT: %s", self.bender)
        return self.bender

    def step(self) -> Direction:
        bender = self.spawn()
        if bender.terminated:
            raise RuntimeError(f"Bender already terminated after {self.steps} steps.")
        direction = bender.step(self.world)
        self.steps += 1
        self.directions.append(direction)

        note = _CELL_NOTES.get(bender.last_cell, "")
        if bender.last_cell == CellType.OBSTACLE:
            self.obstacles_destroyed += 1
        elif bender.last_cell == CellType.TELEPORTER:
            self.teleports += 1
        if self.config.record_events:
            self.events.append(
                StepEvent(
                    step=self.steps,
                    direction=direction,
                    position=tuple(bender.position),
                    note=note,
                )
            )
        logger.debug("STEP %d: moved %s with %s", self.steps, direction, bender)
        return direction

    def run(self) -> None:
        logger.debug("Maze:\n%s", "\n".join(self.world.render()))
        bender = self.spawn()
        while not bender.terminated:
            if self.steps >= self.config.max_steps:
                self.looped = True
                break
            self.step()

        if self.looped:
            logger.info("No exit after %d steps, reporting %s", self.steps, LOOP_SENTINEL)
        else:
            logger.info("Bender reached the suicide booth after %d steps", self.steps)

    def output(self) -> str:
        return format_directions(self.directions, self.looped)


def format_directions(directions: List[Direction], looped: bool = False) -> str:
    if looped:
        return LOOP_SENTINEL + "\n"
    return "".join(f"{d.value}\n" for d in directions)
