from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from .world import CellType, Direction, MazeGrid, Position

logger = logging.getLogger(__name__)


NORMAL_PRIORITY: Tuple[Direction, ...] = (
    Direction.SOUTH,
    Direction.EAST,
    Direction.NORTH,
    Direction.WEST,
)

INVERTED_PRIORITY: Tuple[Direction, ...] = (
    Direction.WEST,
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
)


class MazeInvariantError(RuntimeError):
    """Raised when a maze drives the agent into a state well-formed mazes never reach."""


@dataclass
class Bender:
    position: Position
    facing: Direction = Direction.SOUTH
    speed_modified: bool = False
    priority_inverted: bool = False
    terminated: bool = False
    last_cell: CellType = CellType.START

    @classmethod
    def spawn(cls, grid: MazeGrid) -> "Bender":
        return cls(position=grid.start_position())

    @property
    def priority(self) -> Tuple[Direction, ...]:
        return INVERTED_PRIORITY if self.priority_inverted else NORMAL_PRIORITY

    def is_passable(self, cell: CellType) -> bool:
        if cell == CellType.WALL:
            return False
        if cell == CellType.OBSTACLE:
            return self.speed_modified
        return True

    def resolve_turn(self, grid: MazeGrid) -> Direction:
        """Pick the facing direction for the next move.

        Keep going straight while possible. Once blocked, try each direction
        of the active priority sequence in order and take the first open one.
        """
        around = grid.neighbors(self.position)
        if self.is_passable(around[self.facing]):
            return self.facing

        for candidate in self.priority:
            if self.is_passable(around[candidate]):
                self.facing = candidate
                return candidate

        raise MazeInvariantError(f"Bender is boxed in at {tuple(self.position)}")

    def step(self, grid: MazeGrid) -> Direction:
        direction = self.resolve_turn(grid)
        target = self.position.moved(direction)
        if not grid.in_bounds(target):
            raise MazeInvariantError(f"Bender left the maze at {tuple(target)}")
        self.position = target
        self._apply_cell_effect(grid)
        return direction

    def _apply_cell_effect(self, grid: MazeGrid) -> None:
        cell = grid.cell(self.position)
        self.last_cell = cell
        if cell == CellType.SUICIDE:
            self.terminated = True
        elif cell.override is not None:
            self.facing = cell.override
        elif cell == CellType.BEER:
            self.speed_modified = not self.speed_modified
        elif cell == CellType.INVERTOR:
            self.priority_inverted = not self.priority_inverted
        elif cell == CellType.TELEPORTER:
            for pos in grid.find_all(CellType.TELEPORTER):
                if pos != self.position:
                    logger.debug("Teleporting from %s to %s", tuple(self.position), tuple(pos))
                    self.position = pos
                    break
        elif cell == CellType.OBSTACLE:
            logger.debug("Obstacle destroyed at %s", tuple(self.position))
            grid.set_cell(self.position, CellType.EMPTY)
