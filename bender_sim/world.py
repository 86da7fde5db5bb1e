from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple


class MazeFormatError(ValueError):
    """Raised when a maze description cannot be turned into a valid grid."""


class Direction(Enum):
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @property
    def delta(self) -> Tuple[int, int]:
        return MOVE_VECTORS[self]

    def __str__(self) -> str:
        return self.value


# (row, col) offsets
MOVE_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


class CellType(Enum):
    INVALID = ""
    START = "@"
    WALL = "#"
    EMPTY = " "
    SUICIDE = "$"
    OBSTACLE = "X"
    SOUTH = "S"
    NORTH = "N"
    EAST = "E"
    WEST = "W"
    INVERTOR = "I"
    BEER = "B"
    TELEPORTER = "T"

    @property
    def override(self) -> Optional[Direction]:
        """Direction forced on the agent by a path modifier, if any."""
        return _OVERRIDES.get(self)

    @classmethod
    def from_char(cls, char: str) -> "CellType":
        if len(char) != 1:
            raise MazeFormatError(f"Expected a single character, got {char!r}")
        try:
            return cls(char)
        except ValueError:
            raise MazeFormatError(f"char {char!r} unsupported") from None


_OVERRIDES = {
    CellType.SOUTH: Direction.SOUTH,
    CellType.NORTH: Direction.NORTH,
    CellType.EAST: Direction.EAST,
    CellType.WEST: Direction.WEST,
}


class Position(NamedTuple):
    row: int
    col: int

    def moved(self, direction: Direction) -> "Position":
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


@dataclass
class MazeGrid:
    """Rectangular maze; only obstacle destruction mutates it during a run."""

    width: int
    height: int
    cells: List[List[CellType]]

    @staticmethod
    def from_rows(
        rows: Iterable[str], height: int | None = None, width: int | None = None
    ) -> "MazeGrid":
        lines = list(rows)
        if height is None:
            height = len(lines)
        if width is None:
            width = len(lines[0]) if lines else 0
        if height < 1 or width < 1:
            raise MazeFormatError("Maze must be at least 1x1.")
        if len(lines) != height:
            raise MazeFormatError(f"Row count mismatch: expected {height}, got {len(lines)}.")

        cells: List[List[CellType]] = []
        for y, line in enumerate(lines):
            if len(line) != width:
                raise MazeFormatError(
                    f"Column count mismatch on row {y}: expected {width}, got {len(line)}."
                )
            cells.append([CellType.from_char(c) for c in line])

        grid = MazeGrid(width=width, height=height, cells=cells)
        grid.validate()
        return grid

    def validate(self) -> None:
        starts = self.find_all(CellType.START)
        if len(starts) != 1:
            raise MazeFormatError(f"Maze must contain exactly one start cell, found {len(starts)}.")
        teleporters = self.find_all(CellType.TELEPORTER)
        if len(teleporters) not in (0, 2):
            raise MazeFormatError(f"Teleporters must come in a single pair, found {len(teleporters)}.")

    def copy(self) -> "MazeGrid":
        return MazeGrid(width=self.width, height=self.height, cells=[list(r) for r in self.cells])

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.height and 0 <= pos.col < self.width

    def cell(self, pos: Position) -> CellType:
        if not self.in_bounds(pos):
            return CellType.INVALID
        return self.cells[pos.row][pos.col]

    def set_cell(self, pos: Position, cell: CellType) -> None:
        if not self.in_bounds(pos):
            raise IndexError(f"Position out of bounds: {pos}")
        self.cells[pos.row][pos.col] = cell

    def neighbors(self, pos: Position) -> Dict[Direction, CellType]:
        return {direction: self.cell(pos.moved(direction)) for direction in Direction}

    def find_all(self, kind: CellType) -> List[Position]:
        return [
            Position(y, x)
            for y, row in enumerate(self.cells)
            for x, cell in enumerate(row)
            if cell == kind
        ]

    def start_position(self) -> Position:
        starts = self.find_all(CellType.START)
        if len(starts) != 1:
            raise MazeFormatError(f"Maze must contain exactly one start cell, found {len(starts)}.")
        return starts[0]

    def render(self) -> List[str]:
        return ["".join(cell.value or "?" for cell in row) for row in self.cells]
