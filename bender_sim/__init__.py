"""Deterministic maze-walking simulation for a single Bender agent."""

from .agents import INVERTED_PRIORITY, NORMAL_PRIORITY, Bender, MazeInvariantError
from .library import BenderGameLibrary, SimulationSummary, solve
from .parsing import parse_maze, read_maze
from .simulation import LOOP_SENTINEL, SimulationConfig, SimulationRuntime, StepEvent, format_directions
from .world import CellType, Direction, MazeFormatError, MazeGrid, Position

__all__ = [
    "BenderGameLibrary",
    "SimulationSummary",
    "solve",
    "parse_maze",
    "read_maze",
    "LOOP_SENTINEL",
    "SimulationConfig",
    "SimulationRuntime",
    "StepEvent",
    "format_directions",
    "CellType",
    "Direction",
    "MazeFormatError",
    "MazeGrid",
    "Position",
    "Bender",
    "MazeInvariantError",
    "NORMAL_PRIORITY",
    "INVERTED_PRIORITY",
]
