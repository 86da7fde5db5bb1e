"""Reader for the plain-text maze format.

The first line holds the maze height and width separated by whitespace,
followed by exactly ``height`` rows of ``width`` characters each.
"""

from __future__ import annotations

from typing import Iterable, List, TextIO, Tuple

from .world import MazeFormatError, MazeGrid


def parse_header(line: str) -> Tuple[int, int]:
    parts = line.split()
    if len(parts) != 2:
        raise MazeFormatError(f"Header must be 'HEIGHT WIDTH', got {line.strip()!r}")
    try:
        height, width = int(parts[0]), int(parts[1])
    except ValueError:
        raise MazeFormatError(f"Header must hold two integers, got {line.strip()!r}") from None
    return height, width


def parse_maze(source: str | Iterable[str]) -> MazeGrid:
    lines: List[str] = source.splitlines() if isinstance(source, str) else list(source)
    if not lines:
        raise MazeFormatError("Empty maze input.")

    height, width = parse_header(lines[0])
    rows = [line.rstrip("\r\n") for line in lines[1 : height + 1]]
    if len(rows) < height:
        raise MazeFormatError(f"Expected {height} rows, got {len(rows)}.")
    return MazeGrid.from_rows(rows, height=height, width=width)


def read_maze(stream: TextIO) -> MazeGrid:
    return parse_maze(stream.readlines())
