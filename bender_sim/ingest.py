from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema.exceptions import ValidationError

from .hashing import sha256_hex_from_obj
from .library import SimulationSummary
from .validate import MAZE_SCHEMA_PATH, RUN_REPORT_SCHEMA_PATH, load_schema, validate_or_raise
from .world import CellType, MazeFormatError, MazeGrid

REPORT_SCHEMA_VERSION = "bender.run.v1"


def describe_maze_error(err: ValidationError) -> str:
    path = list(err.absolute_path)
    if len(path) == 2 and path[0] == "rows" and err.validator == "pattern" and isinstance(err.instance, str):
        known = {cell.value for cell in CellType}
        bad = sorted({c for c in err.instance if c not in known})
        if bad:
            return f"row {path[1]}: unsupported characters {''.join(bad)!r}"
        return f"row {path[1]}: row is empty"
    field = "/".join(str(p) for p in path) or "<root>"
    return f"{field}: {err.message}"


def maze_from_document(document: dict[str, Any]) -> MazeGrid:
    validate_or_raise(
        document, load_schema(MAZE_SCHEMA_PATH), error=MazeFormatError, describe=describe_maze_error
    )
    return MazeGrid.from_rows(document["rows"], height=document["height"], width=document["width"])


def load_maze_json(path: Path) -> MazeGrid:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MazeFormatError(f"Maze document is not valid UTF-8: {e}") from e
    return load_maze_text(text)


def parse_document(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MazeFormatError(f"Maze document is not valid JSON: {e}") from e


def load_maze_text(text: str) -> MazeGrid:
    return maze_from_document(parse_document(text))


def build_run_report(summary: SimulationSummary, *, name: str | None = None) -> dict[str, Any]:
    report: dict[str, Any] = {
        "schemaVersion": REPORT_SCHEMA_VERSION,
        "mazeHash": summary.maze_hash,
        "outcome": "loop" if summary.looped else "terminated",
        "steps": summary.steps_executed,
        "directions": [] if summary.looped else [d.value for d in summary.directions],
        "obstaclesDestroyed": summary.obstacles_destroyed,
        "teleports": summary.teleports,
    }
    if name is not None:
        report["name"] = name

    report["canonicalHash"] = sha256_hex_from_obj(report)
    validate_or_raise(report, load_schema(RUN_REPORT_SCHEMA_PATH))
    return report
