import hashlib
import json
from typing import Any, Iterable

from .world import Direction, MazeGrid


def canonical_json(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def sha256_hex_from_obj(obj: Any) -> str:
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


def maze_fingerprint(grid: MazeGrid) -> str:
    return sha256_hex_from_obj({"height": grid.height, "width": grid.width, "rows": grid.render()})


def trace_fingerprint(directions: Iterable[Direction], looped: bool) -> str:
    return sha256_hex_from_obj({"looped": looped, "directions": [d.value for d in directions]})
