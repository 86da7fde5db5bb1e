import json
from pathlib import Path
from typing import Callable, Optional, Type

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

SCHEMA_DIR = Path(__file__).parent / "schemas"
MAZE_SCHEMA_PATH = SCHEMA_DIR / "maze.schema.json"
RUN_REPORT_SCHEMA_PATH = SCHEMA_DIR / "run_report.schema.json"


def load_schema(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def validate_or_raise(
    payload: dict,
    schema: dict,
    error: Type[ValueError] = ValueError,
    describe: Optional[Callable[[ValidationError], str]] = None,
) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda e: tuple(str(p) for p in e.path))
    if not errors:
        return
    preview = []
    for err in errors[:10]:
        if describe is not None:
            preview.append(describe(err))
            continue
        field = "/".join(str(p) for p in err.path) or "<root>"
        preview.append(f"{field}: {err.message}")
    raise error("Schema validation failed: " + " | ".join(preview))
