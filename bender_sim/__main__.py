"""
Command-line interface for the Bender maze simulator.

Usage:
    python -m bender_sim < maze.txt              Print the directions taken (or LOOP)
    python -m bender_sim maze.json --json        Read a JSON maze document
    python -m bender_sim maze.txt --report       Print a JSON run report
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence, TextIO

from .agents import MazeInvariantError
from .ingest import build_run_report, maze_from_document, parse_document
from .library import BenderGameLibrary
from .parsing import parse_maze
from .simulation import SimulationConfig
from .world import MazeFormatError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_MAZE = 2
EXIT_INVARIANT = 3


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def read_text(stream: TextIO) -> str:
    try:
        return stream.read()
    except UnicodeDecodeError as e:
        raise MazeFormatError(f"Maze input is not valid UTF-8: {e}") from e
    finally:
        if stream is not sys.stdin:
            stream.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bender-sim",
        description="Run Bender through a maze and print the directions taken.",
    )
    parser.add_argument("maze", nargs="?", type=argparse.FileType("r", encoding="utf-8"), default=sys.stdin,
                        help="Maze file (default: stdin)")
    parser.add_argument("--json", action="store_true", help="Input is a JSON maze document")
    parser.add_argument("--report", action="store_true", help="Print a JSON run report")
    parser.add_argument("--max-steps", type=int, default=SimulationConfig.max_steps,
                        help="Steps before the run is reported as a LOOP (default: %(default)s)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Diagnostics written to stderr")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_steps < 1:
        parser.error("--max-steps must be positive")
    setup_logging(args.log_level)

    library = BenderGameLibrary()
    name = None
    try:
        text = read_text(args.maze)
        if args.json:
            document = parse_document(text)
            world = maze_from_document(document)
            name = document.get("name")
        else:
            world = parse_maze(text)
        config = SimulationConfig(max_steps=args.max_steps)
        runtime, summary = library.run_simulation(world, config=config)
    except MazeFormatError as e:
        logger.error(f"Malformed maze: {e}")
        return EXIT_BAD_MAZE
    except MazeInvariantError as e:
        logger.error(f"Maze invariant violated: {e}")
        return EXIT_INVARIANT

    if args.report:
        print(json.dumps(build_run_report(summary, name=name), indent=2))
    else:
        sys.stdout.write(runtime.output())
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
