"""CLI entry point for migrun."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from loguru import logger

from .. import __version__
from ..core.config import Config
from ..core.exceptions import ExecutionAbortedError, MigrunError
from ..core.types import Direction
from . import commands

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss!UTC} | {level: <8} | {message}"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="migrun",
        description="Run pending database migrations in one direction",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")

    # Free-form so that unknown values fall back to "up" instead of erroring
    parser.add_argument(
        "direction",
        nargs="?",
        default=None,
        help="Direction to run: up or down (default: up)",
    )
    parser.add_argument(
        "-d",
        "--migrations-dir",
        type=Path,
        default=None,
        help="Directory holding migration files (default: $MIGRATIONS_DIR or ./migrations)",
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Database URL (default: $DB_URL)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file to load before reading the environment",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="List pending migrations without executing them",
    )
    mode.add_argument(
        "--status",
        action="store_true",
        help="Show every migration and whether it ran in the direction",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def configure_logging(level: str) -> None:
    """Route loguru output to stderr at `level`.

    Raises:
        ValueError: If `level` is not a known loguru level. The existing
            sinks are left in place in that case.
    """
    logger.level(level)
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)


def resolve_direction(value: Optional[str]) -> Direction:
    """Resolve the direction argument, warning when an unknown value falls back to up."""
    direction = Direction.parse(value)
    if value is not None and value != direction.value:
        logger.warning(f"Unknown direction {value!r}, defaulting to {direction.value}")
    return direction


def load_config(args: argparse.Namespace) -> Config:
    """Build configuration from the environment and command-line overrides."""
    config = Config.from_env(args.env_file)

    if args.db_url:
        config.db_url = args.db_url
    if args.migrations_dir:
        config.migrations_dir = args.migrations_dir
    if args.verbose:
        config.log_level = "DEBUG"

    return config


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        configure_logging(config.log_level)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    direction = resolve_direction(args.direction)

    try:
        if args.status:
            commands.handle_status(direction, config)
        elif args.dry_run:
            commands.handle_pending(direction, config)
        else:
            commands.handle_run(direction, config)

        sys.exit(0)
    except ExecutionAbortedError as e:
        logger.info(f"Executed migrations: {len(e.completed)}")
        logger.error(f"{e}: {e.__cause__}")
        sys.exit(1)
    except MigrunError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
