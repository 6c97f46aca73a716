"""Custom exceptions for migrun."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Direction


class MigrunError(Exception):
    """Base exception for all migrun errors."""

    pass


class MigrationDirectoryError(MigrunError):
    """Migration directory could not be read."""

    def __init__(self, directory: Path, reason: str):
        """Initialize exception with the offending directory.

        Args:
            directory: Directory that was being listed.
            reason: Underlying failure description.
        """
        self.directory = directory
        self.reason = reason
        super().__init__(f"Cannot read migrations directory {directory}: {reason}")


class MigrationLoadError(MigrunError):
    """Migration file is malformed or lacks its up/down operations."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot load migration {name}: {reason}")


class DatabaseError(MigrunError):
    """Database operation failed."""

    pass


class StoreError(DatabaseError):
    """Ledger query or write failed."""

    pass


class MigrationOperationError(MigrunError):
    """A migration's own up/down operation reported failure."""

    def __init__(self, name: str, direction: Direction, reason: str):
        self.name = name
        self.direction = direction
        self.reason = reason
        super().__init__(f"{direction.label} - {name} failed: {reason}")


class ExecutionAbortedError(MigrunError):
    """A run stopped at the first failing migration.

    The original failure is available as ``__cause__``.
    """

    def __init__(self, migration: str, direction: Direction, completed: list[str]):
        """Initialize exception with the progress made before the failure.

        Args:
            migration: Name of the migration that failed.
            direction: Direction of the run.
            completed: Names of migrations executed and recorded before the failure.
        """
        self.migration = migration
        self.direction = direction
        self.completed = list(completed)
        super().__init__(
            f"{direction.label} run aborted at {migration} "
            f"after {len(self.completed)} migration(s)"
        )
