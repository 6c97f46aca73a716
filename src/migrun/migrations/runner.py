"""Migration runner for migrun.

Ties discovery, selection and execution together over one connection
and one ledger. Migrations are applied in filename order and each
(name, direction) pair runs at most once.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable

from loguru import logger

from ..core.types import Direction, MigrationStatus
from .executor import MigrationExecutor, utc_now
from .loader import MigrationLoader
from .registry import Migration, MigrationRegistry
from .selector import MigrationSelector

if TYPE_CHECKING:
    from datetime import datetime

    from ..app.protocols import ConnectionProtocol, LedgerProtocol


class MigrationRunner:
    """Applies pending migrations from a directory in one direction.

    Example:
        runner = MigrationRunner(connection, ledger, Path("migrations"))
        executed = runner.run(Direction.UP)
        print(f"Executed {len(executed)} migrations")
    """

    def __init__(
        self,
        connection: ConnectionProtocol,
        ledger: LedgerProtocol,
        directory: Path,
        suffix: str = ".py",
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize runner.

        Args:
            connection: Shared connection handed to every migration.
            ledger: Execution ledger.
            directory: Directory holding migration files.
            suffix: Filename suffix identifying migration files.
            clock: Source of execution timestamps.
        """
        self.conn = connection
        self.ledger = ledger
        self.loader = MigrationLoader(directory, suffix)
        self.selector = MigrationSelector(ledger)
        self.executor = MigrationExecutor(connection, ledger, clock)
        self._registry: MigrationRegistry | None = None

    def get_migrations(self) -> MigrationRegistry:
        """Get all discovered migrations, in filename order.

        The directory is read once; later calls reuse the registry.

        Raises:
            MigrationDirectoryError: If the directory cannot be read.
            MigrationLoadError: If a migration file is malformed.
        """
        if self._registry is None:
            self._registry = self.loader.load()
        return self._registry

    def get_pending_migrations(self, direction: Direction) -> list[Migration]:
        """Get migrations that haven't been executed for `direction` yet."""
        return self.selector.select(self.get_migrations(), direction)

    def run(self, direction: Direction) -> list[str]:
        """Execute all pending migrations for `direction`.

        Returns:
            Names of the executed migrations, in order.

        Raises:
            MigrationDirectoryError: If the directory cannot be read.
            MigrationLoadError: If a migration file is malformed.
            StoreError: If the ledger cannot be queried.
            ExecutionAbortedError: If a migration fails; carries the names
                completed before it.
        """
        pending = self.get_pending_migrations(direction)

        if not pending:
            logger.debug(f"No pending migrations for {direction.value}")
            return []

        executed = self.executor.run(pending, direction)
        logger.info(f"Executed {len(executed)} migration(s) {direction.value}")
        return executed

    def status(self, direction: Direction) -> list[MigrationStatus]:
        """Report every discovered migration with its execution time for `direction`.

        Pending migrations have ``executed_at`` set to None.
        """
        executed_at = {r.name: r.executed_at for r in self.ledger.list_records(direction)}
        return [
            MigrationStatus(
                name=migration.name,
                direction=direction,
                executed_at=executed_at.get(migration.name),
            )
            for migration in self.get_migrations()
        ]
