"""Sequential execution of pending migrations."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import (
    ExecutionAbortedError,
    MigrationOperationError,
    MigrunError,
    StoreError,
)
from ..core.types import Direction
from .registry import Migration

if TYPE_CHECKING:
    from ..app.protocols import ConnectionProtocol, LedgerProtocol


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MigrationExecutor:
    """Runs migrations one at a time and records each in the ledger.

    For every migration the direction's handler is called with the shared
    connection, the ledger entry is written and the connection committed.
    The first failure rolls back the open transaction and aborts the run;
    migrations after it are not attempted and nothing is recorded for the
    failing one.

    Example:
        executor = MigrationExecutor(connection, ledger)
        names = executor.run(pending, Direction.UP)
    """

    def __init__(
        self,
        connection: ConnectionProtocol,
        ledger: LedgerProtocol,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize executor.

        Args:
            connection: Shared connection handed to every migration.
            ledger: Ledger receiving one record per completed migration.
            clock: Source of execution timestamps.
        """
        self.conn = connection
        self.ledger = ledger
        self.clock = clock

    def run(self, pending: Iterable[Migration], direction: Direction) -> list[str]:
        """Execute `pending` in order for `direction`.

        Args:
            pending: Migrations to execute, in order.
            direction: Direction to execute them in.

        Returns:
            Names of the executed migrations, in execution order.

        Raises:
            ExecutionAbortedError: On the first failing migration. The
                original MigrationOperationError or StoreError is chained
                as its cause.
        """
        executed: list[str] = []

        for migration in pending:
            logger.info(f"{direction.label} - {migration.name}: Running")

            try:
                self._execute(migration, direction)
            except MigrunError as e:
                logger.debug(f"Error on migration: {migration.name}")
                self._rollback(migration)
                raise ExecutionAbortedError(migration.name, direction, executed) from e

            executed.append(migration.name)
            logger.info(f"{direction.label} - {migration.name}: Done")

        return executed

    def _rollback(self, migration: Migration) -> None:
        try:
            self.conn.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback after {migration.name} failed: {e}")

    def _execute(self, migration: Migration, direction: Direction) -> None:
        handler = migration.handler(direction)
        try:
            handler(self.conn)
        except Exception as e:
            raise MigrationOperationError(migration.name, direction, str(e) or type(e).__name__) from e

        self.ledger.record_execution(migration.name, direction, self.clock())
        try:
            self.conn.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Cannot commit migration {migration.name}: {e}") from e
