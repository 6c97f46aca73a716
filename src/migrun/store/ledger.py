"""Execution ledger backed by the ``migrations`` table.

The ledger answers "which of these migrations already ran in this
direction?" and records single executions. It works on the shared
connection and never commits migration work on its own, apart from
creating its table.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import Connection, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import StoreError
from ..core.types import Direction, ExecutionRecord
from .models import Base, MigrationRecordModel

migrations_table = MigrationRecordModel.__table__


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from backends without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ExecutionLedger:
    """SQLAlchemy implementation of the execution ledger.

    Records are keyed by (name, action): running a migration "down" never
    overwrites its "up" record.

    Example:
        ledger = ExecutionLedger(connection)
        ledger.ensure_schema()
        done = ledger.find_executed({"0001_init.py"}, Direction.UP)
    """

    def __init__(self, connection: Connection):
        """Initialize with the shared connection.

        Args:
            connection: Connection used for every ledger query.
        """
        self.conn = connection

    def ensure_schema(self) -> None:
        """Create the ledger table if it does not exist yet."""
        try:
            Base.metadata.create_all(self.conn)
            self.conn.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to create ledger table: {e}") from e

    def find_executed(self, names: Iterable[str], direction: Direction) -> set[str]:
        """Return the subset of `names` already executed for `direction`.

        Args:
            names: Migration names to check.
            direction: Direction to check against.

        Returns:
            Names that have a ledger record for the direction.

        Raises:
            StoreError: If the query fails.
        """
        wanted = sorted(set(names))
        if not wanted:
            return set()

        stmt = select(migrations_table.c.name).where(
            migrations_table.c.name.in_(wanted),
            migrations_table.c.action == direction.value,
        )
        try:
            rows = self.conn.execute(stmt).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to query executed migrations: {e}") from e

        executed = {row.name for row in rows}
        logger.debug(
            f"{len(executed)} of {len(wanted)} migration(s) already executed "
            f"for {direction.value}"
        )
        return executed

    def record_execution(self, name: str, direction: Direction, executed_at: datetime) -> None:
        """Insert or update the record for (name, direction).

        Args:
            name: Migration name.
            direction: Direction it was executed in.
            executed_at: Execution timestamp.

        Raises:
            StoreError: If the write fails or does not affect exactly one row.
        """
        key = (
            migrations_table.c.name == name,
            migrations_table.c.action == direction.value,
        )
        try:
            result = self.conn.execute(
                update(migrations_table).where(*key).values(executed_at=executed_at)
            )
            affected = result.rowcount
            if affected == 0:
                result = self.conn.execute(
                    insert(migrations_table).values(
                        name=name,
                        action=direction.value,
                        executed_at=executed_at,
                    )
                )
                affected = result.rowcount
        except SQLAlchemyError as e:
            raise StoreError(f"Cannot record migration {name}: {e}") from e

        if affected != 1:
            raise StoreError(
                f"Cannot record migration {name}: expected 1 affected row, got {affected}"
            )

    def list_records(self, direction: Direction | None = None) -> list[ExecutionRecord]:
        """List ledger records, oldest first.

        Args:
            direction: Only return records for this direction when given.

        Raises:
            StoreError: If the query fails.
        """
        stmt = select(migrations_table).order_by(
            migrations_table.c.executed_at, migrations_table.c.name
        )
        if direction is not None:
            stmt = stmt.where(migrations_table.c.action == direction.value)

        try:
            rows = self.conn.execute(stmt).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list ledger records: {e}") from e

        return [
            ExecutionRecord(
                name=row.name,
                action=Direction(row.action),
                executed_at=_as_utc(row.executed_at),
            )
            for row in rows
        ]
