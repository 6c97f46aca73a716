"""Process context: one database connection shared by every component."""

from __future__ import annotations

from loguru import logger

from ..core.config import Config
from ..migrations.runner import MigrationRunner
from ..store.database import Database
from ..store.ledger import ExecutionLedger


class MigrationContext:
    """Manages the shared connection and the components built on it.

    The connection is opened once and reused by the ledger and by every
    migration until the context is closed.

    Usage as context manager (recommended):

        with MigrationContext(config) as context:
            executed = context.runner.run(Direction.UP)

    Usage with manual lifecycle:

        context = MigrationContext(config)
        context.connect()
        try:
            # use context.runner
        finally:
            context.close()

    Attributes:
        config: Application configuration.
        db: Database instance (connected after connect() or __enter__).
    """

    def __init__(self, config: Config):
        """Initialize context with configuration.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.db = Database(config.db_url)
        self._ledger: ExecutionLedger | None = None
        self._runner: MigrationRunner | None = None

    def connect(self) -> None:
        """Open the shared connection and make sure the ledger table exists.

        Raises:
            DatabaseError: If the connection cannot be opened.
            StoreError: If the ledger table cannot be created.
        """
        if self.db.is_connected:
            return
        self.db.connect()
        try:
            self.ledger.ensure_schema()
        except Exception:
            self.close()
            raise
        logger.debug("MigrationContext connected to database")

    def close(self) -> None:
        """Close the shared connection."""
        self._ledger = None
        self._runner = None
        if self.db.is_connected:
            self.db.close()
            logger.debug("MigrationContext closed database connection")

    @property
    def connection(self):
        """The shared connection."""
        return self.db.connection

    @property
    def ledger(self) -> ExecutionLedger:
        """Execution ledger on the shared connection."""
        if self._ledger is None:
            self._ledger = ExecutionLedger(self.db.connection)
        return self._ledger

    @property
    def runner(self) -> MigrationRunner:
        """Runner for the configured migrations directory."""
        if self._runner is None:
            self._runner = MigrationRunner(
                self.db.connection,
                self.ledger,
                self.config.migrations_dir,
                self.config.suffix,
            )
        return self._runner

    def __enter__(self) -> "MigrationContext":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
