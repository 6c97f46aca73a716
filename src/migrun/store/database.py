"""Database connection manager for migrun."""

from pathlib import Path

from sqlalchemy import Connection, Engine, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import DatabaseError


class Database:
    """Owns the engine and the single connection shared by a run.

    Every query issued by the ledger and every migration operation goes
    through the same connection; there is no pooling or per-migration
    isolation.
    """

    def __init__(self, url: str):
        """Initialize database with a SQLAlchemy URL.

        Args:
            url: Database URL (e.g., "sqlite:///path/to/db.sqlite").
        """
        self.url = url
        self._engine: Engine | None = None
        self._connection: Connection | None = None

    @property
    def connection(self) -> Connection:
        """The shared connection.

        Raises:
            DatabaseError: If the database is not connected.
        """
        if self._connection is None:
            raise DatabaseError("Database not connected")
        return self._connection

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """Create the engine and open the shared connection."""
        if self._connection is not None:
            return

        try:
            url = make_url(self.url)
            if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

            self._engine = create_engine(url)
            self._connection = self._engine.connect()
            if self._engine.dialect.name == "sqlite":
                self._connection.execute(text("PRAGMA foreign_keys = ON"))
                self._connection.commit()
        except (SQLAlchemyError, OSError) as e:
            self._dispose()
            raise DatabaseError(f"Failed to connect to database: {e}") from e

    def close(self) -> None:
        """Close the connection and dispose of the engine."""
        try:
            if self._connection is not None:
                self._connection.close()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to close database: {e}") from e
        finally:
            self._dispose()

    def _dispose(self) -> None:
        self._connection = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
