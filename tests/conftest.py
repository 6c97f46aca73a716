"""Pytest configuration and fixtures."""

from pathlib import Path
from textwrap import dedent
from typing import Callable

import pytest

from migrun.core.config import Config
from migrun.store.database import Database
from migrun.store.ledger import ExecutionLedger

ENV_VARS = ("DB_URL", "REDIS_URL", "MIGRATIONS_DIR", "MIGRATIONS_SUFFIX", "MIGRUN_LOG_LEVEL")

# Migration body that logs each call into an `applied` table
MIGRATION_TEMPLATE = dedent(
    '''\
    """{description}"""


    def _log(conn, action):
        conn.exec_driver_sql("CREATE TABLE IF NOT EXISTS applied (name TEXT, action TEXT)")
        conn.exec_driver_sql(
            "INSERT INTO applied (name, action) VALUES (?, ?)", ("{name}", action)
        )


    def up(conn):
        {up_body}


    def down(conn):
        {down_body}
    '''
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Isolate tests from the caller's environment and any .env upwards."""
    for name in ENV_VARS:
        # setenv first so teardown also removes values written by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def test_db_url(tmp_path: Path) -> str:
    """Provide a temporary SQLite database URL for tests."""
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db(test_db_url: str) -> Database:
    """Provide a connected database instance."""
    database = Database(test_db_url)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def ledger(db: Database) -> ExecutionLedger:
    """Provide an ExecutionLedger with its table created."""
    repo = ExecutionLedger(db.connection)
    repo.ensure_schema()
    return repo


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Provide an empty migrations directory."""
    path = tmp_path / "migrations"
    path.mkdir()
    return path


@pytest.fixture
def write_migration(migrations_dir: Path) -> Callable[..., Path]:
    """Write a migration file that records its calls in the `applied` table.

    Pass ``fail_up=True`` or ``fail_down=True`` to make that operation raise.
    """

    def _write(
        name: str,
        *,
        fail_up: bool = False,
        fail_down: bool = False,
        description: str = "Test migration",
    ) -> Path:
        up_body = "raise RuntimeError('up failed')" if fail_up else "_log(conn, 'up')"
        down_body = "raise RuntimeError('down failed')" if fail_down else "_log(conn, 'down')"
        path = migrations_dir / name
        path.write_text(
            MIGRATION_TEMPLATE.format(
                name=name,
                description=description,
                up_body=up_body,
                down_body=down_body,
            ),
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def config(test_db_url: str, migrations_dir: Path) -> Config:
    """Provide a Config pointing at the temporary database and directory."""
    return Config(db_url=test_db_url, migrations_dir=migrations_dir)


@pytest.fixture
def applied_rows(db: Database) -> Callable[[], list[tuple[str, str]]]:
    """Read the rows template migrations wrote, in insertion order."""

    def _rows() -> list[tuple[str, str]]:
        exists = db.connection.exec_driver_sql(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='applied'"
        ).fetchone()
        if exists is None:
            return []
        cursor = db.connection.exec_driver_sql("SELECT name, action FROM applied ORDER BY rowid")
        return [tuple(row) for row in cursor.fetchall()]

    return _rows
