"""Initial application schema.

Creates:
- accounts: registered accounts
- sessions: login sessions per account
"""

DESCRIPTION = "Initial schema with accounts and sessions"


def up(conn):
    """Create the accounts and sessions tables."""
    conn.exec_driver_sql(
        """
        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            created_at TEXT NOT NULL
        )
        """
    )
    conn.exec_driver_sql(
        """
        CREATE TABLE IF NOT EXISTS sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            account_id INTEGER NOT NULL REFERENCES accounts(id),
            token TEXT NOT NULL UNIQUE,
            expires_at TEXT NOT NULL
        )
        """
    )
    conn.exec_driver_sql(
        "CREATE INDEX IF NOT EXISTS idx_sessions_account ON sessions(account_id)"
    )


def down(conn):
    """Drop the tables created by up()."""
    conn.exec_driver_sql("DROP INDEX IF EXISTS idx_sessions_account")
    conn.exec_driver_sql("DROP TABLE IF EXISTS sessions")
    conn.exec_driver_sql("DROP TABLE IF EXISTS accounts")
