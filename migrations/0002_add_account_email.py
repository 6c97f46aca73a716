"""Add an email column to accounts."""

DESCRIPTION = "Add accounts.email"


def _has_email(conn) -> bool:
    columns = conn.exec_driver_sql("PRAGMA table_info(accounts)").fetchall()
    return any(column[1] == "email" for column in columns)


def up(conn):
    """Add accounts.email.

    Safe to re-run: a crash after the ALTER but before the ledger write
    leaves the column in place, so check before adding it.
    """
    if _has_email(conn):
        return

    conn.exec_driver_sql("ALTER TABLE accounts ADD COLUMN email TEXT")
    conn.exec_driver_sql(
        "CREATE INDEX IF NOT EXISTS idx_accounts_email ON accounts(email)"
    )


def down(conn):
    """Remove accounts.email (requires SQLite 3.35+)."""
    conn.exec_driver_sql("DROP INDEX IF EXISTS idx_accounts_email")
    if _has_email(conn):
        conn.exec_driver_sql("ALTER TABLE accounts DROP COLUMN email")
