"""Persistence layer for migrun.

This package provides:
- Database: engine and shared connection management
- ExecutionLedger: the ``migrations`` table recording executed migrations

Example:
    from migrun.store import Database, ExecutionLedger

    db = Database("sqlite:///app.db")
    db.connect()
    ledger = ExecutionLedger(db.connection)
    ledger.ensure_schema()
"""

from .database import Database
from .ledger import ExecutionLedger
from .models import Base, MigrationRecordModel

__all__ = [
    "Base",
    "Database",
    "ExecutionLedger",
    "MigrationRecordModel",
]
