"""Test fakes for testing without a real database.

Example:
    from tests.fakes import InMemoryLedger, RecordingConnection

    executor = MigrationExecutor(RecordingConnection(), InMemoryLedger())
"""

from .ledger import InMemoryLedger, RecordingConnection

__all__ = [
    "InMemoryLedger",
    "RecordingConnection",
]
