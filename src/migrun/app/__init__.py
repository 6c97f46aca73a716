"""Application wiring for migrun."""

from .context import MigrationContext
from .protocols import ConnectionProtocol, LedgerProtocol

__all__ = [
    "ConnectionProtocol",
    "LedgerProtocol",
    "MigrationContext",
]
