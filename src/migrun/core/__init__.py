"""Core types, configuration and exceptions for migrun."""

from .config import Config
from .exceptions import (
    DatabaseError,
    ExecutionAbortedError,
    MigrationDirectoryError,
    MigrationLoadError,
    MigrationOperationError,
    MigrunError,
    StoreError,
)
from .types import Direction, ExecutionRecord, MigrationStatus

__all__ = [
    "Config",
    "DatabaseError",
    "Direction",
    "ExecutionAbortedError",
    "ExecutionRecord",
    "MigrationDirectoryError",
    "MigrationLoadError",
    "MigrationOperationError",
    "MigrationStatus",
    "MigrunError",
    "StoreError",
]
