"""Protocol definitions for injectable migrun dependencies.

Components depend on these interfaces rather than on the SQLAlchemy
implementations, so tests can substitute in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.types import Direction, ExecutionRecord


@runtime_checkable
class LedgerProtocol(Protocol):
    """Record store tracking which migrations ran in which direction."""

    def find_executed(self, names: Iterable[str], direction: Direction) -> set[str]:
        """Return the subset of names already executed for direction."""
        ...

    def record_execution(self, name: str, direction: Direction, executed_at: datetime) -> None:
        """Upsert the unique record for (name, direction)."""
        ...

    def list_records(self, direction: Direction | None = None) -> list[ExecutionRecord]:
        """List records, oldest first."""
        ...


@runtime_checkable
class ConnectionProtocol(Protocol):
    """The parts of the shared connection the executor relies on."""

    def commit(self) -> Any:
        ...

    def rollback(self) -> Any:
        ...
