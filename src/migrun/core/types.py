"""Type definitions for migrun."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Direction(Enum):
    """Direction a migration is executed in."""

    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Direction":
        """Resolve a command argument to a direction.

        Only the exact values "up" and "down" are accepted; anything else
        (including None) resolves to UP.
        """
        if value in ("up", "down"):
            return cls(value)
        return cls.UP

    @property
    def label(self) -> str:
        """Upper-case label used in log lines."""
        return self.value.upper()


@dataclass(frozen=True)
class ExecutionRecord:
    """A ledger entry: migration `name` was executed for `action`."""

    name: str
    action: Direction
    executed_at: datetime


@dataclass
class MigrationStatus:
    """State of one discovered migration for a direction."""

    name: str
    direction: Direction
    executed_at: Optional[datetime] = None

    @property
    def pending(self) -> bool:
        return self.executed_at is None
