"""Ordered registry of migration units.

A registry maps migration names to their up/down handler pair, keeping
the order in which migrations were registered. The loader fills one from
a directory; applications can also build one by hand from a compiled-in
table of handlers.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from ..core.exceptions import MigrationLoadError
from ..core.types import Direction

if TYPE_CHECKING:
    from sqlalchemy import Connection

# Handler type: receives the shared connection, raises on failure
MigrationHandler = Callable[["Connection | Any"], None]


@dataclass(frozen=True)
class Migration:
    """A named migration with forward and reverse operations."""

    name: str
    up: MigrationHandler
    down: MigrationHandler
    description: str = ""

    def handler(self, direction: Direction) -> MigrationHandler:
        """Return the operation for `direction`."""
        return self.up if direction is Direction.UP else self.down

    def __repr__(self) -> str:
        return f"Migration({self.name!r}, {self.description!r})"


class MigrationRegistry:
    """Ordered mapping from migration name to `Migration`.

    Example:
        registry = MigrationRegistry()
        registry.register(Migration("0001_init.py", up=create, down=drop))
        for migration in registry:
            ...
    """

    def __init__(self) -> None:
        self._migrations: dict[str, Migration] = {}

    def register(self, migration: Migration, *, override: bool = False) -> None:
        """Add a migration at the end of the registry.

        Args:
            migration: Migration to register.
            override: If True, replace an existing migration of the same name
                in place.

        Raises:
            MigrationLoadError: If the name is already registered and
                override=False.
        """
        if migration.name in self._migrations and not override:
            raise MigrationLoadError(migration.name, "a migration with this name is already registered")
        self._migrations[migration.name] = migration

    def get(self, name: str) -> Migration | None:
        return self._migrations.get(name)

    def names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._migrations)

    def __iter__(self) -> Iterator[Migration]:
        return iter(list(self._migrations.values()))

    def __len__(self) -> int:
        return len(self._migrations)

    def __contains__(self, name: object) -> bool:
        return name in self._migrations
