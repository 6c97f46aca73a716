"""Pending-migration selection."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import Direction
from .registry import Migration

if TYPE_CHECKING:
    from ..app.protocols import LedgerProtocol


class MigrationSelector:
    """Computes which migrations still have to run for a direction.

    The pending set is the discovered migrations minus those the ledger
    already holds for the direction, in discovery order. Selection never
    writes to the ledger.
    """

    def __init__(self, ledger: LedgerProtocol):
        self.ledger = ledger

    def select(self, migrations: Iterable[Migration], direction: Direction) -> list[Migration]:
        """Return the migrations not yet executed for `direction`.

        Args:
            migrations: All discovered migrations, in execution order.
            direction: Requested direction.

        Returns:
            Pending migrations, in the order given.

        Raises:
            StoreError: If the ledger query fails.
        """
        candidates = list(migrations)
        executed = self.ledger.find_executed({m.name for m in candidates}, direction)
        pending = [m for m in candidates if m.name not in executed]

        logger.debug(
            f"{len(pending)} pending migration(s) for {direction.value} "
            f"({len(executed)} already executed)"
        )
        return pending
