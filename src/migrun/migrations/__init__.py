"""Migration discovery, selection and execution for migrun.

Example:
    from migrun.migrations import MigrationRunner

    runner = MigrationRunner(connection, ledger, Path("migrations"))
    executed = runner.run(Direction.UP)
"""

from .executor import MigrationExecutor
from .loader import MigrationLoader
from .registry import Migration, MigrationHandler, MigrationRegistry
from .runner import MigrationRunner
from .selector import MigrationSelector

__all__ = [
    "Migration",
    "MigrationExecutor",
    "MigrationHandler",
    "MigrationLoader",
    "MigrationRegistry",
    "MigrationRunner",
    "MigrationSelector",
]
