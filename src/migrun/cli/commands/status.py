"""Status and dry-run commands for migrun CLI."""

from loguru import logger

from ...app import MigrationContext
from ...core.config import Config
from ...core.types import Direction


def handle_status(direction: Direction, config: Config) -> None:
    """Log every discovered migration with its state for a direction.

    Args:
        direction: Direction to report on.
        config: Application configuration.
    """
    with MigrationContext(config) as context:
        statuses = context.runner.status(direction)

    if not statuses:
        logger.info(f"No migrations found in {config.migrations_dir}")
        return

    for status in statuses:
        if status.pending:
            logger.info(f"{direction.label} - {status.name}: pending")
        else:
            logger.info(f"{direction.label} - {status.name}: executed {status.executed_at.isoformat()}")

    pending = sum(1 for s in statuses if s.pending)
    logger.info(f"{pending} of {len(statuses)} migration(s) pending for {direction.value}")


def handle_pending(direction: Direction, config: Config) -> list[str]:
    """Log the migrations a run would execute, without executing them.

    Args:
        direction: Requested direction.
        config: Application configuration.

    Returns:
        Names of the pending migrations.
    """
    with MigrationContext(config) as context:
        names = [m.name for m in context.runner.get_pending_migrations(direction)]

    for name in names:
        logger.info(f"{direction.label} - {name}: pending")
    logger.info(f"Pending migrations: {len(names)}")
    return names
