"""Run command for migrun CLI."""

from loguru import logger

from ...app import MigrationContext
from ...core.config import Config
from ...core.types import Direction


def handle_run(direction: Direction, config: Config) -> list[str]:
    """Execute pending migrations for a direction.

    Args:
        direction: Requested direction.
        config: Application configuration.

    Returns:
        Names of the executed migrations.
    """
    with MigrationContext(config) as context:
        executed = context.runner.run(direction)

    logger.info(f"Executed migrations: {len(executed)}")
    return executed
