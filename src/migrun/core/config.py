"""Configuration management for migrun."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv


def _default_migrations_dir() -> Path:
    """Get default migrations directory (relative to the working directory)."""
    return Path.cwd() / "migrations"


@dataclass
class Config:
    """Main application configuration.

    Built once at startup and passed explicitly to the components that
    need it. Timestamps written by migrun are always UTC, independent of
    the process timezone.
    """

    db_url: str = "sqlite:///migrun.db"
    # Cache connection (e.g. Redis); carried for migrations, not used by the runner
    cache_url: Optional[str] = None
    migrations_dir: Path = field(default_factory=_default_migrations_dir)
    suffix: str = ".py"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Config":
        """Load configuration from environment variables.

        Variables from a ``.env`` file are loaded first without overriding
        anything already set in the process environment.

        Args:
            env_file: Explicit ``.env`` path. Defaults to the nearest ``.env``
                found from the working directory upwards.
        """
        dotenv_path = str(env_file) if env_file else find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path, override=False)

        config = cls()

        if url := os.environ.get("DB_URL"):
            config.db_url = url

        if url := os.environ.get("REDIS_URL"):
            config.cache_url = url

        if path := os.environ.get("MIGRATIONS_DIR"):
            config.migrations_dir = Path(path)

        if suffix := os.environ.get("MIGRATIONS_SUFFIX"):
            config.suffix = suffix

        if level := os.environ.get("MIGRUN_LOG_LEVEL"):
            config.log_level = level.upper()

        return config
