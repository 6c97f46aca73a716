"""Discover migration files in a directory.

Each migration file is a Python module that must define:
    up(connection): applies the migration
    down(connection): reverts the migration

and may define:
    DESCRIPTION: str - Human-readable description

Example migration (0002_add_feature.py):
    DESCRIPTION = "Add feature table"

    def up(conn):
        conn.exec_driver_sql("CREATE TABLE feature (id INTEGER PRIMARY KEY)")

    def down(conn):
        conn.exec_driver_sql("DROP TABLE feature")
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import re
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from ..core.exceptions import MigrationDirectoryError, MigrationLoadError
from .registry import Migration, MigrationRegistry

if TYPE_CHECKING:
    from types import ModuleType

_MODULE_NAMESPACE = "migrun_migrations"


class MigrationLoader:
    """Builds a `MigrationRegistry` from the files in a directory.

    Files are ordered lexically by filename, so prefix them with a
    sortable version (``0001_``, ``0002_``, ...). Names starting with an
    underscore are ignored.

    Example:
        registry = MigrationLoader(Path("migrations")).load()
        print(registry.names())
    """

    def __init__(self, directory: Path, suffix: str = ".py"):
        """Initialize loader.

        Args:
            directory: Directory holding migration files.
            suffix: Filename suffix identifying migration files.
        """
        self.directory = Path(directory)
        self.suffix = suffix

    def list_files(self) -> list[Path]:
        """List candidate migration files, sorted by filename.

        Raises:
            MigrationDirectoryError: If the directory cannot be read.
        """
        try:
            entries = list(self.directory.iterdir())
        except OSError as e:
            raise MigrationDirectoryError(self.directory, e.strerror or str(e)) from e

        files = [
            entry
            for entry in entries
            if entry.name.endswith(self.suffix)
            and not entry.name.startswith("_")
            and entry.is_file()
        ]
        return sorted(files, key=lambda p: p.name)

    def load(self) -> MigrationRegistry:
        """Import every migration file and register it under its filename.

        Returns:
            Registry of migrations in filename order.

        Raises:
            MigrationDirectoryError: If the directory cannot be read.
            MigrationLoadError: If a file cannot be imported or lacks up/down.
        """
        registry = MigrationRegistry()
        for path in self.list_files():
            registry.register(self.load_file(path))

        logger.debug(f"Discovered {len(registry)} migration(s) in {self.directory}")
        return registry

    def load_file(self, path: Path) -> Migration:
        """Import a single migration file.

        Args:
            path: Migration file to import.

        Raises:
            MigrationLoadError: If the file cannot be imported or lacks up/down.
        """
        name = path.name
        module = self._import(path)

        for operation in ("up", "down"):
            if not callable(getattr(module, operation, None)):
                raise MigrationLoadError(name, f"missing callable '{operation}'")

        return Migration(
            name=name,
            up=module.up,
            down=module.down,
            description=_describe(module, name),
        )

    def _import(self, path: Path) -> ModuleType:
        stem = re.sub(r"\W", "_", path.name[: -len(self.suffix)] if self.suffix else path.stem)
        fullname = f"{_MODULE_NAMESPACE}.{stem}"
        loader = importlib.machinery.SourceFileLoader(fullname, str(path))
        spec = importlib.util.spec_from_file_location(fullname, path, loader=loader)
        if spec is None or spec.loader is None:
            raise MigrationLoadError(path.name, "not an importable Python file")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise MigrationLoadError(path.name, f"{type(e).__name__}: {e}") from e
        return module


def _describe(module: ModuleType, fallback: str) -> str:
    """DESCRIPTION attribute, else first docstring line, else `fallback`."""
    description = getattr(module, "DESCRIPTION", None)
    if isinstance(description, str) and description.strip():
        return description.strip()
    if module.__doc__ and module.__doc__.strip():
        return module.__doc__.strip().splitlines()[0]
    return fallback
