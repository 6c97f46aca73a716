"""Tests for MigrationLoader."""

from pathlib import Path

import pytest

from migrun.core.exceptions import MigrationDirectoryError, MigrationLoadError
from migrun.migrations.loader import MigrationLoader


class TestListFiles:
    """Tests for list_files()."""

    def test_sorts_lexically(self, migrations_dir: Path, write_migration):
        """Files come back in filename order regardless of creation order."""
        for name in ("0003_c.py", "0001_a.py", "0002_b.py"):
            write_migration(name)

        files = MigrationLoader(migrations_dir).list_files()

        assert [f.name for f in files] == ["0001_a.py", "0002_b.py", "0003_c.py"]

    def test_filters_by_suffix(self, migrations_dir: Path, write_migration):
        write_migration("0001_a.py")
        (migrations_dir / "README.md").write_text("notes", encoding="utf-8")
        (migrations_dir / "0002_b.sql").write_text("SELECT 1;", encoding="utf-8")

        files = MigrationLoader(migrations_dir).list_files()

        assert [f.name for f in files] == ["0001_a.py"]

    def test_skips_private_files_and_directories(self, migrations_dir: Path, write_migration):
        write_migration("0001_a.py")
        (migrations_dir / "__init__.py").write_text("", encoding="utf-8")
        (migrations_dir / "_helpers.py").write_text("", encoding="utf-8")
        (migrations_dir / "nested.py").mkdir()

        files = MigrationLoader(migrations_dir).list_files()

        assert [f.name for f in files] == ["0001_a.py"]

    def test_missing_directory_raises(self, tmp_path: Path):
        loader = MigrationLoader(tmp_path / "does-not-exist")

        with pytest.raises(MigrationDirectoryError, match="does-not-exist"):
            loader.list_files()


class TestLoad:
    """Tests for load()."""

    def test_binds_name_to_filename(self, migrations_dir: Path, write_migration):
        write_migration("0001_create_users.py")
        write_migration("0002_add_email.py")

        registry = MigrationLoader(migrations_dir).load()

        assert registry.names() == ["0001_create_users.py", "0002_add_email.py"]
        migration = registry.get("0001_create_users.py")
        assert callable(migration.up)
        assert callable(migration.down)

    def test_empty_directory(self, migrations_dir: Path):
        assert len(MigrationLoader(migrations_dir).load()) == 0

    def test_description_from_attribute(self, migrations_dir: Path):
        (migrations_dir / "0001_a.py").write_text(
            'DESCRIPTION = "Create users"\n\ndef up(conn):\n    pass\n\ndef down(conn):\n    pass\n',
            encoding="utf-8",
        )

        migration = MigrationLoader(migrations_dir).load().get("0001_a.py")

        assert migration.description == "Create users"

    def test_description_from_docstring(self, migrations_dir: Path, write_migration):
        write_migration("0001_a.py", description="Add index on email")

        migration = MigrationLoader(migrations_dir).load().get("0001_a.py")

        assert migration.description == "Add index on email"

    def test_custom_suffix(self, migrations_dir: Path):
        body = "def up(conn):\n    pass\n\ndef down(conn):\n    pass\n"
        (migrations_dir / "0001_a.migration").write_text(body, encoding="utf-8")
        (migrations_dir / "0002_b.py").write_text(body, encoding="utf-8")

        registry = MigrationLoader(migrations_dir, suffix=".migration").load()

        assert registry.names() == ["0001_a.migration"]

    def test_missing_down_raises_load_error(self, migrations_dir: Path):
        (migrations_dir / "0001_a.py").write_text("def up(conn):\n    pass\n", encoding="utf-8")

        with pytest.raises(MigrationLoadError, match="missing callable 'down'") as exc_info:
            MigrationLoader(migrations_dir).load()
        assert exc_info.value.name == "0001_a.py"

    def test_non_callable_up_raises_load_error(self, migrations_dir: Path):
        (migrations_dir / "0001_a.py").write_text(
            "up = 'nope'\n\ndef down(conn):\n    pass\n", encoding="utf-8"
        )

        with pytest.raises(MigrationLoadError, match="missing callable 'up'"):
            MigrationLoader(migrations_dir).load()

    def test_import_error_raises_load_error(self, migrations_dir: Path):
        (migrations_dir / "0001_a.py").write_text("def up(conn)\n", encoding="utf-8")

        with pytest.raises(MigrationLoadError, match="SyntaxError"):
            MigrationLoader(migrations_dir).load()

    def test_malformed_file_fails_before_anything_is_returned(
        self, migrations_dir: Path, write_migration
    ):
        """One bad file fails the whole load."""
        write_migration("0001_a.py")
        (migrations_dir / "0002_b.py").write_text("raise ImportError('boom')\n", encoding="utf-8")

        with pytest.raises(MigrationLoadError, match="0002_b.py"):
            MigrationLoader(migrations_dir).load()
