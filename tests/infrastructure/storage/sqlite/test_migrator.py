"""Unit tests for database migrator."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

from freelance_invoicing.infrastructure.storage.sqlite.migrations.migrator import (
    MIGRATIONS_DIR,
    MigrationInfo,
    MigrationResult,
    create_backup,
    discover_migrations,
    get_applied_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)


class TestMigrationInfo:
    """Tests for MigrationInfo dataclass."""

    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("-- Test migration\nSELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert info.path == migration_file
        assert len(info.checksum) == 16  # First 16 chars of SHA-256

    def test_different_content_different_checksum(self, tmp_path: Path):
        file1 = tmp_path / "v001_a.sql"
        file1.write_text("SELECT 1;")
        file2 = tmp_path / "v002_b.sql"
        file2.write_text("SELECT 2;")

        assert MigrationInfo.from_file(file1).checksum != MigrationInfo.from_file(file2).checksum

    @pytest.mark.parametrize("name", ["invalid_migration.sql", "v_no_number.sql"])
    def test_invalid_filename_raises(self, tmp_path: Path, name: str):
        invalid_file = tmp_path / name
        invalid_file.write_text("SELECT 1;")

        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(invalid_file)


def test_failed_migration_result():
    result = MigrationResult(
        version="001",
        name="test",
        success=False,
        execution_time_ms=50,
        error="SQL syntax error",
    )

    assert result.success is False
    assert result.error == "SQL syntax error"


class TestVersionQueries:
    """Tests for get_applied_migrations() and get_current_version()."""

    async def test_empty_when_no_table(self, tmp_path: Path):
        async with aiosqlite.connect(tmp_path / "test.db") as conn:
            assert await get_applied_migrations(conn) == {}
            assert await get_current_version(conn) is None

    async def test_after_initialize(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)

        async with aiosqlite.connect(temp_db_path) as conn:
            applied = await get_applied_migrations(conn)
            current = await get_current_version(conn)

        assert "001" in applied
        assert current == max(applied)


class TestDiscoverMigrations:
    """Tests for discover_migrations()."""

    def test_ships_initial_schema(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert (MIGRATIONS_DIR / "v001_initial_schema.sql").exists()

    def test_sorted_and_skips_invalid(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "vbad.sql").write_text("SELECT 3;")

        assert [m.version for m in discover_migrations(tmp_path)] == ["001", "002"]


class TestBackup:
    """Tests for create_backup() and restore_backup()."""

    def test_backup_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "test.db"
        db_path.write_bytes(b"original")

        backup_path = create_backup(db_path)
        db_path.write_bytes(b"changed")
        restore_backup(db_path, backup_path)

        assert backup_path.exists()
        assert "backup_" in backup_path.name
        assert db_path.read_bytes() == b"original"


class TestInitializeDatabase:
    """Tests for initialize_database()."""

    async def test_creates_schema(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "test.db"

        results = await initialize_database(db_path, create_backup_before=False)

        assert results and all(r.success for r in results)
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert {"clients", "invoices", "reminders", "schema_migrations"} <= tables

    async def test_second_run_applies_nothing(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)

        assert await initialize_database(temp_db_path) == []
        assert not list(temp_db_path.parent.glob("*.backup_*"))

    async def test_failed_migration_stops(self, tmp_path: Path):
        migrations_dir = tmp_path / "migrations"
        migrations_dir.mkdir()
        (migrations_dir / "v001_ok.sql").write_text("CREATE TABLE t (id INTEGER);")
        (migrations_dir / "v002_broken.sql").write_text("CREATE TABLE oops (;")
        (migrations_dir / "v003_never.sql").write_text("CREATE TABLE never (id INTEGER);")

        results = await initialize_database(
            tmp_path / "test.db",
            create_backup_before=False,
            migrations_dir=migrations_dir,
        )

        assert [(r.version, r.success) for r in results] == [("001", True), ("002", False)]
        assert results[1].error


class TestGetMigrationStatus:
    """Tests for get_migration_status()."""

    async def test_returns_not_exists_when_no_database(self, tmp_path: Path):
        result = await get_migration_status(tmp_path / "nonexistent.db")

        assert result["exists"] is False
        assert result["current_version"] is None

    async def test_reports_pending(self, tmp_path: Path):
        db_path = tmp_path / "test.db"
        migrations_dir = tmp_path / "migrations"
        migrations_dir.mkdir()
        (migrations_dir / "v001_applied.sql").write_text("SELECT 1;")
        await initialize_database(db_path, create_backup_before=False, migrations_dir=migrations_dir)
        (migrations_dir / "v002_pending.sql").write_text("SELECT 2;")

        result = await get_migration_status(db_path, migrations_dir=migrations_dir)

        assert result["exists"] is True
        assert result["current_version"] == "001"
        assert result["applied_migrations"] == ["001"]
        assert result["pending_migrations"] == ["002"]

    async def test_defaults_to_settings_path(self, tmp_path: Path):
        mock_settings = MagicMock()
        mock_settings.storage.db_path = tmp_path / "from-settings.db"

        with patch(
            "freelance_invoicing.infrastructure.storage.sqlite.migrations.migrator.get_settings",
            return_value=mock_settings,
        ):
            result = await get_migration_status()

        assert result["exists"] is False


class TestVerifySchemaIntegrity:
    """Tests for verify_schema_integrity()."""

    async def test_migrated_database_passes(self, initialized_db: Path):
        checks = {c["check"]: c for c in await verify_schema_integrity(initialized_db)}

        assert checks["foreign_keys"]["status"] == "PASS"
        assert checks["integrity"]["result"] == "ok"
        assert checks["required_tables"]["missing"] == []

    async def test_reports_missing_tables(self, tmp_path: Path):
        db_path = tmp_path / "empty.db"
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("CREATE TABLE clients (client_id TEXT)")
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(db_path)}

        assert checks["required_tables"]["status"] == "FAIL"
        assert "reminders" in checks["required_tables"]["missing"]
