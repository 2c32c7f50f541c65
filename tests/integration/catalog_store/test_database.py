"""Integration tests for the Catalog Store database."""

import tempfile
from datetime import time
from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from courseportal.catalog_store import CatalogStore, seed_demo_courses
from courseportal.catalog_store.database import Database


@pytest.fixture
def temp_db_path() -> str:
    """Create a temporary database path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = f.name
    yield path
    # Cleanup
    Path(path).unlink(missing_ok=True)
    Path(f"{path}-wal").unlink(missing_ok=True)
    Path(f"{path}-shm").unlink(missing_ok=True)


@pytest.mark.integration
class TestDatabaseSetup:
    """Tests for database setup."""

    def test_creates_tables_and_indexes(self, temp_db_path: str) -> None:
        db = Database(temp_db_path)
        db.create_schema()

        inspector = inspect(db.engine)
        assert set(inspector.get_table_names()) >= {"courses", "enrollments"}
        index_names = {ix["name"] for ix in inspector.get_indexes("enrollments")}
        assert "uq_enrollments_active_course_user" in index_names
        db.close()

    def test_wal_mode_enabled(self, temp_db_path: str) -> None:
        db = Database(temp_db_path)
        db.create_schema()

        assert db.journal_mode() == "wal"
        db.close()

    def test_busy_timeout_applied(self, temp_db_path: str) -> None:
        db = Database(temp_db_path, busy_timeout=2.5)

        with db.engine.connect() as conn:
            assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 2500
        db.close()

    def test_foreign_keys_enforced(self, temp_db_path: str) -> None:
        db = Database(temp_db_path)

        with db.engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        db.close()

    def test_memory_database_shares_one_connection(self) -> None:
        db = Database(":memory:")
        db.create_schema()

        assert db.in_memory
        assert db.journal_mode() == "memory"
        # A second session sees the schema created through the first connection
        session = db.get_session()
        try:
            assert session.execute(text("SELECT count(*) FROM courses")).scalar_one() == 0
        finally:
            session.close()
        db.close()

    def test_close_then_reuse_reconnects(self, temp_db_path: str) -> None:
        db = Database(temp_db_path)
        db.create_schema()
        db.close()

        assert db.journal_mode() == "wal"
        db.close()

    def test_creates_parent_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "portal.db"
            db = Database(str(path))
            db.create_schema()

            assert path.exists()
            db.close()


@pytest.mark.integration
class TestPersistence:
    """Data survives reopening the store."""

    def test_reopen_keeps_courses_and_enrollments(self, temp_db_path: str) -> None:
        store = CatalogStore(temp_db_path)
        seed_demo_courses(store)
        store.create_enrollment(1, "ana")
        store.close()

        reopened = CatalogStore(temp_db_path)
        assert seed_demo_courses(reopened) is False
        course = reopened.get_course(1, with_enrollments=True)
        assert course.start_time == time(8, 0)
        assert course.available_slots == 29
        reopened.close()
