"""SQLite engine and sessions for the Catalog Store."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from courseportal.catalog_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY_PATH = ":memory:"

# Seconds a writer waits for the SQLite write lock before giving up
BUSY_TIMEOUT_SECONDS = 5


class Database:
    """One SQLite database holding the catalog schema.

    File databases run in WAL mode so catalog reads don't block the
    enrollment writer, and wait up to ``busy_timeout`` seconds for the
    write lock. An in-memory database lives on a single shared connection,
    since every new connection would otherwise see an empty database.
    Foreign keys are enforced on every connection.
    """

    def __init__(self, db_path: str = "courseportal.db", busy_timeout: float = BUSY_TIMEOUT_SECONDS) -> None:
        self.db_path = db_path
        self.busy_timeout = busy_timeout
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def in_memory(self) -> bool:
        return self.db_path == MEMORY_PATH

    @property
    def url(self) -> str:
        return f"sqlite:///{self.db_path}"

    def _engine_options(self) -> dict[str, Any]:
        if self.in_memory:
            return {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        return {"connect_args": {"timeout": self.busy_timeout}}

    def _on_connect(self, dbapi_connection: Any, _connection_record: object) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
            if not self.in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute(f"PRAGMA busy_timeout={int(self.busy_timeout * 1000)}")
        finally:
            cursor.close()

    @property
    def engine(self) -> Engine:
        """The engine, created on first use."""
        if self._engine is None:
            if not self.in_memory:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(self.url, echo=False, **self._engine_options())
            event.listen(engine, "connect", self._on_connect)
            self._engine = engine
        return self._engine

    def create_schema(self) -> None:
        """Create the catalog tables and indexes that are missing."""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Open a session. Committed objects stay readable after it closes."""
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._sessions()

    def journal_mode(self) -> str:
        """The journal mode SQLite reports for this database."""
        with self.engine.connect() as conn:
            return str(conn.execute(text("PRAGMA journal_mode")).scalar())

    def close(self) -> None:
        """Dispose of the engine. The next use reconnects."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sessions = None
