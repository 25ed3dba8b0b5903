"""Process-wide storage handle and session helpers."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache
import logging
import threading
from typing import Any

from sqlalchemy import Engine
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker

from devflow.core.config import get_settings
from devflow.core.config import redact_database_url

logger = logging.getLogger(__name__)


class Database:
    """Explicit storage connection handle shared for the process lifetime.

    The engine is created on the first ``connect()`` and reused afterwards;
    repeated calls are no-ops.
    """

    def __init__(self, url: str, **engine_options: Any) -> None:
        self.url = url
        self._engine_options = {"pool_pre_ping": True, **engine_options}
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        return self.connect()

    def connect(self) -> Engine:
        """Build the engine once and return it."""
        if self._engine is not None:
            return self._engine
        with self._lock:
            if self._engine is None:
                engine = create_engine(self.url, **self._engine_options)
                self._sessionmaker = sessionmaker(
                    bind=engine,
                    autoflush=False,
                    autocommit=False,
                    expire_on_commit=False,
                    class_=Session,
                )
                self._engine = engine
                logger.info("Storage engine created for %s", redact_database_url(self.url))
        return self._engine

    def session(self) -> Session:
        """Open a new ORM session, connecting first if needed."""
        self.connect()
        assert self._sessionmaker is not None
        return self._sessionmaker()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Provide a transactional session scope."""
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release pooled connections; the next ``connect()`` rebuilds the engine."""
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._sessionmaker = None


@lru_cache(maxsize=1)
def get_database() -> Database:
    """Return the process-wide database handle."""
    return Database(get_settings().database_url)


def violates(exc: IntegrityError, constraint: str, *, sqlite_message: str) -> bool:
    """Tell whether ``exc`` was raised by the named constraint.

    PostgreSQL drivers report the constraint name; SQLite does not, so its
    error text is matched against ``sqlite_message`` instead.
    """
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name is not None:
        return name == constraint
    message = str(exc.orig)
    return constraint in message or sqlite_message in message
