"""Shared pytest fixtures for DevFlow test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from devflow.db.base import Database  # noqa: E402
from devflow.db.base import get_database  # noqa: E402
from devflow.db.models import Base  # noqa: E402


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Provide an isolated in-memory database with the full schema."""
    database = Database(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(database.engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(database.engine)
    yield database
    database.dispose()


@pytest.fixture
def client(database: Database) -> Generator[TestClient, None, None]:
    """Provide an API test client bound to the test database."""
    from devflow.main import app

    app.dependency_overrides[get_database] = lambda: database
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
