"""Dependency wiring for routes."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from devflow.db.base import Database
from devflow.db.base import get_database


def get_db_session(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """Yield a session from the shared database handle."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()
