"""
FastAPI dependency injection providers.

Routes receive the database engine through Depends(get_db_engine) so tests can
swap in their own engine with app.dependency_overrides.
"""

from __future__ import annotations

from typing import Generator

from sqlalchemy.engine import Engine

from sync_ical.db.engine import engine


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> app.dependency_overrides[get_db_engine] = lambda: sqlite_engine
        >>> client = TestClient(app)
        >>> client.get("/calendar/tenant-a?token=...")
    """
    yield engine
