"""
Shared dependencies for FastAPI routes
"""
from typing import Generator
from sqlalchemy.orm import Session

from agency_crm.database.session import get_session


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped database session.

    Repository writes commit as they go; anything still pending when a
    handler fails is rolled back before the session goes back to the pool.
    """
    db = get_session()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
