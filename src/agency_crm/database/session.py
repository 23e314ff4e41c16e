"""
Database session management
"""
from sqlalchemy.orm import sessionmaker, Session
from typing import Optional

from agency_crm.database.connection import DatabasePool
from agency_crm.database.models import Base


# Bound to the pool's current engine; rebuilt when the pool is reopened
SessionLocal: Optional[sessionmaker] = None


def init_session_factory() -> sessionmaker:
    """
    Bind the session factory to the pool's engine.
    Initializes the pool if needed. Returns the factory.
    """
    global SessionLocal
    engine = DatabasePool.get_engine()
    if SessionLocal is None or SessionLocal.kw.get("bind") is not engine:
        SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return SessionLocal


def init_db() -> None:
    """Create any missing CRM tables. Existing tables are left as they are."""
    Base.metadata.create_all(bind=DatabasePool.get_engine())


def get_session() -> Session:
    """
    New session from the pool.
    Use this for manual session management outside of FastAPI
    dependencies (the backfill command, for instance) and close it
    when done.
    """
    return init_session_factory()()
