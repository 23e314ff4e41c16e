"""
Declarative base and the columns every CRM table shares
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Base):
    """
    Abstract base for the CRM tables: integer id plus audit timestamps.
    Ids grow with insertion order, which the repositories rely on when
    they return "oldest first".
    """
    __abstract__ = True
    # Soft references (clients.lead_id, policies.lead_id) must never see a
    # deleted id handed out again; SQLite reuses rowids without this
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} #{self.id}>"
