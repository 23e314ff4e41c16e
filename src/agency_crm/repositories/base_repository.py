"""
Base repository class for data access operations
"""
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Any, Dict, Generic, TypeVar, Type, Optional, List
from agency_crm.database.models.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class for database operations.
    Repositories handle direct database access and queries.

    Every write commits immediately. A failed commit rolls the session
    back before re-raising so the session stays usable by the caller.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def find_by_id(self, id: int) -> Optional[ModelType]:
        """Find a record by ID"""
        return self.db.get(self.model, id)

    def find_all(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        """Find all records in insertion order, optionally paginated"""
        query = self.db.query(self.model).order_by(self.model.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def find_by(self, **filters) -> List[ModelType]:
        """Find records by filters, in insertion order"""
        return self.db.query(self.model).filter_by(**filters).order_by(self.model.id).all()

    def find_one_by(self, **filters) -> Optional[ModelType]:
        """Find the first record (by insertion order) matching filters"""
        return self.db.query(self.model).filter_by(**filters).order_by(self.model.id).first()

    def create(self, **kwargs) -> ModelType:
        """Create a new record"""
        db_obj = self.model(**kwargs)
        self.db.add(db_obj)
        self._commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, **kwargs) -> ModelType:
        """Update an existing record"""
        for key, value in kwargs.items():
            setattr(db_obj, key, value)
        self._commit()
        self.db.refresh(db_obj)
        return db_obj

    def update_by_id(self, id: int, data: Dict[str, Any]) -> Optional[ModelType]:
        """Apply a partial update; None if the record does not exist"""
        db_obj = self.find_by_id(id)
        if db_obj is None:
            return None
        return self.update(db_obj, **data)

    def delete(self, db_obj: ModelType) -> None:
        """Delete a record"""
        self.db.delete(db_obj)
        self._commit()

    def delete_by_id(self, id: int) -> bool:
        """Delete a record by ID; False if it did not exist"""
        db_obj = self.find_by_id(id)
        if db_obj is None:
            return False
        self.delete(db_obj)
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
