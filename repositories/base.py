"""
Generic repository over one SQLAlchemy model.

Repositories receive the session from the caller and commit their own
writes; services never touch the session directly.
"""

from typing import Generic, TypeVar, Optional, Type
from uuid import UUID
from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """Primary-key lookup; None when absent"""
        return self.db.get(self.model, entity_id)

    def save(self, entity: ModelType) -> ModelType:
        """Insert or flush changes to ``entity``, commit and reload server defaults"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: UUID) -> bool:
        """Delete by id. Returns False when nothing matched."""
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True
