"""
Consumer Repository - Data access layer for consumer operations
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import Consumer, Bill
from app.exceptions import ConflictError


class ConsumerRepository(BaseRepository[Consumer]):
    """Repository for consumer data access"""

    def __init__(self, db: Session):
        super().__init__(db, Consumer)

    def get_by_name(self, name: str) -> Optional[Consumer]:
        """Get consumer by exact (case-sensitive) name"""
        return self.db.query(Consumer).filter(Consumer.name == name).first()

    def name_taken(self, name: str, exclude_id: UUID = None) -> bool:
        """Check whether another consumer already uses ``name``"""
        query = self.db.query(Consumer.id).filter(Consumer.name == name)
        if exclude_id is not None:
            query = query.filter(Consumer.id != exclude_id)
        return query.first() is not None

    def list_with_bill_counts(
        self, is_active: Optional[bool] = None
    ) -> List[Tuple[Consumer, int]]:
        """Get consumers ordered by name, each paired with its bill count"""
        query = (
            self.db.query(Consumer, func.count(Bill.id))
            .outerjoin(Bill, Bill.consumer_id == Consumer.id)
            .group_by(Consumer.id)
            .order_by(Consumer.name.asc())
        )
        if is_active is not None:
            query = query.filter(Consumer.is_active == is_active)
        return [(consumer, int(count)) for consumer, count in query.all()]

    def create_consumer(
        self,
        name: str,
        email: str = None,
        phone: str = None,
        is_active: bool = True,
    ) -> Consumer:
        """Create a new consumer"""
        consumer = Consumer(name=name, email=email, phone=phone, is_active=is_active)
        try:
            self.db.add(consumer)
            self.db.commit()
            self.db.refresh(consumer)
            return consumer
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Consumer with this name already exists")

    def update_consumer(self, consumer: Consumer) -> Consumer:
        """Persist changes made to a consumer"""
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Consumer with this name already exists")
        self.db.refresh(consumer)
        return consumer
