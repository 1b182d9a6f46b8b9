"""
Bill model - one meal expense for one consumer on one date.
"""

from sqlalchemy import (
    Column,
    Date,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    Uuid,
    Enum as SQLEnum,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from typing import Optional

from domain.models.database import Base
from domain.enums import MealType


class Bill(Base):
    """Meal bill"""

    __tablename__ = "bill"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    consumer_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("consumer.id", ondelete="RESTRICT"),
        nullable=False,
    )
    meal_type = Column(SQLEnum(MealType, name="meal_type"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    consumer = relationship("Consumer", back_populates="bills", lazy="joined")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_bill_amount_positive"),
        Index("ix_bill_date", "date"),
        Index("ix_bill_consumer_date", "consumer_id", "date"),
    )

    @property
    def consumer_name(self) -> Optional[str]:
        return self.consumer.name if self.consumer is not None else None
