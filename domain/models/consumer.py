"""
Consumer model - people whose meals are billed.
"""

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, expression
import uuid

from domain.models.database import Base


class Consumer(Base):
    """A tracked person. Deactivated rather than deleted once billed."""

    __tablename__ = "consumer"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, unique=True, nullable=False)
    email = Column(Text)
    phone = Column(Text)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # No cascade: bills block deletion
    bills = relationship("Bill", back_populates="consumer", passive_deletes="all")
