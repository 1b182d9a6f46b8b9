"""
Consumer domain mappers.
Handles transformation between ORM models and DTOs for consumer entities.
"""

from domain.models import Consumer
from domain.schemas.consumer_schemas import ConsumerResponse


class ConsumerMapper:
    """Mapper for consumer transformations."""

    @staticmethod
    def to_response(consumer: Consumer, bill_count: int = 0) -> ConsumerResponse:
        """
        Convert ORM Consumer to ConsumerResponse DTO.

        Args:
            consumer: Consumer ORM instance
            bill_count: Number of bills referencing the consumer

        Returns:
            ConsumerResponse DTO
        """
        return ConsumerResponse(
            id=consumer.id,
            name=consumer.name,
            email=consumer.email,
            phone=consumer.phone,
            is_active=consumer.is_active,
            bill_count=bill_count,
            created_at=consumer.created_at,
            updated_at=consumer.updated_at,
        )
