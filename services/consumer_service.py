from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Consumer
from domain.schemas.consumer_schemas import ConsumerCreate, ConsumerUpdate
from repositories import ConsumerRepository, BillRepository
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError

logger = logging.getLogger("mealbills.consumers")


def _clean_name(name: Optional[str]) -> str:
    if name is None or not str(name).strip():
        raise ServiceValidationError("Name is required")
    return str(name).strip()


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class ConsumerService:
    @staticmethod
    def list_consumers(
        db: Session, is_active: Optional[bool] = None
    ) -> List[Tuple[Consumer, int]]:
        """Consumers ordered by name, paired with their bill counts"""
        return ConsumerRepository(db).list_with_bill_counts(is_active)

    @staticmethod
    def get_consumer(db: Session, consumer_id: uuid.UUID) -> Tuple[Consumer, int]:
        """
        Get a consumer and its bill count.

        Raises:
            NotFoundError: If the consumer does not exist
        """
        consumer = ConsumerRepository(db).get_by_id(consumer_id)
        if not consumer:
            raise NotFoundError("Consumer not found")
        return consumer, BillRepository(db).count_for_consumer(consumer_id)

    @staticmethod
    def create_consumer(db: Session, data: ConsumerCreate) -> Consumer:
        """
        Create a consumer.

        The name is compared exactly (case-sensitive) against existing names
        before anything is written.

        Raises:
            ServiceValidationError: If the name is missing or blank
            ConflictError: If a consumer with the same name exists
        """
        name = _clean_name(data.name)
        repo = ConsumerRepository(db)
        if repo.name_taken(name):
            logger.warning(f"create_consumer rejected: name {name!r} already exists")
            raise ConflictError("Consumer with this name already exists")

        consumer = repo.create_consumer(
            name=name,
            email=_blank_to_none(data.email),
            phone=_blank_to_none(data.phone),
            is_active=data.is_active,
        )
        logger.info(f"consumer_created id={consumer.id} name={consumer.name!r}")
        return consumer

    @staticmethod
    def update_consumer(
        db: Session, consumer_id: uuid.UUID, data: ConsumerUpdate
    ) -> Tuple[Consumer, int]:
        """
        Apply a partial update. Deactivation is ``is_active=False``.

        Raises:
            NotFoundError: If the consumer does not exist
            ServiceValidationError: If a supplied name is blank
            ConflictError: If the new name belongs to a different consumer
        """
        repo = ConsumerRepository(db)
        consumer = repo.get_by_id(consumer_id)
        if not consumer:
            raise NotFoundError("Consumer not found")

        fields = data.model_dump(exclude_unset=True)
        if "name" in fields:
            name = _clean_name(fields["name"])
            if repo.name_taken(name, exclude_id=consumer_id):
                logger.warning(
                    f"update_consumer rejected: name {name!r} used by another consumer"
                )
                raise ConflictError("Consumer with this name already exists")
            consumer.name = name
        if "email" in fields:
            consumer.email = _blank_to_none(fields["email"])
        if "phone" in fields:
            consumer.phone = _blank_to_none(fields["phone"])
        if fields.get("is_active") is not None:
            consumer.is_active = fields["is_active"]

        consumer = repo.update_consumer(consumer)
        logger.info(
            f"consumer_updated id={consumer.id} fields={sorted(fields)} "
            f"is_active={consumer.is_active}"
        )
        return consumer, BillRepository(db).count_for_consumer(consumer_id)

    @staticmethod
    def delete_consumer(db: Session, consumer_id: uuid.UUID) -> None:
        """
        Hard-delete a consumer with no bills.

        Raises:
            NotFoundError: If the consumer does not exist
            ConflictError: If any bill references the consumer
        """
        repo = ConsumerRepository(db)
        consumer = repo.get_by_id(consumer_id)
        if not consumer:
            raise NotFoundError("Consumer not found")

        bill_count = BillRepository(db).count_for_consumer(consumer_id)
        if bill_count > 0:
            logger.warning(
                f"delete_consumer rejected: consumer {consumer_id} has {bill_count} bills"
            )
            raise ConflictError(
                "Cannot delete consumer with existing bills. Please deactivate instead.",
                details={"billCount": bill_count},
            )

        repo.delete(consumer_id)
        logger.info(f"consumer_deleted id={consumer_id}")
