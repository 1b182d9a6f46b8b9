from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
import logging
import uuid
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import date

from domain.models import Bill
from domain.enums import MealType
from domain.filters import BillFilter
from domain.dates import normalize_date
from domain.schemas.bill_schemas import BillCreate, BillUpdate
from domain.schemas.common import CENT
from repositories import BillRepository, ConsumerRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("mealbills.bills")

ALL = "all"

# Upper limit of Numeric(10, 2)
MAX_AMOUNT = Decimal("100000000")


def parse_amount(value: Any) -> Decimal:
    """
    Parse a bill amount into a positive Decimal rounded to cents.

    Accepts numbers and numeric strings. Floats go through ``str`` so that
    0.1 becomes Decimal("0.1") rather than its binary expansion.

    Raises:
        ServiceValidationError: If the value is not a finite number > 0
    """
    if isinstance(value, bool):
        raise ServiceValidationError("Amount must be a number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ServiceValidationError("Amount must be a number")
    if not amount.is_finite():
        raise ServiceValidationError("Amount must be a number")

    if amount >= MAX_AMOUNT:
        raise ServiceValidationError("Amount is too large")

    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise ServiceValidationError("Amount must be greater than 0")
    return amount


def parse_meal_type(value: Any) -> MealType:
    """
    Parse a meal type name (case-insensitive).

    Raises:
        ServiceValidationError: If the value is not BREAKFAST, LUNCH or DINNER
    """
    if isinstance(value, MealType):
        return value
    try:
        return MealType(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in MealType)
        raise ServiceValidationError(f"Invalid meal type {value!r}; expected one of {allowed}")


def parse_meal_type_filter(value: Optional[str]) -> Optional[MealType]:
    """Meal type filter where ``None``, ``""`` and ``"all"`` mean unrestricted"""
    if value is None or not value.strip() or value.strip().lower() == ALL:
        return None
    return parse_meal_type(value)


def parse_bill_date(value: Any) -> date:
    """
    Parse a bill date keeping the calendar day as written.

    Raises:
        ServiceValidationError: If the value is not a date
    """
    try:
        return normalize_date(value)
    except (ValueError, TypeError):
        raise ServiceValidationError(f"Invalid date {value!r}; expected YYYY-MM-DD")


def parse_consumer_filter(value: Optional[str]) -> Optional[str]:
    """Consumer name filter where ``None``, ``""`` and ``"all"`` mean unrestricted"""
    if value is None or not value.strip() or value == ALL:
        return None
    return value


class BillService:
    @staticmethod
    def validate_bill_data(data: BillCreate, partial: bool = False) -> Dict[str, Any]:
        """
        Validate and normalize bill fields before any write.

        Args:
            data: Incoming bill payload
            partial: When True only the supplied fields are validated

        Returns:
            Dict with the normalized values of the supplied fields
            (consumer_id, meal_type, amount, date)

        Raises:
            ServiceValidationError: If a field is missing or malformed
        """
        supplied = data.model_dump(exclude_unset=partial)
        if not partial:
            missing = [
                name
                for name in ("consumer_id", "meal_type", "amount", "date")
                if supplied.get(name) in (None, "")
            ]
            if missing:
                raise ServiceValidationError(
                    "Missing required fields", details={"missing": missing}
                )

        validated: Dict[str, Any] = {}
        if "consumer_id" in supplied:
            if supplied["consumer_id"] is None:
                raise ServiceValidationError("consumerId cannot be empty")
            validated["consumer_id"] = supplied["consumer_id"]
        if "meal_type" in supplied:
            validated["meal_type"] = parse_meal_type(supplied["meal_type"])
        if "amount" in supplied:
            validated["amount"] = parse_amount(supplied["amount"])
        if "date" in supplied:
            validated["date"] = parse_bill_date(supplied["date"])
        return validated

    @staticmethod
    def list_bills(db: Session, bill_filter: BillFilter = None) -> List[Bill]:
        """Bills matching the filter, newest date first"""
        bill_filter = bill_filter or BillFilter()
        if (
            bill_filter.start_date
            and bill_filter.end_date
            and bill_filter.start_date > bill_filter.end_date
        ):
            raise ServiceValidationError("startDate must not be after endDate")
        return BillRepository(db).list_bills(bill_filter)

    @staticmethod
    def get_bill(db: Session, bill_id: uuid.UUID) -> Bill:
        """
        Raises:
            NotFoundError: If the bill does not exist
        """
        bill = BillRepository(db).get_by_id(bill_id)
        if not bill:
            raise NotFoundError("Bill not found")
        return bill

    @staticmethod
    def create_bill(db: Session, data: BillCreate) -> Bill:
        """
        Record a bill for an existing consumer.

        Raises:
            ServiceValidationError: If a field is missing or malformed
            NotFoundError: If the consumer does not exist
        """
        validated = BillService.validate_bill_data(data)

        consumer = ConsumerRepository(db).get_by_id(validated["consumer_id"])
        if not consumer:
            logger.warning(
                f"create_bill failed: consumer {validated['consumer_id']} not found"
            )
            raise NotFoundError("Consumer not found")

        bill = BillRepository(db).create_bill(
            consumer_id=consumer.id,
            meal_type=validated["meal_type"],
            amount=validated["amount"],
            bill_date=validated["date"],
        )
        logger.info(
            f"bill_created id={bill.id} consumer={consumer.name!r} "
            f"meal_type={bill.meal_type.value} amount={validated['amount']} date={bill.date}"
        )
        return bill

    @staticmethod
    def update_bill(db: Session, bill_id: uuid.UUID, data: BillUpdate) -> Bill:
        """
        Apply a partial update to a bill.

        Raises:
            NotFoundError: If the bill or a newly referenced consumer does not exist
            ServiceValidationError: If a supplied field is malformed
        """
        repo = BillRepository(db)
        bill = repo.get_by_id(bill_id)
        if not bill:
            raise NotFoundError("Bill not found")

        validated = BillService.validate_bill_data(data, partial=True)
        if "consumer_id" in validated:
            consumer = ConsumerRepository(db).get_by_id(validated["consumer_id"])
            if not consumer:
                raise NotFoundError("Consumer not found")
            bill.consumer = consumer
        if "meal_type" in validated:
            bill.meal_type = validated["meal_type"]
        if "amount" in validated:
            bill.amount = validated["amount"]
        if "date" in validated:
            bill.date = validated["date"]

        bill = repo.save(bill)
        logger.info(f"bill_updated id={bill.id} fields={sorted(validated)}")
        return bill

    @staticmethod
    def delete_bill(db: Session, bill_id: uuid.UUID) -> None:
        """
        Raises:
            NotFoundError: If the bill does not exist
        """
        if not BillRepository(db).delete(bill_id):
            raise NotFoundError("Bill not found")
        logger.info(f"bill_deleted id={bill_id}")
