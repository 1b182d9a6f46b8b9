"""
Tests for the consumer and bill services with real database operations.

Covers:
- ConsumerService: uniqueness pre-checks, partial updates, deactivation,
  delete blocked by existing bills
- BillService: field validation, consumer resolution, partial updates
- Parsing helpers for amounts, meal types and dates
"""

import pytest
import uuid
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy.orm import Session

from test_fixtures import make_consumer, make_bill
from services import ConsumerService, BillService
from services.bill_service import (
    parse_amount,
    parse_meal_type,
    parse_meal_type_filter,
    parse_bill_date,
    parse_consumer_filter,
)
from domain.enums import MealType
from domain.filters import BillFilter
from domain.schemas.bill_schemas import BillCreate, BillUpdate
from domain.schemas.consumer_schemas import ConsumerCreate, ConsumerUpdate
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError


# =============================================================================
# CONSUMER SERVICE TESTS
# =============================================================================


def test_consumer_service_create(db_session: Session):
    consumer = ConsumerService.create_consumer(
        db_session, ConsumerCreate(name="  Hamad ", email="", phone="0300-1234567")
    )

    assert consumer.name == "Hamad"
    assert consumer.email is None
    assert consumer.phone == "0300-1234567"
    assert consumer.is_active is True


def test_consumer_service_create_requires_name(db_session: Session):
    with pytest.raises(ServiceValidationError):
        ConsumerService.create_consumer(db_session, ConsumerCreate(name="   "))
    with pytest.raises(ServiceValidationError):
        ConsumerService.create_consumer(db_session, ConsumerCreate())


def test_consumer_service_duplicate_name_is_case_sensitive(db_session: Session):
    """
    Verifies:
    - Exact duplicate name raises ConflictError
    - A name differing only in case is a different consumer
    """
    ConsumerService.create_consumer(db_session, ConsumerCreate(name="Ameer"))

    with pytest.raises(ConflictError):
        ConsumerService.create_consumer(db_session, ConsumerCreate(name="Ameer"))

    other = ConsumerService.create_consumer(db_session, ConsumerCreate(name="ameer"))
    assert other.name == "ameer"


def test_consumer_service_get_returns_bill_count(db_session: Session):
    hamad = make_consumer(db_session, "Hamad")
    make_bill(db_session, hamad)
    make_bill(db_session, hamad)

    consumer, count = ConsumerService.get_consumer(db_session, hamad.id)
    assert consumer.id == hamad.id
    assert count == 2

    with pytest.raises(NotFoundError):
        ConsumerService.get_consumer(db_session, uuid.uuid4())


def test_consumer_service_update_partial_and_deactivate(db_session: Session):
    hamad = make_consumer(db_session, "Hamad", email="hamad@example.com")

    consumer, _ = ConsumerService.update_consumer(
        db_session, hamad.id, ConsumerUpdate(is_active=False)
    )
    assert consumer.is_active is False
    assert consumer.name == "Hamad"
    assert consumer.email == "hamad@example.com"

    consumer, _ = ConsumerService.update_consumer(
        db_session, hamad.id, ConsumerUpdate(name="Hamad Ali", email="")
    )
    assert consumer.name == "Hamad Ali"
    assert consumer.email is None
    assert consumer.is_active is False


def test_consumer_service_rename_collision(db_session: Session):
    """Renaming onto another consumer's name conflicts; keeping one's own name does not"""
    make_consumer(db_session, "Hamad")
    muneer = make_consumer(db_session, "Muneer")

    with pytest.raises(ConflictError):
        ConsumerService.update_consumer(db_session, muneer.id, ConsumerUpdate(name="Hamad"))

    consumer, _ = ConsumerService.update_consumer(
        db_session, muneer.id, ConsumerUpdate(name="Muneer", phone="123")
    )
    assert consumer.phone == "123"


def test_consumer_service_update_missing(db_session: Session):
    with pytest.raises(NotFoundError):
        ConsumerService.update_consumer(db_session, uuid.uuid4(), ConsumerUpdate(name="X"))


def test_consumer_service_delete_blocked_by_bills(db_session: Session):
    """
    Verifies:
    - A consumer with bills cannot be deleted (ConflictError), and still exists
    - A consumer without bills is deleted
    - Deleting an unknown consumer raises NotFoundError
    """
    billed = make_consumer(db_session, "Hamad")
    make_bill(db_session, billed)
    unbilled = make_consumer(db_session, "Muneer")

    with pytest.raises(ConflictError) as exc_info:
        ConsumerService.delete_consumer(db_session, billed.id)
    assert "deactivate" in exc_info.value.message
    assert ConsumerService.get_consumer(db_session, billed.id)[0] is not None

    ConsumerService.delete_consumer(db_session, unbilled.id)
    with pytest.raises(NotFoundError):
        ConsumerService.get_consumer(db_session, unbilled.id)

    with pytest.raises(NotFoundError):
        ConsumerService.delete_consumer(db_session, uuid.uuid4())


# =============================================================================
# BILL SERVICE TESTS
# =============================================================================


def test_bill_service_create(db_session: Session):
    hamad = make_consumer(db_session, "Hamad")

    bill = BillService.create_bill(
        db_session,
        BillCreate(consumer_id=hamad.id, meal_type="lunch", amount="350.5", date="2024-06-14"),
    )

    assert bill.consumer_name == "Hamad"
    assert bill.meal_type == MealType.LUNCH
    assert bill.amount == Decimal("350.50")
    assert bill.date == date(2024, 6, 14)


@pytest.mark.parametrize("amount", [0, "0", -5, "-0.01", "abc", "", None, "NaN", "Infinity", True])
def test_bill_service_rejects_bad_amounts(db_session: Session, amount):
    hamad = make_consumer(db_session, "Hamad")

    with pytest.raises(ServiceValidationError):
        BillService.create_bill(
            db_session,
            BillCreate(consumer_id=hamad.id, meal_type="LUNCH", amount=amount, date="2024-06-14"),
        )
    assert BillService.list_bills(db_session) == []


def test_bill_service_rejects_missing_fields(db_session: Session):
    hamad = make_consumer(db_session, "Hamad")

    with pytest.raises(ServiceValidationError) as exc_info:
        BillService.create_bill(db_session, BillCreate(consumer_id=hamad.id, amount="10"))
    assert exc_info.value.details == {"missing": ["meal_type", "date"]}


def test_bill_service_rejects_unknown_meal_type(db_session: Session):
    hamad = make_consumer(db_session, "Hamad")

    with pytest.raises(ServiceValidationError):
        BillService.create_bill(
            db_session,
            BillCreate(consumer_id=hamad.id, meal_type="BRUNCH", amount="10", date="2024-06-14"),
        )


def test_bill_service_unknown_consumer_is_not_found(db_session: Session):
    with pytest.raises(NotFoundError):
        BillService.create_bill(
            db_session,
            BillCreate(consumer_id=uuid.uuid4(), meal_type="DINNER", amount="10", date="2024-06-14"),
        )


def test_bill_service_update_partial(db_session: Session):
    hamad = make_consumer(db_session, "Hamad")
    muneer = make_consumer(db_session, "Muneer")
    bill = make_bill(db_session, hamad, MealType.LUNCH, "100", date(2024, 6, 10))

    updated = BillService.update_bill(db_session, bill.id, BillUpdate(amount="120.75"))
    assert updated.amount == Decimal("120.75")
    assert updated.meal_type == MealType.LUNCH
    assert updated.date == date(2024, 6, 10)

    updated = BillService.update_bill(
        db_session, bill.id, BillUpdate(consumer_id=muneer.id, meal_type="DINNER")
    )
    assert updated.consumer_name == "Muneer"
    assert updated.meal_type == MealType.DINNER


def test_bill_service_update_validation(db_session: Session):
    hamad = make_consumer(db_session, "Hamad")
    bill = make_bill(db_session, hamad, amount="100")

    with pytest.raises(ServiceValidationError):
        BillService.update_bill(db_session, bill.id, BillUpdate(amount="-1"))
    with pytest.raises(NotFoundError):
        BillService.update_bill(db_session, bill.id, BillUpdate(consumer_id=uuid.uuid4()))
    with pytest.raises(NotFoundError):
        BillService.update_bill(db_session, uuid.uuid4(), BillUpdate(amount="5"))

    assert BillService.get_bill(db_session, bill.id).amount == Decimal("100.00")


def test_bill_service_get_and_delete(db_session: Session):
    hamad = make_consumer(db_session, "Hamad")
    bill = make_bill(db_session, hamad)

    assert BillService.get_bill(db_session, bill.id).id == bill.id

    BillService.delete_bill(db_session, bill.id)
    with pytest.raises(NotFoundError):
        BillService.get_bill(db_session, bill.id)
    with pytest.raises(NotFoundError):
        BillService.delete_bill(db_session, bill.id)


def test_bill_service_list_rejects_inverted_window(db_session: Session):
    with pytest.raises(ServiceValidationError):
        BillService.list_bills(
            db_session, BillFilter(start_date=date(2024, 6, 10), end_date=date(2024, 6, 1))
        )


# =============================================================================
# PARSING HELPERS
# =============================================================================


def test_parse_amount_uses_decimal_and_rounds_to_cents():
    assert parse_amount(0.1) == Decimal("0.10")
    assert parse_amount("12.345") == Decimal("12.35")
    assert parse_amount(" 7 ") == Decimal("7.00")
    with pytest.raises(ServiceValidationError):
        parse_amount("0.004")
    with pytest.raises(ServiceValidationError):
        parse_amount("1e12")


def test_parse_meal_type():
    assert parse_meal_type("breakfast") == MealType.BREAKFAST
    assert parse_meal_type(MealType.DINNER) == MealType.DINNER
    with pytest.raises(ServiceValidationError):
        parse_meal_type("SUPPER")

    assert parse_meal_type_filter(None) is None
    assert parse_meal_type_filter("all") is None
    assert parse_meal_type_filter("LUNCH") == MealType.LUNCH


def test_parse_bill_date_keeps_calendar_day():
    """Timestamps keep their written day regardless of timezone suffix"""
    assert parse_bill_date("2024-06-15") == date(2024, 6, 15)
    assert parse_bill_date("2024-06-15T23:30:00.000Z") == date(2024, 6, 15)
    assert parse_bill_date("2024-06-15T00:30:00+05:00") == date(2024, 6, 15)
    assert parse_bill_date(datetime(2024, 6, 15, 23, 59)) == date(2024, 6, 15)
    for bad in ("15/06/2024", "2024-13-01", "", None):
        with pytest.raises(ServiceValidationError):
            parse_bill_date(bad)


def test_parse_consumer_filter():
    assert parse_consumer_filter(None) is None
    assert parse_consumer_filter("all") is None
    assert parse_consumer_filter("Hamad") == "Hamad"
