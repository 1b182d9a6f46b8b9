from pydantic import Field
from typing import Optional, Any
from datetime import date, datetime
from uuid import UUID

from domain.enums import MealType
from domain.schemas.common import CamelModel, Money


class BillCreate(CamelModel):
    """Schema for creating a bill.

    Fields are loosely typed; BillService reports missing or malformed
    values with its own messages.
    """

    consumer_id: Optional[UUID] = None
    meal_type: Optional[str] = Field(None, description="BREAKFAST, LUNCH or DINNER")
    amount: Optional[Any] = Field(None, description="Positive amount, number or numeric string")
    date: Optional[str] = Field(None, description="Calendar day, YYYY-MM-DD")


class BillUpdate(BillCreate):
    """Partial update; omitted fields stay unchanged"""


class BillResponse(CamelModel):
    id: UUID
    consumer_id: UUID
    consumer_name: Optional[str] = None
    meal_type: MealType
    amount: Money
    date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
