from typing import List, Optional
from datetime import date

from domain.enums import MealType, SummaryPeriod
from domain.schemas.common import CamelModel, Money
from domain.schemas.bill_schemas import BillResponse


class ConsumerTotal(CamelModel):
    """Bills and amount for one consumer"""

    consumer_name: str
    count: int
    total: Money


class MealTypeTotal(CamelModel):
    """Bills and amount for one meal type"""

    meal_type: MealType
    count: int
    total: Money


class DailyTotal(CamelModel):
    """Bills and amount for one calendar day"""

    date: str  # YYYY-MM-DD
    count: int
    total: Money


class SummaryResponse(CamelModel):
    """Period summary dashboard data"""

    total_by_consumer: List[ConsumerTotal]
    total_by_meal_type: List[MealTypeTotal]
    daily_totals: List[DailyTotal]
    grand_total: Money
    period: SummaryPeriod
    start_date: Optional[date] = None
    end_date: date


class StatsResponse(CamelModel):
    """Overall bill statistics"""

    total_bills: int
    total_amount: Money
    by_meal_type: List[MealTypeTotal]
    recent_bills: List[BillResponse]
    daily_totals: List[DailyTotal]
