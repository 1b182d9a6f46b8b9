"""
Query filter value objects.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from domain.enums import MealType


@dataclass(frozen=True)
class BillFilter:
    """Criteria for listing bills. ``None`` on a field means no restriction.

    ``end_date`` is inclusive.
    """

    consumer_name: Optional[str] = None
    meal_type: Optional[MealType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class DateWindow:
    """Closed calendar window; ``start`` is ``None`` when unbounded"""

    start: Optional[date]
    end: date

    def contains(self, day: date) -> bool:
        return (self.start is None or self.start <= day) and day <= self.end
