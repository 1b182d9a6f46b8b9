"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.common import CamelModel, Money, to_currency
from domain.schemas.consumer_schemas import (
    ConsumerCreate,
    ConsumerUpdate,
    ConsumerResponse,
)
from domain.schemas.bill_schemas import BillCreate, BillUpdate, BillResponse
from domain.schemas.summary_schemas import (
    ConsumerTotal,
    MealTypeTotal,
    DailyTotal,
    SummaryResponse,
    StatsResponse,
)

__all__ = [
    "CamelModel",
    "Money",
    "to_currency",
    "ConsumerCreate",
    "ConsumerUpdate",
    "ConsumerResponse",
    "BillCreate",
    "BillUpdate",
    "BillResponse",
    "ConsumerTotal",
    "MealTypeTotal",
    "DailyTotal",
    "SummaryResponse",
    "StatsResponse",
]
