"""Bill management and summary routes"""

from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_today
from api.responses import ERROR_RESPONSES, MessageResponse
from domain.filters import BillFilter
from domain.schemas.bill_schemas import BillCreate, BillUpdate, BillResponse
from domain.schemas.summary_schemas import SummaryResponse, StatsResponse
from services import BillService, SummaryService
from services.bill_service import (
    parse_bill_date,
    parse_consumer_filter,
    parse_meal_type_filter,
)

router = APIRouter(prefix="/bills", tags=["Bills"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealbills.api.bills")


def _optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or not value.strip():
        return None
    return parse_bill_date(value)


@router.get("", response_model=List[BillResponse])
def list_bills(
    consumer_name: Optional[str] = Query(None, alias="consumerName"),
    meal_type: Optional[str] = Query(None, alias="mealType"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """
    List bills, newest date first.

    Every filter is optional; ``all`` for consumerName or mealType means no
    restriction. endDate is inclusive.
    """
    bill_filter = BillFilter(
        consumer_name=parse_consumer_filter(consumer_name),
        meal_type=parse_meal_type_filter(meal_type),
        start_date=_optional_date(start_date),
        end_date=_optional_date(end_date),
    )
    bills = BillService.list_bills(db, bill_filter)
    return [BillResponse.model_validate(b) for b in bills]


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
def create_bill(payload: BillCreate, db: Session = Depends(get_db)):
    """Record a bill for an existing consumer"""
    bill = BillService.create_bill(db, payload)
    return BillResponse.model_validate(bill)


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    period: str = Query("monthly", description="weekly, monthly, custom or all"),
    consumer_name: Optional[str] = Query(None, alias="consumerName"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Summarize bills over a period.

    - weekly: the 7 days before endDate through endDate
    - monthly: first of endDate's month through endDate
    - custom: startDate through endDate (last 30 days without startDate)
    - all: everything up to endDate

    endDate defaults to today and is inclusive.
    """
    return SummaryService.build_summary(
        db,
        today=today,
        period=period,
        consumer_name=parse_consumer_filter(consumer_name),
        start_date=_optional_date(start_date),
        end_date=_optional_date(end_date),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db), today: date = Depends(get_today)):
    """Overall totals, meal type breakdown, recent bills and last 30 days"""
    return SummaryService.build_stats(db, today)


@router.get("/{bill_id}", response_model=BillResponse)
def get_bill(bill_id: UUID, db: Session = Depends(get_db)):
    """Get a single bill"""
    return BillResponse.model_validate(BillService.get_bill(db, bill_id))


@router.put("/{bill_id}", response_model=BillResponse)
def update_bill(bill_id: UUID, payload: BillUpdate, db: Session = Depends(get_db)):
    """Update the supplied fields of a bill"""
    bill = BillService.update_bill(db, bill_id, payload)
    return BillResponse.model_validate(bill)


@router.delete("/{bill_id}", response_model=MessageResponse)
def delete_bill(bill_id: UUID, db: Session = Depends(get_db)):
    """Delete a bill"""
    BillService.delete_bill(db, bill_id)
    return {"message": "Bill deleted successfully"}
