"""
Bill Repository - Data access layer for bill queries and aggregates
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session, Query, contains_eager
from sqlalchemy import func

from repositories.base import BaseRepository
from domain.models import Bill, Consumer
from domain.enums import MealType
from domain.filters import BillFilter
from domain.dates import exclusive_upper_bound


class BillRepository(BaseRepository[Bill]):
    """Repository for bill data access"""

    def __init__(self, db: Session):
        super().__init__(db, Bill)

    def _scoped(
        self,
        query: Query,
        consumer_name: Optional[str] = None,
        meal_type: Optional[MealType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Query:
        """Apply the optional restrictions shared by listing and aggregation.

        ``query`` must already be joined to Consumer when ``consumer_name``
        is given. ``end_date`` is inclusive and compared as ``< end + 1 day``.
        """
        if consumer_name is not None:
            query = query.filter(Consumer.name == consumer_name)
        if meal_type is not None:
            query = query.filter(Bill.meal_type == meal_type)
        if start_date is not None:
            query = query.filter(Bill.date >= start_date)
        if end_date is not None:
            query = query.filter(Bill.date < exclusive_upper_bound(end_date))
        return query

    def list_bills(self, bill_filter: BillFilter = None) -> List[Bill]:
        """Get bills matching the filter, newest date first, with consumers loaded"""
        bill_filter = bill_filter or BillFilter()
        query = (
            self.db.query(Bill)
            .join(Bill.consumer)
            .options(contains_eager(Bill.consumer))
        )
        query = self._scoped(
            query,
            consumer_name=bill_filter.consumer_name,
            meal_type=bill_filter.meal_type,
            start_date=bill_filter.start_date,
            end_date=bill_filter.end_date,
        )
        return query.order_by(Bill.date.desc(), Bill.created_at.desc()).all()

    def create_bill(
        self, consumer_id: UUID, meal_type: MealType, amount: Decimal, bill_date: date
    ) -> Bill:
        """Create a new bill"""
        bill = Bill(
            consumer_id=consumer_id, meal_type=meal_type, amount=amount, date=bill_date
        )
        return self.save(bill)

    def totals_by_meal_type(
        self,
        consumer_name: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Tuple[MealType, int, Decimal]]:
        """Count and sum bills per meal type using the database's GROUP BY"""
        query = self.db.query(
            Bill.meal_type, func.count(Bill.id), func.sum(Bill.amount)
        ).join(Bill.consumer)
        query = self._scoped(
            query,
            consumer_name=consumer_name,
            start_date=start_date,
            end_date=end_date,
        )
        rows = query.group_by(Bill.meal_type).all()
        return [
            (meal_type, int(count), Decimal(str(total or 0)))
            for meal_type, count, total in rows
        ]

    def totals(self) -> Tuple[int, Decimal]:
        """Count and sum of all bills"""
        count, total = self.db.query(func.count(Bill.id), func.sum(Bill.amount)).one()
        return int(count), Decimal(str(total or 0))

    def recent(self, limit: int = 10) -> List[Bill]:
        """Most recently created bills"""
        return (
            self.db.query(Bill)
            .order_by(Bill.created_at.desc(), Bill.date.desc())
            .limit(limit)
            .all()
        )

    def count_for_consumer(self, consumer_id: UUID) -> int:
        """Count bills referencing a consumer"""
        return (
            self.db.query(func.count(Bill.id))
            .filter(Bill.consumer_id == consumer_id)
            .scalar()
        )
