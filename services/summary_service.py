"""
Summary and statistics aggregation over bills.

A period selector is resolved into a closed calendar window, the matching
bills are fetched through the repositories, and the result is reduced into
per-consumer, per-meal-type and per-day totals. Amounts are accumulated as
``Decimal``; rounding to cents happens only when the response is serialized.
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional, Union
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from domain.models import Bill
from domain.enums import MealType, SummaryPeriod
from domain.filters import BillFilter, DateWindow
from domain.schemas.bill_schemas import BillResponse
from domain.schemas.summary_schemas import (
    ConsumerTotal,
    MealTypeTotal,
    DailyTotal,
    SummaryResponse,
    StatsResponse,
)
from repositories import BillRepository
from app.exceptions import AggregationError, ServiceValidationError

logger = logging.getLogger("mealbills.summary")

WEEKLY_DAYS = 7
CUSTOM_FALLBACK_DAYS = 30
STATS_DAILY_DAYS = 30
RECENT_BILLS_LIMIT = 10


@dataclass
class _Accumulator:
    count: int = 0
    total: Decimal = Decimal("0")

    def add(self, amount) -> None:
        self.count += 1
        self.total += Decimal(str(amount))


def _fold(bills: Iterable[Bill], key) -> "OrderedDict[object, _Accumulator]":
    """Group bills by ``key(bill)`` keeping first-seen key order"""
    groups: "OrderedDict[object, _Accumulator]" = OrderedDict()
    for bill in bills:
        group_key = key(bill)
        if group_key not in groups:
            groups[group_key] = _Accumulator()
        groups[group_key].add(bill.amount)
    return groups


def _parse_period(period: Union[str, SummaryPeriod, None]) -> SummaryPeriod:
    if period is None or period == "":
        return SummaryPeriod.MONTHLY
    if isinstance(period, SummaryPeriod):
        return period
    try:
        return SummaryPeriod(str(period).strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in SummaryPeriod)
        raise ServiceValidationError(
            f"Invalid period {period!r}; expected one of {allowed}"
        )


class SummaryService:
    @staticmethod
    def resolve_window(
        period: Union[str, SummaryPeriod, None],
        today: date,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> DateWindow:
        """
        Resolve a period selector into a closed calendar window.

        | period  | window                                               |
        |---------|------------------------------------------------------|
        | weekly  | [end - 7 days, end]                                  |
        | monthly | [first day of end's month, end]                      |
        | custom  | [start, end], or [end - 30 days, end] without start  |
        | all     | no lower bound                                       |

        ``end`` is ``end_date`` when given, otherwise ``today``. ``start_date``
        is only honoured by ``custom``.

        Raises:
            ServiceValidationError: On an unknown period or start after end
        """
        period = _parse_period(period)
        end = end_date or today

        if period == SummaryPeriod.WEEKLY:
            start = end - timedelta(days=WEEKLY_DAYS)
        elif period == SummaryPeriod.MONTHLY:
            start = end.replace(day=1)
        elif period == SummaryPeriod.CUSTOM:
            start = start_date or end - timedelta(days=CUSTOM_FALLBACK_DAYS)
        else:
            start = None

        if start is not None and start > end:
            raise ServiceValidationError("startDate must not be after endDate")
        return DateWindow(start=start, end=end)

    @staticmethod
    def total_by_consumer(bills: Iterable[Bill]) -> List[ConsumerTotal]:
        """Per-consumer count and sum in first-seen order"""
        groups = _fold(bills, lambda bill: bill.consumer_name)
        return [
            ConsumerTotal(consumer_name=name, count=acc.count, total=acc.total)
            for name, acc in groups.items()
        ]

    @staticmethod
    def daily_totals(bills: Iterable[Bill]) -> List[DailyTotal]:
        """Per-day count and sum, ascending by date"""
        groups = _fold(bills, lambda bill: bill.date)
        return [
            DailyTotal(date=day.isoformat(), count=acc.count, total=acc.total)
            for day, acc in sorted(groups.items(), key=lambda item: item[0])
        ]

    @staticmethod
    def _meal_type_totals(rows) -> List[MealTypeTotal]:
        order = list(MealType)
        return [
            MealTypeTotal(meal_type=meal_type, count=count, total=total)
            for meal_type, count, total in sorted(rows, key=lambda r: order.index(r[0]))
        ]

    @staticmethod
    def build_summary(
        db: Session,
        today: date,
        period: Union[str, SummaryPeriod, None] = None,
        consumer_name: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> SummaryResponse:
        """
        Build the period summary.

        Args:
            db: Database session
            today: Reference day used when no end date is given
            period: weekly, monthly (default), custom or all
            consumer_name: Exact consumer name, or None for everyone
            start_date: Lower bound for the custom period
            end_date: Inclusive upper bound; defaults to today

        Returns:
            SummaryResponse with totals by consumer, by meal type, by day
            and the grand total

        Raises:
            ServiceValidationError: If the period or dates are invalid
            AggregationError: If the database fails; nothing partial is returned
        """
        resolved = _parse_period(period)
        window = SummaryService.resolve_window(resolved, today, start_date, end_date)
        repo = BillRepository(db)

        try:
            bills = repo.list_bills(
                BillFilter(
                    consumer_name=consumer_name,
                    start_date=window.start,
                    end_date=window.end,
                )
            )
            meal_rows = repo.totals_by_meal_type(
                consumer_name=consumer_name,
                start_date=window.start,
                end_date=window.end,
            )
        except SQLAlchemyError as e:
            logger.exception(
                f"Summary aggregation failed period={resolved.value} "
                f"consumer={consumer_name!r} window={window.start}..{window.end}"
            )
            raise AggregationError() from e

        # Bills arrive newest first; consumers are grouped in that order
        by_consumer = SummaryService.total_by_consumer(bills)
        grand_total = sum((group.total for group in by_consumer), Decimal("0"))

        logger.info(
            f"summary_built period={resolved.value} consumer={consumer_name!r} "
            f"window={window.start}..{window.end} bills={len(bills)} "
            f"grand_total={grand_total}"
        )

        return SummaryResponse(
            total_by_consumer=by_consumer,
            total_by_meal_type=SummaryService._meal_type_totals(meal_rows),
            daily_totals=SummaryService.daily_totals(bills),
            grand_total=grand_total,
            period=resolved,
            start_date=window.start,
            end_date=window.end,
        )

    @staticmethod
    def build_stats(db: Session, today: date) -> StatsResponse:
        """
        Overall statistics: totals, per-meal-type breakdown over all bills,
        the most recently created bills and daily totals for the last 30 days.

        Raises:
            AggregationError: If the database fails
        """
        repo = BillRepository(db)
        since = today - timedelta(days=STATS_DAILY_DAYS)

        try:
            total_bills, total_amount = repo.totals()
            meal_rows = repo.totals_by_meal_type()
            recent = repo.recent(RECENT_BILLS_LIMIT)
            last_days = repo.list_bills(BillFilter(start_date=since, end_date=today))
        except SQLAlchemyError as e:
            logger.exception("Bill statistics aggregation failed")
            raise AggregationError() from e

        return StatsResponse(
            total_bills=total_bills,
            total_amount=total_amount,
            by_meal_type=SummaryService._meal_type_totals(meal_rows),
            recent_bills=[BillResponse.model_validate(b) for b in recent],
            daily_totals=SummaryService.daily_totals(last_days),
        )
