"""Services package - Business logic layer"""

from services.consumer_service import ConsumerService
from services.bill_service import BillService
from services.summary_service import SummaryService

__all__ = [
    "ConsumerService",
    "BillService",
    "SummaryService",
]
