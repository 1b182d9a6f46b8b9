"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.consumer_repository import ConsumerRepository
from repositories.bill_repository import BillRepository

__all__ = [
    "BaseRepository",
    "ConsumerRepository",
    "BillRepository",
]
