"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    build_engine,
    build_session_factory,
    init_database,
    get_db_session,
)
from domain.models.consumer import Consumer
from domain.models.bill import Bill

__all__ = [
    # Database
    "Base",
    "build_engine",
    "build_session_factory",
    "init_database",
    "get_db_session",
    # Models
    "Consumer",
    "Bill",
]
