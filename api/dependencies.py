"""
API dependencies for dependency injection
"""

from datetime import date
from typing import Generator
from sqlalchemy.orm import Session
from fastapi import Request

from app.config import settings
from domain.dates import today_in
from domain.models import get_db_session


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session(request)


def get_today() -> date:
    """Reference day for period summaries, in the configured business timezone"""
    return today_in(settings.timezone)
