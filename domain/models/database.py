"""
Database configuration and session management.

The engine and session factory are built by the application factory and
stored on ``app.state``; routes receive sessions through ``get_db_session``.
"""

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger("mealbills.database")

# Create SQLAlchemy Base
Base = declarative_base()


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine for the given URL"""
    if url.startswith("sqlite"):
        connect_args = kwargs.setdefault("connect_args", {})
        # Sessions are used from FastAPI's threadpool
        connect_args.setdefault("check_same_thread", False)
    return create_engine(url, echo=echo, future=True, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine"""
    return sessionmaker(bind=engine, autoflush=False, future=True)


def init_database(engine: Engine):
    """Initialize database schema"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Get database session (for FastAPI dependency injection)"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
