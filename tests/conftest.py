"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.
"""

import sys
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from domain.models import Base, build_engine, build_session_factory, init_database  # noqa: E402

# Reference "today" for every summary computed through the API
FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test"""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_database(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session bound to the in-memory database"""
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(engine, db_session):
    """
    TestClient whose requests share ``db_session`` and see FIXED_TODAY as today.
    """
    from fastapi.testclient import TestClient
    from main import create_app
    from api.dependencies import get_db, get_today

    app = create_app(engine=engine)
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_today] = lambda: FIXED_TODAY
    return TestClient(app)
