"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from userbase.database.schema import Base
from userbase.database.user_repo import UserSqlRepository
from userbase.users.in_memory_repo import UserInMemoryRepository


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def repository(request, session):
    """Each backend in turn, so contract tests run against both."""
    if request.param == "memory":
        return UserInMemoryRepository()
    return UserSqlRepository(session)
