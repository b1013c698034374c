"""Shared pytest fixtures for the preference store tests."""

from datetime import datetime
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from prefstore.clock import FixedClock
from prefstore.config import Settings
from prefstore.models import Base, Customer, User
from prefstore.repository import SQLAlchemyPreferenceRepository

NOW = datetime(2026, 1, 15, 12, 0, 0)


@pytest.fixture
def engine():
    """In-memory SQLite engine with all tables created."""
    eng = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as sess:
        yield sess


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def settings() -> Settings:
    """Defaults only, independent of the developer's environment."""
    return Settings(_env_file=None, assoc_expiry_mode="legacy", strict_key_folding=False)


@pytest.fixture
def repository(session) -> SQLAlchemyPreferenceRepository:
    return SQLAlchemyPreferenceRepository(session)


@pytest.fixture
def user(session) -> User:
    u = User(username="alice")
    session.add(u)
    session.flush()
    return u


@pytest.fixture
def customer(session) -> Customer:
    c = Customer(name="Open Solutions", email="info@example.com")
    session.add(c)
    session.flush()
    return c


@pytest.fixture
def store(user, repository, clock, settings):
    return user.bind_preferences(repository, clock=clock, settings=settings)
