"""Tests for the session helpers."""

import pytest
from sqlalchemy import create_engine, func, select

from prefstore import database
from prefstore.database import (
    check_database_health,
    configure_engine,
    dispose_engine,
    get_db_session,
    init_db,
)
from prefstore.models import User
from prefstore.repository import SQLAlchemyPreferenceRepository


@pytest.fixture
def db_engine():
    engine = create_engine("sqlite:///:memory:")
    configure_engine(engine)
    init_db()
    yield engine
    dispose_engine()


def _count(model) -> int:
    with get_db_session() as db:
        return db.scalar(select(func.count()).select_from(model))


class TestGetDbSession:
    def test_commits_staged_preferences(self, db_engine):
        with get_db_session() as db:
            user = User(username="alice")
            db.add(user)
            db.flush()
            user.bind_preferences(SQLAlchemyPreferenceRepository(db))
            user.set_preference("theme", "dark")

        with get_db_session() as db:
            user = db.scalars(select(User).where(User.username == "alice")).one()
            user.bind_preferences(SQLAlchemyPreferenceRepository(db))
            assert user.get_preference("theme") == "dark"

    def test_rolls_back_on_error(self, db_engine):
        with pytest.raises(RuntimeError):
            with get_db_session() as db:
                db.add(User(username="bob"))
                db.flush()
                raise RuntimeError("boom")
        assert _count(User) == 0


class TestEngineLifecycle:
    def test_health_check(self, db_engine):
        assert check_database_health() is True

    def test_dispose_resets_engine(self, db_engine):
        dispose_engine()
        assert database._engine is None
        assert database._session_factory is None
