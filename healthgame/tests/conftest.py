"""
Shared test fixtures.
"""
import os
import tempfile

# Must be set before any healthgame module reads its configuration
os.environ.setdefault("HEALTHGAME_DATABASE_URL", "sqlite://")
os.environ.setdefault("HEALTHGAME_LOG_DIR", os.path.join(tempfile.gettempdir(), "healthgame-tests"))
os.environ.setdefault("HEALTHGAME_BCRYPT_ROUNDS", "4")
os.environ.setdefault("HEALTHGAME_ROLLOVER_ENABLED", "false")

import pytest
from datetime import date, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from healthgame.database import Base, get_db
from healthgame.models import User, DailyHealthLog, GamificationProfile


@pytest.fixture
def engine():
    """In-memory SQLite engine, fresh tables per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def today():
    return date(2026, 3, 10)


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def user(db_session):
    user = User(name="Alice", email="alice@example.com", password_hash="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session):
    user = User(name="Bob", email="bob@example.com", password_hash="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def make_log(db_session):
    """Factory: persist a DailyHealthLog for a user and day"""
    def _make_log(user_id, log_date, steps=0, calories_burned=0, sleep_duration=None, **extra):
        log = DailyHealthLog(
            user_id=user_id,
            date=log_date,
            steps=steps,
            calories_burned=calories_burned,
            sleep_duration=sleep_duration,
            **extra
        )
        db_session.add(log)
        db_session.commit()
        db_session.refresh(log)
        return log
    return _make_log


@pytest.fixture
def make_profile(db_session):
    """Factory: persist a GamificationProfile with explicit state"""
    def _make_profile(user_id, points=0, daily_points=0, last_updated_date=None, level=None, badges=None):
        profile = GamificationProfile(
            user_id=user_id,
            points=points,
            daily_points=daily_points,
            last_updated_date=last_updated_date,
            level=level if level is not None else points // 100 + 1,
            badges=badges or [],
        )
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile
    return _make_profile


@pytest.fixture
def client(session_factory, today):
    """TestClient wired to the test database with a fixed 'today'"""
    from fastapi.testclient import TestClient
    from healthgame.main import app, get_today

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: today
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user):
    from healthgame.services.auth_service import AuthService
    return {"Authorization": f"Bearer {AuthService.create_token(user.id)}"}
