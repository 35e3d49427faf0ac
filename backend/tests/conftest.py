# backend/tests/conftest.py
"""
Pytest configuration.

Every test runs against a fresh in-memory SQLite database. The API client
shares the test session through a ``get_db`` override, and requests are
authenticated with locally signed access tokens.
"""

import os

# Set test mode BEFORE any drivedesk imports
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CI"] = "true"

from datetime import date, datetime, timedelta, timezone
from typing import Dict, Generator

from fastapi.testclient import TestClient
import jwt
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from drivedesk.api.dependencies.database import get_db
from drivedesk.core.config import settings
from drivedesk.database import Base
import drivedesk.models  # noqa: F401
from drivedesk.main import fastapi_app as app
from drivedesk.models.profile import Profile
from drivedesk.models.student import Student

TEST_USER_ID = "11111111-1111-4111-8111-111111111111"
OTHER_USER_ID = "22222222-2222-4222-8222-222222222222"
ADMIN_USER_ID = "33333333-3333-4333-8333-333333333333"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine():
    # StaticPool keeps one connection so worker threads see the same in-memory database
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(test_engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db(engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(user_id: str, expires_in: timedelta = timedelta(hours=1)) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "aud": settings.auth_jwt_audience,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(
        payload, settings.auth_jwt_secret.get_secret_value(), algorithm=settings.auth_jwt_algorithm
    )


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(TEST_USER_ID)}"}


@pytest.fixture
def other_auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(OTHER_USER_ID)}"}


@pytest.fixture
def admin_auth_headers(admin_profile: Profile) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(ADMIN_USER_ID)}"}


@pytest.fixture
def test_profile(db: Session) -> Profile:
    profile = Profile(
        id=TEST_USER_ID,
        first_name="Sam",
        last_name="Instructor",
        hourly_rate=40,
        timezone="Europe/London",
        is_admin=False,
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def other_profile(db: Session) -> Profile:
    profile = Profile(id=OTHER_USER_ID, timezone="Europe/London", is_admin=False)
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def admin_profile(db: Session) -> Profile:
    profile = Profile(id=ADMIN_USER_ID, first_name="Ada", timezone="Europe/London", is_admin=True)
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def test_student(db: Session, test_profile: Profile) -> Student:
    student = Student(user_id=test_profile.id, name="Alex Learner", phone_number="07700900123")
    db.add(student)
    db.commit()
    return student


@pytest.fixture
def other_student(db: Session, other_profile: Profile) -> Student:
    student = Student(user_id=other_profile.id, name="Someone Else")
    db.add(student)
    db.commit()
    return student


@pytest.fixture
def winter_monday() -> date:
    """A Monday in January, when Europe/London is on UTC."""
    return date(2025, 1, 13)


@pytest.fixture
def make_token():
    return create_test_token
