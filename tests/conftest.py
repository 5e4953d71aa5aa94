"""
Shared fixtures: an in-memory database recreated for every test, a clock
frozen on TODAY, and helpers to create accounts and hotels.
"""
import os

# Must be set before config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["TIMEZONE"] = "Europe/Paris"

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from app import app
from core.clock import FixedClock
from core.database import SessionLocal, drop_db, init_db
from core.dependencies import get_clock
from core.security import issue_token_for
from utils.hotel_manager import HotelManager
from utils.user_manager import UserManager

TODAY = date(2025, 6, 15)


def day(offset: int) -> str:
    """ISO datetime ``offset`` days from TODAY, at noon local time."""
    return (TODAY + timedelta(days=offset)).isoformat() + "T12:00:00"


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def db():
    drop_db()
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db, clock):
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create a user directly in the directory and return (user, headers)."""
    users = UserManager(db)
    counter = {"n": 0}

    def _make(role="user", email=None, pseudo=None, password="password123"):
        counter["n"] += 1
        user = users.create_user(
            email=email or f"{role}{counter['n']}@test.com",
            pseudo=pseudo or f"{role}{counter['n']}",
            password=password,
            role=role,
        )
        return user, auth_headers(issue_token_for(user))

    return _make


@pytest.fixture
def hotel(db):
    return HotelManager(db).create_hotel(
        name="Test Hotel",
        location="Paris",
        description="This is a test hotel description that is long enough",
        picture_list=["test1.jpg", "test2.jpg"],
    )


@pytest.fixture
def booking_payload(hotel):
    return {
        "hotel": hotel.id,
        "checkIn": day(1),
        "checkOut": day(2),
        "numberOfGuests": 2,
        "totalPrice": 200,
        "specialRequests": "Test request",
    }
