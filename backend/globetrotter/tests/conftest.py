"""
Shared fixtures: an in-memory SQLite database and an API client bound to it.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import globetrotter.models  # noqa: F401
from globetrotter.core.security import get_password_hash
from globetrotter.db.base import Base
from globetrotter.db.session import build_engine, get_db
from globetrotter.main import app
from globetrotter.models import Trip, User
from globetrotter.schemas.city import CityCreate
from globetrotter.schemas.trip import TripCreate
from globetrotter.services import city_service, trip_service

engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email: str) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash("secret-password"),
        first_name="Test",
        last_name="User",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_trip(db, owner: User, name: str = "Japan 2025") -> Trip:
    return trip_service.create_trip(
        owner.id,
        TripCreate(name=name, start_date=date(2025, 3, 1), end_date=date(2025, 3, 10)),
        db,
    )


def make_city(db, owner: User, trip: Trip, name: str, arrival: date, departure: date):
    return city_service.add_city(
        owner.id,
        CityCreate(trip_id=trip.id, name=name, country="Japan", arrival_date=arrival, departure_date=departure),
        db,
    )


@pytest.fixture
def owner(db):
    return make_user(db, "owner@example.com")


@pytest.fixture
def stranger(db):
    return make_user(db, "stranger@example.com")


@pytest.fixture
def trip(db, owner):
    return make_trip(db, owner)
