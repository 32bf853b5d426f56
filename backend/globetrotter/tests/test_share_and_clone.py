"""
Tests for share links and copying shared trips.
"""
import pytest
from datetime import date, time
from decimal import Decimal

from globetrotter.core.errors import NotFoundError
from globetrotter.schemas.activity import ActivityCreate
from globetrotter.schemas.budget import BudgetCreate, ExpenseCreate
from globetrotter.schemas.trip import TripUpdate
from globetrotter.services import (
    activity_service, budget_service, clone_service, share_service, trip_service
)
from conftest import make_city


@pytest.fixture
def planned_trip(db, owner, trip):
    tokyo = make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 5))
    make_city(db, owner, trip, "Kyoto", date(2025, 3, 5), date(2025, 3, 10))
    activity_service.add_activity(owner.id, ActivityCreate(
        city_id=tokyo.id, name="Teamlab", category="CULTURE", date=date(2025, 3, 3),
        start_time=time(10, 0), cost=Decimal("30")
    ), db)
    budget = budget_service.create_budget(owner.id, BudgetCreate(
        trip_id=trip.id, total_budget=Decimal("1000"), food=Decimal("250")
    ), db)
    budget_service.add_expense(budget.id, owner.id, ExpenseCreate(
        amount=Decimal("40"), category="FOOD", date=date(2025, 3, 1)
    ), db)
    return trip


def test_mint_makes_trip_public(db, owner, trip):
    link = share_service.mint_share_token(trip.id, owner.id, db)

    assert len(link["share_token"]) >= 22
    assert link["share_url"].endswith(f"/shared/{link['share_token']}")
    assert share_service.resolve_share_token(link["share_token"], db).id == trip.id


def test_remint_invalidates_previous_token(db, owner, trip):
    old = share_service.mint_share_token(trip.id, owner.id, db)["share_token"]
    new = share_service.mint_share_token(trip.id, owner.id, db)["share_token"]

    assert old != new
    with pytest.raises(NotFoundError):
        share_service.resolve_share_token(old, db)
    assert share_service.resolve_share_token(new, db).id == trip.id


def test_token_stops_resolving_when_trip_made_private(db, owner, trip):
    token = share_service.mint_share_token(trip.id, owner.id, db)["share_token"]
    trip_service.update_trip(trip.id, owner.id, TripUpdate(is_public=False), db)

    with pytest.raises(NotFoundError):
        share_service.resolve_share_token(token, db)


def test_unknown_token(db):
    with pytest.raises(NotFoundError):
        share_service.resolve_share_token("no-such-token", db)


def test_copy_is_independent_private_clone(db, owner, stranger, planned_trip):
    token = share_service.mint_share_token(planned_trip.id, owner.id, db)["share_token"]

    clone = clone_service.copy_trip(token, stranger.id, db)

    assert clone.id != planned_trip.id
    assert clone.user_id == stranger.id
    assert clone.name == "Japan 2025 (Copy)"
    assert clone.is_public is False
    assert clone.share_token is None
    assert [city.name for city in clone.cities] == ["Tokyo", "Kyoto"]
    assert clone.cities[0].activities[0].name == "Teamlab"
    assert clone.cities[0].activities[0].cost == Decimal("30")
    assert clone.budget.food == Decimal("250")
    assert clone.budget.expenses == []


def test_editing_clone_leaves_original_untouched(db, owner, stranger, planned_trip):
    token = share_service.mint_share_token(planned_trip.id, owner.id, db)["share_token"]
    clone = clone_service.copy_trip(token, stranger.id, db)

    trip_service.update_trip(clone.id, stranger.id, TripUpdate(name="My Japan"), db)
    trip_service.delete_trip(clone.id, stranger.id, db)

    original = share_service.resolve_share_token(token, db)
    assert original.name == "Japan 2025"
    assert [city.name for city in original.cities] == ["Tokyo", "Kyoto"]
    assert len(original.budget.expenses) == 1
