"""
Tests for the ownership guard.
"""
import pytest
from datetime import date

from globetrotter.core.errors import AccessDeniedError, NotFoundError
from globetrotter.models import Trip
from globetrotter.schemas.activity import ActivityCreate
from globetrotter.services import activity_service
from globetrotter.services.ownership import (
    Access, Decision, ResourceKind, authorize, decide, guard
)
from conftest import make_city


def test_decide_owner_may_read_and_write():
    trip = Trip(user_id=1, is_public=False)
    assert decide(1, trip, Access.READ) == Decision.ALLOW
    assert decide(1, trip, Access.WRITE) == Decision.ALLOW


def test_decide_public_trip_is_readable_by_anyone():
    trip = Trip(user_id=1, is_public=True)
    assert decide(2, trip, Access.READ) == Decision.ALLOW_PUBLIC
    assert decide(None, trip, Access.READ) == Decision.ALLOW_PUBLIC


def test_decide_public_trip_is_not_writable_by_others():
    trip = Trip(user_id=1, is_public=True)
    assert decide(2, trip, Access.WRITE) == Decision.DENY
    assert decide(None, trip, Access.WRITE) == Decision.DENY


def test_authorize_raises_on_private_trip():
    trip = Trip(id=7, user_id=1, is_public=False)
    with pytest.raises(AccessDeniedError):
        authorize(2, trip, Access.READ)


def test_guard_walks_activity_to_trip(db, owner, stranger, trip):
    city = make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 5))
    activity = activity_service.add_activity(owner.id, ActivityCreate(
        city_id=city.id, name="Shibuya Crossing", category="SIGHTSEEING", date=date(2025, 3, 2)
    ), db)

    resource, owning_trip = guard(owner.id, ResourceKind.ACTIVITY, activity.id, Access.WRITE, db)
    assert resource.id == activity.id
    assert owning_trip.id == trip.id

    with pytest.raises(AccessDeniedError):
        guard(stranger.id, ResourceKind.ACTIVITY, activity.id, Access.WRITE, db)


def test_guard_not_found_before_access_check(db, stranger):
    with pytest.raises(NotFoundError) as exc:
        guard(stranger.id, ResourceKind.CITY, 999, Access.WRITE, db)
    assert exc.value.resource == "City"


def test_stranger_cannot_add_city_to_foreign_trip(db, owner, stranger, trip):
    with pytest.raises(AccessDeniedError):
        make_city(db, stranger, trip, "Osaka", date(2025, 3, 1), date(2025, 3, 2))
