"""
Tests for the trip aggregate.
"""
import pytest
from datetime import date, timedelta
from decimal import Decimal

from globetrotter.core.errors import AccessDeniedError, InvalidArgumentError, NotFoundError
from globetrotter.models import Activity, Budget, City, Expense, TripStatus
from globetrotter.schemas.activity import ActivityCreate
from globetrotter.schemas.budget import BudgetCreate, ExpenseCreate
from globetrotter.schemas.trip import TripCreate, TripUpdate
from globetrotter.schemas.city import CityUpdate
from globetrotter.services import activity_service, budget_service, city_service, trip_service
from conftest import make_city, make_trip


def test_create_trip_is_private_and_empty(db, owner, trip):
    assert trip.user_id == owner.id
    assert trip.is_public is False
    assert trip.status == TripStatus.PLANNING
    assert trip.cities == []
    assert trip.budget is None


def test_create_trip_rejects_reversed_dates(db, owner):
    with pytest.raises(InvalidArgumentError):
        trip_service.create_trip(owner.id, TripCreate(
            name="Backwards", start_date=date(2025, 3, 10), end_date=date(2025, 3, 1)
        ), db)


def test_private_trip_hidden_from_others(db, owner, stranger, trip):
    with pytest.raises(AccessDeniedError):
        trip_service.get_trip(trip.id, stranger.id, db)
    with pytest.raises(AccessDeniedError):
        trip_service.get_trip(trip.id, None, db)


def test_public_trip_readable_but_not_writable(db, owner, stranger, trip):
    trip_service.update_trip(trip.id, owner.id, TripUpdate(is_public=True), db)

    assert trip_service.get_trip(trip.id, None, db).id == trip.id
    with pytest.raises(AccessDeniedError):
        trip_service.update_trip(trip.id, stranger.id, TripUpdate(name="Mine now"), db)


def test_update_ignores_null_for_required_fields(db, owner, trip):
    updated = trip_service.update_trip(trip.id, owner.id, TripUpdate(name=None, description="Cherry blossoms"), db)
    assert updated.name == "Japan 2025"
    assert updated.description == "Cherry blossoms"


def test_update_rejects_end_before_existing_start(db, owner, trip):
    with pytest.raises(InvalidArgumentError):
        trip_service.update_trip(trip.id, owner.id, TripUpdate(end_date=date(2025, 2, 1)), db)


def test_get_trip_returns_ordered_graph(db, owner, trip):
    make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 5))
    make_city(db, owner, trip, "Kyoto", date(2025, 3, 5), date(2025, 3, 10))

    loaded = trip_service.get_trip(trip.id, owner.id, db)
    assert [city.name for city in loaded.cities] == ["Tokyo", "Kyoto"]
    assert loaded.cities[0].duration_days == 4


def test_delete_trip_removes_whole_graph(db, owner, trip):
    city = make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 5))
    activity_service.add_activity(owner.id, ActivityCreate(
        city_id=city.id, name="Senso-ji", category="CULTURE", date=date(2025, 3, 2)
    ), db)
    budget = budget_service.create_budget(owner.id, BudgetCreate(trip_id=trip.id, total_budget=Decimal("1000")), db)
    budget_service.add_expense(budget.id, owner.id, ExpenseCreate(
        amount=Decimal("20"), category="FOOD", date=date(2025, 3, 2)
    ), db)

    trip_service.delete_trip(trip.id, owner.id, db)

    with pytest.raises(NotFoundError):
        trip_service.get_trip(trip.id, owner.id, db)
    for model in (City, Activity, Budget, Expense):
        assert db.query(model).count() == 0


def test_list_trips_newest_first_with_total(db, owner):
    make_trip(db, owner, name="First")
    later = trip_service.create_trip(owner.id, TripCreate(
        name="Later", start_date=date(2026, 1, 1), end_date=date(2026, 1, 5)
    ), db)

    trips, total = trip_service.list_trips_for_user(owner.id, page=1, page_size=1, db=db)
    assert total == 2
    assert [t.id for t in trips] == [later.id]


def test_activities_by_day_groups_by_date(db, owner, trip):
    tokyo = make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 5))
    kyoto = make_city(db, owner, trip, "Kyoto", date(2025, 3, 5), date(2025, 3, 10))
    for city, name, day in [
        (kyoto, "Fushimi Inari", date(2025, 3, 6)),
        (tokyo, "Tsukiji", date(2025, 3, 2)),
        (tokyo, "Shibuya", date(2025, 3, 2)),
    ]:
        activity_service.add_activity(owner.id, ActivityCreate(
            city_id=city.id, name=name, category="SIGHTSEEING", date=day
        ), db)

    by_day = activity_service.activities_by_day(trip.id, owner.id, db)
    assert list(by_day) == ["2025-03-02", "2025-03-06"]
    assert [item["activity"].name for item in by_day["2025-03-02"]] == ["Tsukiji", "Shibuya"]
    assert by_day["2025-03-06"][0]["city"]["name"] == "Kyoto"


def test_list_upcoming_filters_past_and_status_and_sorts_ascending(db, owner):
    today = date.today()

    def dated_trip(name, offset):
        start = today + timedelta(days=offset)
        return trip_service.create_trip(owner.id, TripCreate(
            name=name, start_date=start, end_date=start + timedelta(days=3)
        ), db)

    dated_trip("Past", -30)
    done = dated_trip("Completed", 5)
    trip_service.update_trip(done.id, owner.id, TripUpdate(status=TripStatus.COMPLETED), db)
    later = dated_trip("Later", 60)
    sooner = dated_trip("Sooner", 10)
    today_trip = dated_trip("Today", 0)

    upcoming = trip_service.list_upcoming_trips(owner.id, limit=5, db=db)
    assert [t.id for t in upcoming] == [today_trip.id, sooner.id, later.id]

    assert [t.id for t in trip_service.list_upcoming_trips(owner.id, limit=1, db=db)] == [today_trip.id]


def test_update_city_checks_dates_against_stored_values(db, owner, trip):
    city = make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 5))

    with pytest.raises(InvalidArgumentError):
        city_service.update_city(city.id, owner.id, CityUpdate(departure_date=date(2025, 2, 28)), db)

    moved = city_service.update_city(city.id, owner.id, CityUpdate(arrival_date=date(2025, 3, 3)), db)
    assert moved.arrival_date == date(2025, 3, 3)
    assert moved.duration_days == 2

    kept = city_service.update_city(city.id, owner.id, CityUpdate(departure_date=None, notes="Shinjuku hotel"), db)
    assert kept.departure_date == date(2025, 3, 5)
    assert kept.notes == "Shinjuku hotel"
