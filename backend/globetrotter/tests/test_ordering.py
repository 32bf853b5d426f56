"""
Tests for ordered cities and activities.
"""
import pytest
from datetime import date

from globetrotter.core.errors import InvalidReorderError
from globetrotter.models import City
from globetrotter.schemas.activity import ActivityCreate
from globetrotter.services import activity_service, city_service, ordering
from conftest import make_city, make_trip


@pytest.fixture
def three_cities(db, owner, trip):
    return [
        make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 4)),
        make_city(db, owner, trip, "Kyoto", date(2025, 3, 4), date(2025, 3, 7)),
        make_city(db, owner, trip, "Osaka", date(2025, 3, 7), date(2025, 3, 10)),
    ]


def test_append_assigns_increasing_order(three_cities):
    assert [city.order for city in three_cities] == [0, 1, 2]


def test_delete_leaves_gap_and_append_goes_after_max(db, owner, trip, three_cities):
    city_service.delete_city(three_cities[1].id, owner.id, db)
    nara = make_city(db, owner, trip, "Nara", date(2025, 3, 9), date(2025, 3, 10))

    orders = [city.order for city in ordering.siblings(City, trip.id, db)]
    assert orders == [0, 2, 3]
    assert nara.order == 3


def test_reorder_full_permutation(db, owner, trip, three_cities):
    tokyo, kyoto, osaka = three_cities
    result = city_service.reorder_cities(trip.id, owner.id, [osaka.id, tokyo.id, kyoto.id], db)

    assert [city.name for city in result] == ["Osaka", "Tokyo", "Kyoto"]
    assert [city.order for city in result] == [0, 1, 2]


@pytest.mark.parametrize("mutate", [
    lambda ids: ids[:2],
    lambda ids: ids + [ids[0]],
    lambda ids: [ids[0], ids[0], ids[1]],
])
def test_invalid_reorder_writes_nothing(db, owner, trip, three_cities, mutate):
    ids = [city.id for city in three_cities]

    with pytest.raises(InvalidReorderError):
        city_service.reorder_cities(trip.id, owner.id, mutate(list(reversed(ids))), db)

    assert [city.id for city in ordering.siblings(City, trip.id, db)] == ids


def test_reorder_rejects_city_of_another_trip(db, owner, trip, three_cities):
    other_trip = make_trip(db, owner, name="Elsewhere")
    foreign = make_city(db, owner, other_trip, "Seoul", date(2025, 3, 1), date(2025, 3, 2))
    ids = [city.id for city in three_cities]

    with pytest.raises(InvalidReorderError):
        city_service.reorder_cities(trip.id, owner.id, ids[:2] + [foreign.id], db)


def test_activities_are_ordered_within_city(db, owner, trip):
    city = make_city(db, owner, trip, "Tokyo", date(2025, 3, 1), date(2025, 3, 5))
    names = ["Senso-ji", "Tsukiji", "Shibuya"]
    created = [
        activity_service.add_activity(owner.id, ActivityCreate(
            city_id=city.id, name=name, category="SIGHTSEEING", date=date(2025, 3, 2)
        ), db)
        for name in names
    ]
    assert [activity.order for activity in created] == [0, 1, 2]

    reordered = activity_service.reorder_activities(
        city.id, owner.id, [created[2].id, created[0].id, created[1].id], db
    )
    assert [activity.name for activity in reordered] == ["Shibuya", "Senso-ji", "Tsukiji"]
