"""
Trip cloner: deep-copies a shared trip into a new trip for another user.
"""
import logging

from sqlalchemy.orm import Session

from globetrotter.db.session import transaction
from globetrotter.models.activity import Activity
from globetrotter.models.budget import Budget, PLANNED_CATEGORIES
from globetrotter.models.city import City
from globetrotter.models.trip import Trip, TripStatus
from globetrotter.services.share_service import resolve_share_token
from globetrotter.services.trip_service import load_trip_graph

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"

TRIP_FIELDS = ("description", "cover_image", "start_date", "end_date", "total_budget", "currency")
CITY_FIELDS = (
    "name", "country", "country_code", "latitude", "longitude", "image",
    "arrival_date", "departure_date", "order", "notes", "accommodation",
    "transport_mode", "transport_cost",
)
ACTIVITY_FIELDS = (
    "name", "description", "category", "location", "address", "latitude",
    "longitude", "image", "date", "start_time", "end_time", "duration",
    "cost", "currency", "notes", "order",
)


def _copy_fields(source, fields) -> dict:
    return {field: getattr(source, field) for field in fields}


def _clone_activity(activity: Activity) -> Activity:
    return Activity(**_copy_fields(activity, ACTIVITY_FIELDS))


def _clone_city(city: City) -> City:
    clone = City(**_copy_fields(city, CITY_FIELDS))
    clone.activities = [_clone_activity(activity) for activity in city.activities]
    return clone


def _clone_budget(budget: Budget) -> Budget:
    # Expenses are the original owner's history and stay behind.
    return Budget(**_copy_fields(budget, ("total_budget", "currency", "notes") + PLANNED_CATEGORIES))


def copy_trip(share_token: str, new_owner_id: int, db: Session) -> Trip:
    """
    Copy the trip behind `share_token` into a private trip owned by
    `new_owner_id`.

    Cities and activities keep their order values, so relative order is
    preserved. The whole graph is committed at once or not at all.
    """
    original = resolve_share_token(share_token, db)

    clone = Trip(
        user_id=new_owner_id,
        name=f"{original.name}{COPY_SUFFIX}",
        status=TripStatus.PLANNING,
        is_public=False,
        share_token=None,
        tags=list(original.tags or []),
        **_copy_fields(original, TRIP_FIELDS)
    )
    clone.cities = [_clone_city(city) for city in original.cities]
    if original.budget is not None:
        clone.budget = _clone_budget(original.budget)

    with transaction(db):
        db.add(clone)

    logger.info(f"User {new_owner_id} copied trip {original.id} into trip {clone.id}")
    return load_trip_graph(clone.id, db)
