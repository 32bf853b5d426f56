"""
Activity service: activities as ordered items within a city.
"""
import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from globetrotter.core.config import settings
from globetrotter.core.errors import InvalidArgumentError
from globetrotter.db.session import transaction
from globetrotter.models.activity import Activity, ActivityCategory
from globetrotter.models.catalog import ActivityTemplate
from globetrotter.models.city import City
from globetrotter.schemas.activity import ActivityCreate, ActivityUpdate
from globetrotter.services import ordering
from globetrotter.services.ownership import Access, ResourceKind, guard

logger = logging.getLogger(__name__)

# Activity columns that an explicit null in a patch must not clear
REQUIRED_FIELDS = {"name", "category", "date", "cost", "currency", "is_booked"}


def _check_cost(cost) -> None:
    if cost is not None and cost < 0:
        raise InvalidArgumentError("Activity cost must not be negative")


def add_activity(actor_id: int, activity_data: ActivityCreate, db: Session) -> Activity:
    """Append an activity to the end of the city's list."""
    guard(actor_id, ResourceKind.CITY, activity_data.city_id, Access.WRITE, db)
    _check_cost(activity_data.cost)

    values = activity_data.model_dump()
    values["cost"] = activity_data.cost if activity_data.cost is not None else Decimal(0)
    values["currency"] = (activity_data.currency or settings.DEFAULT_CURRENCY).upper()
    activity = Activity(**values)

    with transaction(db):
        ordering.append(activity, db)
    db.refresh(activity)

    logger.info(f"Added activity {activity.id} to city {activity.city_id} at order {activity.order}")
    return activity


def list_activities(city_id: int, requester_id: Optional[int], db: Session) -> List[Activity]:
    """Activities of a city in their list order."""
    guard(requester_id, ResourceKind.CITY, city_id, Access.READ, db)
    return ordering.siblings(Activity, city_id, db)


def get_activity(activity_id: int, requester_id: Optional[int], db: Session) -> Activity:
    """Get a single activity."""
    activity, _ = guard(requester_id, ResourceKind.ACTIVITY, activity_id, Access.READ, db)
    return activity


def update_activity(activity_id: int, actor_id: int, patch: ActivityUpdate, db: Session) -> Activity:
    """Apply the whitelisted fields that were set in `patch`."""
    activity, _ = guard(actor_id, ResourceKind.ACTIVITY, activity_id, Access.WRITE, db)

    changes = patch.model_dump(exclude_unset=True)
    _check_cost(changes.get("cost"))
    if changes.get("currency"):
        changes["currency"] = changes["currency"].upper()

    with transaction(db):
        for field, value in changes.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            setattr(activity, field, value)
    db.refresh(activity)
    return activity


def delete_activity(activity_id: int, actor_id: int, db: Session) -> None:
    """Delete an activity. Remaining activities keep their order values."""
    activity, _ = guard(actor_id, ResourceKind.ACTIVITY, activity_id, Access.WRITE, db)
    ordering.remove(activity, db)
    logger.info(f"User {actor_id} deleted activity {activity_id}")


def reorder_activities(city_id: int, actor_id: int, ordered_ids: List[int], db: Session) -> List[Activity]:
    """Rewrite the city's activity order from a complete list of its activity ids."""
    guard(actor_id, ResourceKind.CITY, city_id, Access.WRITE, db)
    return ordering.reorder(Activity, city_id, ordered_ids, db)


def activities_by_day(trip_id: int, requester_id: Optional[int], db: Session) -> Dict[str, List[dict]]:
    """
    Every activity of a trip grouped under its ISO date.

    Days are sorted; within a day, activities follow city order, then start
    time, then their own order.
    """
    guard(requester_id, ResourceKind.TRIP, trip_id, Access.READ, db)

    rows = db.query(Activity, City).join(City, Activity.city_id == City.id).filter(
        City.trip_id == trip_id
    ).order_by(
        Activity.date, City.order, Activity.start_time, Activity.order
    ).all()

    by_day: Dict[str, List[dict]] = OrderedDict()
    for activity, city in rows:
        by_day.setdefault(activity.date.isoformat(), []).append({
            "activity": activity,
            "city": {"id": city.id, "name": city.name, "country": city.country},
        })
    return by_day


def search_activity_templates(
    destination: str,
    category: Optional[ActivityCategory] = None,
    limit: int = 20,
    db: Session = None
) -> List[ActivityTemplate]:
    """Templates for a destination, best rated first."""
    query = db.query(ActivityTemplate).filter(
        func.lower(ActivityTemplate.destination).like(f"%{destination.lower()}%")
    )
    if category:
        query = query.filter(ActivityTemplate.category == category)
    return query.order_by(ActivityTemplate.rating.desc()).limit(limit).all()


def activity_categories() -> List[str]:
    """All activity categories."""
    return [category.value for category in ActivityCategory]
