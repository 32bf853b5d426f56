"""
Trip service: the trip aggregate root.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from globetrotter.core.config import settings
from globetrotter.core.errors import InvalidArgumentError, NotFoundError
from globetrotter.db.session import transaction
from globetrotter.models.activity import Activity
from globetrotter.models.budget import Budget
from globetrotter.models.city import City
from globetrotter.models.expense import Expense
from globetrotter.models.trip import Trip, TripStatus
from globetrotter.schemas.trip import TripCreate, TripUpdate
from globetrotter.services.ownership import Access, ResourceKind, authorize, guard

logger = logging.getLogger(__name__)

# Trip columns that an explicit null in a patch must not clear
REQUIRED_FIELDS = {"name", "start_date", "end_date", "status", "is_public", "currency", "tags"}


def check_date_range(start: date, end: date, label: str = "Trip") -> None:
    """Reject a range whose end falls before its start."""
    if start and end and end < start:
        raise InvalidArgumentError(f"{label} end date must not be before start date")


def _graph_query(db: Session):
    """Trip query that eagerly loads cities, activities, budget and expenses."""
    return db.query(Trip).options(
        selectinload(Trip.cities).selectinload(City.activities),
        selectinload(Trip.budget).selectinload(Budget.expenses),
    )


def load_trip_graph(trip_id: int, db: Session) -> Trip:
    """Load a trip with its whole graph, without any access check."""
    trip = _graph_query(db).filter(Trip.id == trip_id).first()
    if not trip:
        raise NotFoundError("Trip")
    return trip


def create_trip(owner_id: int, trip_data: TripCreate, db: Session) -> Trip:
    """Create a private trip with no cities and no budget."""
    check_date_range(trip_data.start_date, trip_data.end_date)

    new_trip = Trip(
        user_id=owner_id,
        name=trip_data.name,
        description=trip_data.description,
        cover_image=trip_data.cover_image,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        status=TripStatus.PLANNING,
        is_public=False,
        total_budget=trip_data.total_budget,
        currency=(trip_data.currency or settings.DEFAULT_CURRENCY).upper(),
        tags=list(trip_data.tags or []),
    )
    with transaction(db):
        db.add(new_trip)
    db.refresh(new_trip)

    logger.info(f"User {owner_id} created trip {new_trip.id}")
    return new_trip


def get_trip(trip_id: int, requester_id: Optional[int], db: Session) -> Trip:
    """
    Read a trip with ordered cities (each with ordered activities) and the
    budget with its expenses. Anonymous requesters may read public trips.
    """
    trip = load_trip_graph(trip_id, db)
    authorize(requester_id, trip, Access.READ)
    return trip


def update_trip(trip_id: int, actor_id: int, patch: TripUpdate, db: Session) -> Trip:
    """Apply the whitelisted fields that were set in `patch`."""
    trip, _ = guard(actor_id, ResourceKind.TRIP, trip_id, Access.WRITE, db)

    changes = patch.model_dump(exclude_unset=True)
    check_date_range(
        changes.get("start_date", trip.start_date),
        changes.get("end_date", trip.end_date),
    )
    if changes.get("total_budget") is not None and changes["total_budget"] < 0:
        raise InvalidArgumentError("Total budget must not be negative")
    if "currency" in changes and changes["currency"]:
        changes["currency"] = changes["currency"].upper()

    with transaction(db):
        for field, value in changes.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            setattr(trip, field, value)

    return load_trip_graph(trip_id, db)


def delete_trip_graph(trip_id: int, db: Session) -> None:
    """
    Delete a trip and everything under it, leaf tables first, so it also
    works on stores without ON DELETE CASCADE. Caller owns the transaction.
    """
    budget_ids = select(Budget.id).where(Budget.trip_id == trip_id)
    city_ids = select(City.id).where(City.trip_id == trip_id)

    db.query(Expense).filter(Expense.budget_id.in_(budget_ids)).delete(synchronize_session="fetch")
    db.query(Budget).filter(Budget.trip_id == trip_id).delete(synchronize_session="fetch")
    db.query(Activity).filter(Activity.city_id.in_(city_ids)).delete(synchronize_session="fetch")
    db.query(City).filter(City.trip_id == trip_id).delete(synchronize_session="fetch")
    db.query(Trip).filter(Trip.id == trip_id).delete(synchronize_session="fetch")


def delete_trip(trip_id: int, actor_id: int, db: Session) -> None:
    """Delete a trip with its cities, activities, budget and expenses."""
    guard(actor_id, ResourceKind.TRIP, trip_id, Access.WRITE, db)
    with transaction(db):
        delete_trip_graph(trip_id, db)
    logger.info(f"User {actor_id} deleted trip {trip_id}")


def list_trips_for_user(
    owner_id: int,
    page: int = 1,
    page_size: int = 10,
    status: Optional[TripStatus] = None,
    db: Session = None
) -> Tuple[List[Trip], int]:
    """Page of the owner's trips, newest start date first, plus the total count."""
    page = max(page, 1)
    query = db.query(Trip).filter(Trip.user_id == owner_id)
    if status:
        query = query.filter(Trip.status == status)

    total = query.count()
    trips = query.order_by(Trip.start_date.desc(), Trip.id.desc()).offset(
        (page - 1) * page_size
    ).limit(page_size).all()
    return trips, total


def list_upcoming_trips(owner_id: int, limit: int = 5, db: Session = None) -> List[Trip]:
    """Owner's trips still ahead of today that are being planned or are upcoming."""
    return db.query(Trip).filter(
        Trip.user_id == owner_id,
        Trip.start_date >= date.today(),
        Trip.status.in_([TripStatus.PLANNING, TripStatus.UPCOMING]),
    ).order_by(Trip.start_date.asc()).limit(limit).all()
