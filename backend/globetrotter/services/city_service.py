"""
City service: cities as ordered stops within a trip.
"""
import logging
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from globetrotter.core.errors import InvalidArgumentError
from globetrotter.db.session import transaction
from globetrotter.models.catalog import PopularDestination
from globetrotter.models.city import City
from globetrotter.schemas.city import CityCreate, CityUpdate
from globetrotter.services import ordering
from globetrotter.services.ownership import Access, ResourceKind, guard
from globetrotter.services.trip_service import check_date_range

logger = logging.getLogger(__name__)

# City columns that an explicit null in a patch must not clear
REQUIRED_FIELDS = {"name", "country", "arrival_date", "departure_date"}


def _check_transport_cost(cost) -> None:
    if cost is not None and cost < 0:
        raise InvalidArgumentError("Transport cost must not be negative")


def add_city(actor_id: int, city_data: CityCreate, db: Session) -> City:
    """Append a city to the end of the trip's itinerary."""
    guard(actor_id, ResourceKind.TRIP, city_data.trip_id, Access.WRITE, db)
    check_date_range(city_data.arrival_date, city_data.departure_date, label="City")
    _check_transport_cost(city_data.transport_cost)

    city = City(**city_data.model_dump())
    with transaction(db):
        ordering.append(city, db)
    db.refresh(city)

    logger.info(f"Added city {city.id} to trip {city.trip_id} at order {city.order}")
    return city


def list_cities(trip_id: int, requester_id: Optional[int], db: Session) -> List[City]:
    """Cities of a trip in itinerary order, each with its activities."""
    guard(requester_id, ResourceKind.TRIP, trip_id, Access.READ, db)
    return db.query(City).options(selectinload(City.activities)).filter(
        City.trip_id == trip_id
    ).order_by(City.order, City.id).all()


def get_city(city_id: int, requester_id: Optional[int], db: Session) -> City:
    """Get a single city."""
    city, _ = guard(requester_id, ResourceKind.CITY, city_id, Access.READ, db)
    return city


def update_city(city_id: int, actor_id: int, patch: CityUpdate, db: Session) -> City:
    """Apply the whitelisted fields that were set in `patch`."""
    city, _ = guard(actor_id, ResourceKind.CITY, city_id, Access.WRITE, db)

    changes = patch.model_dump(exclude_unset=True)
    check_date_range(
        changes.get("arrival_date", city.arrival_date),
        changes.get("departure_date", city.departure_date),
        label="City",
    )
    _check_transport_cost(changes.get("transport_cost"))

    with transaction(db):
        for field, value in changes.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            setattr(city, field, value)
    db.refresh(city)
    return city


def delete_city(city_id: int, actor_id: int, db: Session) -> None:
    """Delete a city and its activities. Remaining cities keep their order values."""
    city, _ = guard(actor_id, ResourceKind.CITY, city_id, Access.WRITE, db)
    ordering.remove(city, db)
    logger.info(f"User {actor_id} deleted city {city_id}")


def reorder_cities(trip_id: int, actor_id: int, ordered_ids: List[int], db: Session) -> List[City]:
    """Rewrite the trip's city order from a complete list of its city ids."""
    guard(actor_id, ResourceKind.TRIP, trip_id, Access.WRITE, db)
    return ordering.reorder(City, trip_id, ordered_ids, db)


def search_destinations(query: str, limit: int = 10, db: Session = None) -> List[PopularDestination]:
    """Destinations whose name or country contains `query`, most popular first."""
    pattern = f"%{query.lower()}%"
    return db.query(PopularDestination).filter(
        or_(
            func.lower(PopularDestination.name).like(pattern),
            func.lower(PopularDestination.country).like(pattern),
        )
    ).order_by(PopularDestination.popularity.desc()).limit(limit).all()


def popular_destinations(limit: int = 10, db: Session = None) -> List[PopularDestination]:
    """Most popular destinations."""
    return db.query(PopularDestination).order_by(
        PopularDestination.popularity.desc()
    ).limit(limit).all()
