"""
User service: registration, credential checks, profiles, stats and account removal.
"""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from globetrotter.core.errors import ConflictError, NotFoundError
from globetrotter.core.security import get_password_hash, verify_password
from globetrotter.db.session import transaction
from globetrotter.models.budget import PLANNED_CATEGORIES
from globetrotter.models.city import City
from globetrotter.models.trip import Trip, TripStatus
from globetrotter.models.user import User
from globetrotter.schemas.user import UserCreate, UserStats, UserUpdate
from globetrotter.services.trip_service import delete_trip_graph

logger = logging.getLogger(__name__)


def register_user(user_data: UserCreate, db: Session) -> User:
    """Create a user; emails are unique (case-insensitive)."""
    email = user_data.email.lower()
    if db.query(User.id).filter(User.email == email).first():
        raise ConflictError("Email already exists")

    new_user = User(
        email=email,
        hashed_password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
    )
    with transaction(db):
        db.add(new_user)
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id}")
    return new_user


def authenticate_user(email: str, password: str, db: Session) -> Optional[User]:
    """Return the user if the credentials match, else None."""
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def delete_user(user_id: int, db: Session) -> None:
    """Delete a user together with every trip graph they own."""
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User")

    trip_ids = [row.id for row in db.query(Trip.id).filter(Trip.user_id == user_id).all()]
    with transaction(db):
        for trip_id in trip_ids:
            delete_trip_graph(trip_id, db)
        db.delete(user)

    logger.info(f"Deleted user {user_id} and {len(trip_ids)} trips")


def update_profile(user_id: int, patch: UserUpdate, db: Session) -> User:
    """Apply the profile fields that were set in `patch`; names cannot be cleared."""
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User")

    with transaction(db):
        for field, value in patch.model_dump(exclude_unset=True).items():
            if value is None and field in ("first_name", "last_name"):
                continue
            setattr(user, field, value)
    db.refresh(user)
    return user


def user_stats(user_id: int, db: Session) -> UserStats:
    """
    Counts over every trip the user owns.

    Upcoming covers trips still being planned. Planned spend sums each
    budget's category amounts, leaving out the emergency reserve.
    """
    trips = db.query(Trip).options(
        selectinload(Trip.cities).selectinload(City.activities),
        selectinload(Trip.budget),
    ).filter(Trip.user_id == user_id).all()

    cities = [city for trip in trips for city in trip.cities]
    spend_categories = [name for name in PLANNED_CATEGORIES if name != "emergency"]
    planned_spend = sum(
        (Decimal(getattr(trip.budget, name) or 0) for trip in trips if trip.budget for name in spend_categories),
        Decimal(0)
    )

    return UserStats(
        total_trips=len(trips),
        completed_trips=sum(1 for trip in trips if trip.status == TripStatus.COMPLETED),
        upcoming_trips=sum(1 for trip in trips if trip.status in (TripStatus.PLANNING, TripStatus.UPCOMING)),
        total_cities=len(cities),
        unique_countries=len({city.country for city in cities}),
        total_activities=sum(len(city.activities) for city in cities),
        total_planned_spend=planned_spend,
    )
