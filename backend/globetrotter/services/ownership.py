"""
Ownership guard: decides whether an actor may read or write a resource.

Every resource belongs to exactly one Trip. Ownership is never stored on
descendants; it is re-derived by walking up the chain
Activity -> City -> Trip or Expense -> Budget -> Trip, with one explicit
resolver per resource kind.
"""
import enum
import logging
from typing import Callable, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from globetrotter.core.errors import AccessDeniedError, NotFoundError
from globetrotter.models.activity import Activity
from globetrotter.models.budget import Budget
from globetrotter.models.city import City
from globetrotter.models.expense import Expense
from globetrotter.models.trip import Trip

logger = logging.getLogger(__name__)


class Access(str, enum.Enum):
    """Access level required by an operation."""
    READ = "READ"
    WRITE = "WRITE"


class Decision(str, enum.Enum):
    """Outcome of an authorization check."""
    ALLOW = "ALLOW"
    ALLOW_PUBLIC = "ALLOW_PUBLIC"  # read granted only because the trip is public
    DENY = "DENY"


class ResourceKind(str, enum.Enum):
    """Resources guarded through their owning trip."""
    TRIP = "Trip"
    CITY = "City"
    ACTIVITY = "Activity"
    BUDGET = "Budget"
    EXPENSE = "Expense"


def decide(actor_id: Optional[int], trip: Trip, access: Access) -> Decision:
    """Pure decision function; never touches storage."""
    if actor_id is not None and trip.user_id == actor_id:
        return Decision.ALLOW
    if access == Access.READ and trip.is_public:
        return Decision.ALLOW_PUBLIC
    return Decision.DENY


def authorize(actor_id: Optional[int], trip: Trip, access: Access) -> Decision:
    """Raise AccessDeniedError unless the actor may perform `access` on the trip."""
    decision = decide(actor_id, trip, access)
    if decision == Decision.DENY:
        logger.warning(f"Denied {access.value} on trip {trip.id} for actor {actor_id}")
        raise AccessDeniedError()
    return decision


def _load(db: Session, model, kind: ResourceKind, resource_id: int):
    resource = db.get(model, resource_id)
    if resource is None:
        raise NotFoundError(kind.value)
    return resource


def _resolve_trip(db: Session, trip_id: int) -> Tuple[Trip, Trip]:
    trip = _load(db, Trip, ResourceKind.TRIP, trip_id)
    return trip, trip


def _resolve_city(db: Session, city_id: int) -> Tuple[City, Trip]:
    city = _load(db, City, ResourceKind.CITY, city_id)
    trip = _load(db, Trip, ResourceKind.TRIP, city.trip_id)
    return city, trip


def _resolve_activity(db: Session, activity_id: int) -> Tuple[Activity, Trip]:
    activity = _load(db, Activity, ResourceKind.ACTIVITY, activity_id)
    city = _load(db, City, ResourceKind.CITY, activity.city_id)
    trip = _load(db, Trip, ResourceKind.TRIP, city.trip_id)
    return activity, trip


def _resolve_budget(db: Session, budget_id: int) -> Tuple[Budget, Trip]:
    budget = _load(db, Budget, ResourceKind.BUDGET, budget_id)
    trip = _load(db, Trip, ResourceKind.TRIP, budget.trip_id)
    return budget, trip


def _resolve_expense(db: Session, expense_id: int) -> Tuple[Expense, Trip]:
    expense = _load(db, Expense, ResourceKind.EXPENSE, expense_id)
    budget = _load(db, Budget, ResourceKind.BUDGET, expense.budget_id)
    trip = _load(db, Trip, ResourceKind.TRIP, budget.trip_id)
    return expense, trip


RESOLVERS: Dict[ResourceKind, Callable[[Session, int], tuple]] = {
    ResourceKind.TRIP: _resolve_trip,
    ResourceKind.CITY: _resolve_city,
    ResourceKind.ACTIVITY: _resolve_activity,
    ResourceKind.BUDGET: _resolve_budget,
    ResourceKind.EXPENSE: _resolve_expense,
}


def resolve(kind: ResourceKind, resource_id: int, db: Session) -> tuple:
    """
    Load a resource and its owning trip.

    Raises NotFoundError naming the first missing link, before any
    ownership check happens.
    """
    return RESOLVERS[kind](db, resource_id)


def guard(
    actor_id: Optional[int],
    kind: ResourceKind,
    resource_id: int,
    access: Access,
    db: Session
) -> tuple:
    """Resolve a resource, authorize the actor, and return (resource, trip)."""
    resource, trip = resolve(kind, resource_id, db)
    authorize(actor_id, trip, access)
    return resource, trip
