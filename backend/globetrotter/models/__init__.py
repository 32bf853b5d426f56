"""Models package - Import all models for SQLAlchemy registration."""
from globetrotter.models.user import User, UserRole
from globetrotter.models.trip import Trip, TripStatus
from globetrotter.models.city import City
from globetrotter.models.activity import Activity, ActivityCategory
from globetrotter.models.budget import Budget, PLANNED_CATEGORIES
from globetrotter.models.expense import Expense, ExpenseCategory
from globetrotter.models.catalog import PopularDestination, ActivityTemplate

__all__ = [
    "User",
    "UserRole",
    "Trip",
    "TripStatus",
    "City",
    "Activity",
    "ActivityCategory",
    "Budget",
    "PLANNED_CATEGORIES",
    "Expense",
    "ExpenseCategory",
    "PopularDestination",
    "ActivityTemplate",
]
