"""
Budget model: planned amounts for a trip.
"""
from sqlalchemy import Column, String, Numeric, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from globetrotter.db.base import BaseModel

PLANNED_CATEGORIES = (
    "accommodation",
    "transportation",
    "food",
    "activities",
    "shopping",
    "emergency",
    "other",
)


class Budget(BaseModel):
    """Budget for a trip; at most one per trip."""
    __tablename__ = "budgets"

    # unique=True is what makes concurrent creation fail deterministically
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    total_budget = Column(Numeric(15, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    accommodation = Column(Numeric(15, 2), nullable=False, default=0)
    transportation = Column(Numeric(15, 2), nullable=False, default=0)
    food = Column(Numeric(15, 2), nullable=False, default=0)
    activities = Column(Numeric(15, 2), nullable=False, default=0)
    shopping = Column(Numeric(15, 2), nullable=False, default=0)
    emergency = Column(Numeric(15, 2), nullable=False, default=0)
    other = Column(Numeric(15, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="budget")
    expenses = relationship(
        "Expense",
        back_populates="budget",
        order_by="Expense.date.desc()",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def planned_amounts(self) -> dict:
        """Planned amount per category key."""
        return {name: getattr(self, name) for name in PLANNED_CATEGORIES}
