"""
Trip model, root of the itinerary aggregate.
"""
from sqlalchemy import Column, String, Date, Boolean, Text, Numeric, JSON, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from globetrotter.db.base import BaseModel
import enum


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    PLANNING = "PLANNING"
    UPCOMING = "UPCOMING"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Trip(BaseModel):
    """Trip owned by a single user; owns ordered cities and at most one budget."""
    __tablename__ = "trips"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    cover_image = Column(String(500), nullable=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    status = Column(SQLEnum(TripStatus), default=TripStatus.PLANNING, nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)
    share_token = Column(String(64), unique=True, nullable=True, index=True)
    total_budget = Column(Numeric(15, 2), nullable=True)  # Planning hint, the Budget row is authoritative
    currency = Column(String(3), nullable=False, default="USD")
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    owner = relationship("User", back_populates="trips")
    cities = relationship(
        "City",
        back_populates="trip",
        order_by="City.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    budget = relationship(
        "Budget",
        back_populates="trip",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
