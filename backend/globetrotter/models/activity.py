"""
Activity model, an ordered item within a city.
"""
from sqlalchemy import Column, String, Date, Time, Float, Text, Numeric, Boolean, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from globetrotter.db.base import BaseModel
import enum


class ActivityCategory(str, enum.Enum):
    """Activity category enumeration."""
    SIGHTSEEING = "SIGHTSEEING"
    FOOD = "FOOD"
    ADVENTURE = "ADVENTURE"
    CULTURE = "CULTURE"
    SHOPPING = "SHOPPING"
    NIGHTLIFE = "NIGHTLIFE"
    RELAXATION = "RELAXATION"
    TRANSPORT = "TRANSPORT"
    ACCOMMODATION = "ACCOMMODATION"
    OTHER = "OTHER"


class Activity(BaseModel):
    """Planned activity in a city. `order` is unique per city."""
    __tablename__ = "activities"

    city_id = Column(Integer, ForeignKey("cities.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(SQLEnum(ActivityCategory), nullable=False)
    location = Column(String(200), nullable=True)
    address = Column(String(500), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    image = Column(String(500), nullable=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    duration = Column(Integer, nullable=True)  # Minutes
    cost = Column(Numeric(15, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="USD")
    is_booked = Column(Boolean, default=False, nullable=False)
    booking_ref = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)
    order = Column(Integer, nullable=False, default=0, index=True)

    # Relationships
    city = relationship("City", back_populates="activities")
