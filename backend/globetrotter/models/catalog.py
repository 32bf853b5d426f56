"""
Read-only reference catalogs used to seed city and activity forms.
"""
from sqlalchemy import Column, String, Float, Text, Numeric, Integer, Enum as SQLEnum
from globetrotter.db.base import BaseModel
from globetrotter.models.activity import ActivityCategory


class PopularDestination(BaseModel):
    """Well-known destination suggested when adding a city."""
    __tablename__ = "popular_destinations"

    name = Column(String(200), nullable=False, index=True)
    country = Column(String(100), nullable=False, index=True)
    country_code = Column(String(3), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    image = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    popularity = Column(Integer, nullable=False, default=0)


class ActivityTemplate(BaseModel):
    """Suggested activity for a destination."""
    __tablename__ = "activity_templates"

    destination = Column(String(200), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(SQLEnum(ActivityCategory), nullable=False)
    estimated_cost = Column(Numeric(15, 2), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    duration = Column(Integer, nullable=True)  # Minutes
    rating = Column(Float, nullable=True)
