"""
City model, an ordered stop within a trip.
"""
from sqlalchemy import Column, String, Date, Float, Text, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from globetrotter.db.base import BaseModel


class City(BaseModel):
    """City visited during a trip. `order` is unique per trip."""
    __tablename__ = "cities"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    country = Column(String(100), nullable=False)
    country_code = Column(String(3), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    image = Column(String(500), nullable=True)
    arrival_date = Column(Date, nullable=False)
    departure_date = Column(Date, nullable=False)
    order = Column(Integer, nullable=False, default=0, index=True)
    notes = Column(Text, nullable=True)
    accommodation = Column(String(200), nullable=True)
    transport_mode = Column(String(50), nullable=True)
    transport_cost = Column(Numeric(15, 2), nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="cities")
    activities = relationship(
        "Activity",
        back_populates="city",
        order_by="Activity.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def duration_days(self) -> int:
        """Length of the stay in whole days."""
        return abs((self.departure_date - self.arrival_date).days)
