"""
Pydantic schemas for City entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from globetrotter.schemas.activity import ActivityResponse


class CityFields(BaseModel):
    """Descriptive city fields shared by create and response."""
    name: str
    country: str
    country_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image: Optional[str] = None
    arrival_date: date
    departure_date: date
    notes: Optional[str] = None
    accommodation: Optional[str] = None
    transport_mode: Optional[str] = None
    transport_cost: Optional[Decimal] = None


class CityCreate(CityFields):
    """Schema for adding a city to a trip."""
    trip_id: int


class CityUpdate(BaseModel):
    """Whitelisted mutable city fields; order changes go through reorder."""
    name: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image: Optional[str] = None
    arrival_date: Optional[date] = None
    departure_date: Optional[date] = None
    notes: Optional[str] = None
    accommodation: Optional[str] = None
    transport_mode: Optional[str] = None
    transport_cost: Optional[Decimal] = None


class CityResponse(CityFields):
    """Schema for city response."""
    id: int
    trip_id: int
    order: int
    duration_days: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CityDetailResponse(CityResponse):
    """City with its ordered activities."""
    activities: List[ActivityResponse] = []


class DestinationResponse(BaseModel):
    """Schema for popular destination catalog entries."""
    id: int
    name: str
    country: str
    country_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image: Optional[str] = None
    description: Optional[str] = None
    popularity: int

    class Config:
        from_attributes = True
