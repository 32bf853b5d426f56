"""
Pydantic schemas for Activity entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date as dt_date, datetime, time as dt_time
from decimal import Decimal
from globetrotter.models.activity import ActivityCategory


class ActivityFields(BaseModel):
    """Descriptive activity fields shared by create and response."""
    name: str
    description: Optional[str] = None
    category: ActivityCategory
    location: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image: Optional[str] = None
    date: dt_date
    start_time: Optional[dt_time] = None
    end_time: Optional[dt_time] = None
    duration: Optional[int] = None
    notes: Optional[str] = None


class ActivityCreate(ActivityFields):
    """Schema for activity creation."""
    city_id: int
    cost: Optional[Decimal] = None
    currency: Optional[str] = None


class ActivityUpdate(BaseModel):
    """Whitelisted mutable activity fields; order changes go through reorder."""
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ActivityCategory] = None
    location: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image: Optional[str] = None
    date: Optional[dt_date] = None
    start_time: Optional[dt_time] = None
    end_time: Optional[dt_time] = None
    duration: Optional[int] = None
    cost: Optional[Decimal] = None
    currency: Optional[str] = None
    is_booked: Optional[bool] = None
    booking_ref: Optional[str] = None
    notes: Optional[str] = None
    rating: Optional[int] = None


class ActivityResponse(ActivityFields):
    """Schema for activity response."""
    id: int
    city_id: int
    cost: Decimal
    currency: str
    is_booked: bool
    booking_ref: Optional[str] = None
    rating: Optional[int] = None
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ActivityCityRef(BaseModel):
    """City an activity belongs to, for day-grouped views."""
    id: int
    name: str
    country: str


class ActivityDayItem(BaseModel):
    """One activity in a day-grouped itinerary."""
    activity: ActivityResponse
    city: ActivityCityRef


class ActivityTemplateResponse(BaseModel):
    """Schema for activity template catalog entries."""
    id: int
    destination: str
    name: str
    description: Optional[str] = None
    category: ActivityCategory
    estimated_cost: Optional[Decimal] = None
    currency: str
    duration: Optional[int] = None
    rating: Optional[float] = None

    class Config:
        from_attributes = True


class ReorderRequest(BaseModel):
    """Complete list of sibling ids in their desired final order."""
    ordered_ids: List[int]
