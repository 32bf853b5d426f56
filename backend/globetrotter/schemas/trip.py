"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal
from globetrotter.models.trip import TripStatus
from globetrotter.schemas.city import CityDetailResponse
from globetrotter.schemas.budget import BudgetDetailResponse


class TripBase(BaseModel):
    """Base trip schema."""
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    start_date: date
    end_date: date
    total_budget: Optional[Decimal] = None
    tags: List[str] = []


class TripCreate(TripBase):
    """Schema for trip creation."""
    currency: Optional[str] = None


class TripUpdate(BaseModel):
    """
    Schema for trip update.

    These are the only mutable trip fields. Unknown keys in a request body
    are dropped by pydantic, never applied.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[TripStatus] = None
    is_public: Optional[bool] = None
    total_budget: Optional[Decimal] = None
    currency: Optional[str] = None
    tags: Optional[List[str]] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    user_id: int
    status: TripStatus
    is_public: bool
    currency: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripDetailResponse(TripResponse):
    """Trip with ordered cities, their activities, and the budget ledger."""
    cities: List[CityDetailResponse] = []
    budget: Optional[BudgetDetailResponse] = None


class TripListResponse(BaseModel):
    """Page of trips with pagination metadata."""
    items: List[TripResponse]
    meta: Dict[str, Any]


class ShareLinkResponse(BaseModel):
    """Minted share token and the URL built from it."""
    share_token: str
    share_url: str
