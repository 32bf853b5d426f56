"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from globetrotter.core.config import settings
from globetrotter.core.utils import pagination_meta
from globetrotter.db.session import get_db
from globetrotter.models.trip import Trip, TripStatus
from globetrotter.models.user import User
from globetrotter.schemas.activity import ActivityDayItem
from globetrotter.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripDetailResponse,
    TripListResponse, ShareLinkResponse
)
from globetrotter.api.dependencies import get_current_user, get_optional_user, actor_id
from globetrotter.services import trip_service, share_service, activity_service
from globetrotter.services.budget_service import compute_summary

router = APIRouter(prefix="/trips", tags=["trips"])


def trip_detail(trip: Trip) -> TripDetailResponse:
    """Build the full read shape of a trip, including budget figures."""
    detail = TripDetailResponse.model_validate(trip)
    if trip.budget is not None and detail.budget is not None:
        detail.budget.calculated = compute_summary(trip.budget)
    return detail


@router.post("", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    trip = trip_service.create_trip(current_user.id, trip_data, db)
    return trip_detail(trip)


@router.get("", response_model=TripListResponse)
async def list_trips(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    trip_status: Optional[TripStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's trips, newest first."""
    trips, total = trip_service.list_trips_for_user(current_user.id, page, limit, trip_status, db)
    return TripListResponse(
        items=[TripResponse.model_validate(trip) for trip in trips],
        meta=pagination_meta(page, limit, total)
    )


@router.get("/upcoming", response_model=List[TripResponse])
async def list_upcoming_trips(
    limit: int = Query(5, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Trips starting today or later that are still being planned."""
    return trip_service.list_upcoming_trips(current_user.id, limit, db)


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Get trip details. Public trips are readable without a token."""
    trip = trip_service.get_trip(trip_id, actor_id(current_user), db)
    return trip_detail(trip)


@router.put("/{trip_id}", response_model=TripDetailResponse)
async def update_trip(
    trip_id: int,
    patch: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a trip."""
    trip = trip_service.update_trip(trip_id, current_user.id, patch, db)
    return trip_detail(trip)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip with its cities, activities and budget."""
    trip_service.delete_trip(trip_id, current_user.id, db)


@router.post("/{trip_id}/share", response_model=ShareLinkResponse)
async def share_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Generate a share link; the trip becomes public."""
    return share_service.mint_share_token(trip_id, current_user.id, db)


@router.get("/{trip_id}/activities-by-day", response_model=Dict[str, List[ActivityDayItem]])
async def get_activities_by_day(
    trip_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """All activities of the trip grouped by date."""
    return activity_service.activities_by_day(trip_id, actor_id(current_user), db)
