"""
Public share-link routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from globetrotter.db.session import get_db
from globetrotter.models.user import User
from globetrotter.schemas.trip import TripDetailResponse
from globetrotter.api.dependencies import get_current_user
from globetrotter.api.routes.trips import trip_detail
from globetrotter.services import share_service, clone_service

router = APIRouter(prefix="/shared", tags=["shared"])


@router.get("/{share_token}", response_model=TripDetailResponse)
async def get_shared_trip(share_token: str, db: Session = Depends(get_db)):
    """View a shared trip without authentication."""
    trip = share_service.resolve_share_token(share_token, db)
    return trip_detail(trip)


@router.post("/{share_token}/copy", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def copy_shared_trip(
    share_token: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Copy a shared trip into the current user's account."""
    trip = clone_service.copy_trip(share_token, current_user.id, db)
    return trip_detail(trip)
