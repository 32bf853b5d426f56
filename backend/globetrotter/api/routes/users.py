"""
User account routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from globetrotter.db.session import get_db
from globetrotter.schemas.user import UserResponse, UserStats, UserUpdate
from globetrotter.models.user import User
from globetrotter.api.dependencies import get_current_user
from globetrotter.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    patch: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the current user's profile."""
    return user_service.update_profile(current_user.id, patch, db)


@router.get("/me/stats", response_model=UserStats)
async def get_current_user_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Trip, city and activity counts for the current user."""
    return user_service.user_stats(current_user.id, db)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete the current user and all of their trips."""
    user_service.delete_user(current_user.id, db)
