"""
Activity routes: ordered items within a city.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from globetrotter.db.session import get_db
from globetrotter.models.activity import ActivityCategory
from globetrotter.models.user import User
from globetrotter.schemas.activity import (
    ActivityCreate, ActivityUpdate, ActivityResponse, ActivityTemplateResponse, ReorderRequest
)
from globetrotter.api.dependencies import get_current_user, get_optional_user, actor_id
from globetrotter.services import activity_service

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("/categories", response_model=List[str])
async def get_activity_categories():
    """All activity categories."""
    return activity_service.activity_categories()


@router.get("/templates/search", response_model=List[ActivityTemplateResponse])
async def search_activity_templates(
    destination: str,
    category: Optional[ActivityCategory] = None,
    limit: int = 20,
    db: Session = Depends(get_db)
):
    """Suggested activities for a destination."""
    return activity_service.search_activity_templates(destination, category, limit, db)


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def add_activity(
    activity_data: ActivityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an activity at the end of a city."""
    return activity_service.add_activity(current_user.id, activity_data, db)


@router.get("/city/{city_id}", response_model=List[ActivityResponse])
async def list_city_activities(
    city_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Activities of a city in order."""
    return activity_service.list_activities(city_id, actor_id(current_user), db)


@router.put("/city/{city_id}/reorder", response_model=List[ActivityResponse])
async def reorder_activities(
    city_id: int,
    reorder: ReorderRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Reorder the activities of a city.
    `ordered_ids` must list every activity of the city exactly once.
    """
    return activity_service.reorder_activities(city_id, current_user.id, reorder.ordered_ids, db)


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Get an activity."""
    return activity_service.get_activity(activity_id, actor_id(current_user), db)


@router.put("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: int,
    patch: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an activity."""
    return activity_service.update_activity(activity_id, current_user.id, patch, db)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an activity."""
    activity_service.delete_activity(activity_id, current_user.id, db)
