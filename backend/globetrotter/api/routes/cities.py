"""
City routes: stops within a trip.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from globetrotter.db.session import get_db
from globetrotter.models.user import User
from globetrotter.schemas.activity import ReorderRequest
from globetrotter.schemas.city import (
    CityCreate, CityUpdate, CityResponse, CityDetailResponse, DestinationResponse
)
from globetrotter.api.dependencies import get_current_user, get_optional_user, actor_id
from globetrotter.services import city_service

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("/destinations/search", response_model=List[DestinationResponse])
async def search_destinations(q: str, limit: int = 10, db: Session = Depends(get_db)):
    """Search the popular destination catalog."""
    return city_service.search_destinations(q, limit, db)


@router.get("/destinations/popular", response_model=List[DestinationResponse])
async def get_popular_destinations(limit: int = 10, db: Session = Depends(get_db)):
    """Most popular destinations."""
    return city_service.popular_destinations(limit, db)


@router.post("", response_model=CityResponse, status_code=status.HTTP_201_CREATED)
async def add_city(
    city_data: CityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a city at the end of a trip."""
    return city_service.add_city(current_user.id, city_data, db)


@router.get("/trip/{trip_id}", response_model=List[CityDetailResponse])
async def list_trip_cities(
    trip_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Cities of a trip in order, with their activities."""
    return city_service.list_cities(trip_id, actor_id(current_user), db)


@router.put("/trip/{trip_id}/reorder", response_model=List[CityResponse])
async def reorder_cities(
    trip_id: int,
    reorder: ReorderRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Reorder the cities of a trip.
    `ordered_ids` must list every city of the trip exactly once.
    """
    return city_service.reorder_cities(trip_id, current_user.id, reorder.ordered_ids, db)


@router.get("/{city_id}", response_model=CityDetailResponse)
async def get_city(
    city_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Get a city with its activities."""
    return city_service.get_city(city_id, actor_id(current_user), db)


@router.put("/{city_id}", response_model=CityResponse)
async def update_city(
    city_id: int,
    patch: CityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a city."""
    return city_service.update_city(city_id, current_user.id, patch, db)


@router.delete("/{city_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_city(
    city_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a city and its activities."""
    city_service.delete_city(city_id, current_user.id, db)
