"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr
from typing import Any, Dict, Optional
from datetime import datetime
from decimal import Decimal
from globetrotter.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    email: EmailStr
    first_name: str
    last_name: str


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str


class UserUpdate(BaseModel):
    """Mutable profile fields. Email, password and role are not editable here."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    avatar: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserStats(BaseModel):
    """Travel statistics across all of a user's trips."""
    total_trips: int
    completed_trips: int
    upcoming_trips: int
    total_cities: int
    unique_countries: int
    total_activities: int
    total_planned_spend: Decimal


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
