"""
User model for authentication and trip ownership.
"""
from sqlalchemy import Column, String, Boolean, Text, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from globetrotter.db.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """User model; owns trips."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    avatar = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    phone = Column(String(30), nullable=True)
    country = Column(String(100), nullable=True)
    preferences = Column(JSON, nullable=True)
    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    trips = relationship("Trip", back_populates="owner", passive_deletes=True)
