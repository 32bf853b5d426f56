"""
Request dependencies: resolve the bearer token into the acting user.
"""
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from globetrotter.core.security import decode_access_token
from globetrotter.db.session import get_db
from globetrotter.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def _user_from_token(token: str, db: Session) -> Optional[User]:
    payload = decode_access_token(token)
    if not payload or "sub" not in payload:
        return None
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    user = db.get(User, user_id)
    if not user or not user.is_active:
        return None
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Authenticated user; 401 when the token is missing or invalid."""
    user = _user_from_token(credentials.credentials, db) if credentials else None
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Authenticated user, or None for anonymous reads of public trips."""
    if not credentials:
        return None
    return _user_from_token(credentials.credentials, db)


def actor_id(user: Optional[User]) -> Optional[int]:
    """Identity passed into the core: a user id or None."""
    return user.id if user else None
