"""
Share links: an unguessable token that grants public read access to one trip.
"""
import logging
import secrets
from typing import Dict

from sqlalchemy.orm import Session

from globetrotter.core.config import settings
from globetrotter.core.errors import NotFoundError
from globetrotter.db.session import transaction
from globetrotter.models.trip import Trip
from globetrotter.services.ownership import Access, ResourceKind, guard
from globetrotter.services.trip_service import load_trip_graph

logger = logging.getLogger(__name__)


def generate_share_token() -> str:
    """URL-safe random token with SHARE_TOKEN_BYTES of entropy."""
    return secrets.token_urlsafe(settings.SHARE_TOKEN_BYTES)


def share_url(token: str) -> str:
    """Frontend URL at which a shared trip is viewed."""
    return f"{settings.FRONTEND_URL.rstrip('/')}/shared/{token}"


def mint_share_token(trip_id: int, actor_id: int, db: Session) -> Dict[str, str]:
    """
    Give the trip a fresh share token and make it public.

    The token and the visibility flag are written in one update, replacing
    any previous token so older links stop resolving at the same commit.
    """
    trip, _ = guard(actor_id, ResourceKind.TRIP, trip_id, Access.WRITE, db)

    token = generate_share_token()
    with transaction(db):
        trip.share_token = token
        trip.is_public = True

    logger.info(f"User {actor_id} minted a share link for trip {trip_id}")
    return {"share_token": token, "share_url": share_url(token)}


def resolve_share_token(token: str, db: Session) -> Trip:
    """
    Trip behind a share token, with the same graph as a direct read.

    A token alone is not enough: the trip must still be public.
    """
    trip_id = db.query(Trip.id).filter(
        Trip.share_token == token,
        Trip.is_public.is_(True),
    ).scalar()
    if trip_id is None:
        raise NotFoundError("Trip", "Trip not found or not public")
    return load_trip_graph(trip_id, db)
