"""
Database initialization script.

Creates all tables and seeds the destination and activity catalogs when
they are empty.
"""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from globetrotter.db.session import SessionLocal, init_db, transaction
from globetrotter.models import ActivityCategory, ActivityTemplate, PopularDestination

logger = logging.getLogger(__name__)

DESTINATIONS = [
    {"name": "Paris", "country": "France", "country_code": "FR", "latitude": 48.8566, "longitude": 2.3522, "popularity": 100},
    {"name": "Tokyo", "country": "Japan", "country_code": "JP", "latitude": 35.6762, "longitude": 139.6503, "popularity": 95},
    {"name": "Kyoto", "country": "Japan", "country_code": "JP", "latitude": 35.0116, "longitude": 135.7681, "popularity": 80},
    {"name": "New York", "country": "United States", "country_code": "US", "latitude": 40.7128, "longitude": -74.0060, "popularity": 90},
    {"name": "Rome", "country": "Italy", "country_code": "IT", "latitude": 41.9028, "longitude": 12.4964, "popularity": 85},
    {"name": "Barcelona", "country": "Spain", "country_code": "ES", "latitude": 41.3874, "longitude": 2.1686, "popularity": 75},
]

TEMPLATES = [
    {"destination": "Paris", "name": "Louvre Museum", "category": ActivityCategory.CULTURE, "estimated_cost": Decimal("22"), "currency": "EUR", "duration": 180, "rating": 4.7},
    {"destination": "Paris", "name": "Seine River Cruise", "category": ActivityCategory.SIGHTSEEING, "estimated_cost": Decimal("15"), "currency": "EUR", "duration": 60, "rating": 4.5},
    {"destination": "Tokyo", "name": "Tsukiji Outer Market", "category": ActivityCategory.FOOD, "estimated_cost": Decimal("3000"), "currency": "JPY", "duration": 120, "rating": 4.6},
    {"destination": "Tokyo", "name": "Shibuya Crossing", "category": ActivityCategory.SIGHTSEEING, "estimated_cost": Decimal("0"), "currency": "JPY", "duration": 30, "rating": 4.4},
    {"destination": "Kyoto", "name": "Fushimi Inari Shrine", "category": ActivityCategory.CULTURE, "estimated_cost": Decimal("0"), "currency": "JPY", "duration": 150, "rating": 4.8},
    {"destination": "Rome", "name": "Colosseum Tour", "category": ActivityCategory.CULTURE, "estimated_cost": Decimal("18"), "currency": "EUR", "duration": 120, "rating": 4.7},
]


def seed_catalog(db: Session) -> None:
    """Insert the reference catalogs unless they already hold rows."""
    with transaction(db):
        if not db.query(PopularDestination.id).first():
            db.add_all(PopularDestination(**row) for row in DESTINATIONS)
            logger.info(f"Seeded {len(DESTINATIONS)} destinations")
        if not db.query(ActivityTemplate.id).first():
            db.add_all(ActivityTemplate(**row) for row in TEMPLATES)
            logger.info(f"Seeded {len(TEMPLATES)} activity templates")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Initializing database...")
    init_db()
    db = SessionLocal()
    try:
        seed_catalog(db)
    finally:
        db.close()
    print("Database initialized successfully!")
