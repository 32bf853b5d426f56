"""
Database session management.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from globetrotter.core.config import settings
from globetrotter.core.errors import ConflictError, UnavailableError
from globetrotter.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign keys switched on."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, echo=settings.DB_ECHO, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_recycle=3600,
        **kwargs
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run a unit of work and commit it, or roll everything back.

    Unique-constraint violations surface as ConflictError, any other
    storage failure as UnavailableError.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error, transaction rolled back: {e.orig}")
        raise ConflictError("Resource violates a uniqueness constraint") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage error, transaction rolled back: {e}", exc_info=True)
        raise UnavailableError() from e
    except Exception:
        db.rollback()
        raise


def init_db(bind: Engine = None):
    """Initialize database tables."""
    import globetrotter.models  # noqa: F401  register all tables
    Base.metadata.create_all(bind=bind or engine)
