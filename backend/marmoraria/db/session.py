"""
Database session management
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from marmoraria.core.config import settings
from marmoraria.db.base import Base

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

logger.info("Database connection configured", extra={"sqlite": settings.is_sqlite})

engine = create_engine(
    settings.database_url,
    echo=False,  # Set to True for SQL query logging
    pool_pre_ping=True,  # Verify connections before using
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency for getting database session

    Usage in FastAPI endpoints:
        @router.get("/slabs")
        def list_slabs(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    import marmoraria.models  # noqa: F401 - registers models on Base.metadata

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
