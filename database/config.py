# Database Configuration and Session Management

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from functools import lru_cache
import logging

from config.app_config import DATABASE_URL, DB_POOL_SIZE, DB_MAX_OVERFLOW, SQL_ECHO

logger = logging.getLogger(__name__)


def build_engine(url: str = DATABASE_URL):
    """
    Create an engine for the given URL.
    SQLite gets a single-file setup usable across threads (tests, local runs);
    everything else gets a pooled engine.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=SQL_ECHO,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=DB_POOL_SIZE,
        max_overflow=DB_MAX_OVERFLOW,
        echo=SQL_ECHO,
    )


# Create engine
engine = build_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@lru_cache(maxsize=8)
def session_factory_for(bind):
    """
    Session factory for side work (notifications) on the engine behind a request session.
    Built once per engine; the default engine reuses SessionLocal.
    """
    if bind is engine:
        return SessionLocal
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


# Dependency for FastAPI
def get_db() -> Session:
    """
    FastAPI dependency to get database session.
    Usage: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Initialize database tables.
    Run this once to create all tables.
    """
    from database.models import Base
    from database import lifecycle_models  # noqa: F401  (registers engine tables)

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")
