"""
Database configuration and session management.
"""

from typing import Any, Dict, Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

from task_tracker.config import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.debug}
    if database_url.startswith("sqlite"):
        # SQLite connections are shared across FastAPI's threadpool
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            options["poolclass"] = StaticPool
    return options


# Create SQLAlchemy engine
engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all_tables(bind=None) -> None:
    """Create every table registered on the declarative base."""
    # Importing the models registers them on Base.metadata
    from task_tracker.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def drop_all_tables(bind=None) -> None:
    """Drop every table registered on the declarative base."""
    from task_tracker.infrastructure.db import models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)
