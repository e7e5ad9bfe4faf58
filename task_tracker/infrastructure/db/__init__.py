"""
Database infrastructure module.
Engine, sessions and SQLAlchemy models.
"""

from .database import Base, engine, SessionLocal, get_db, create_all_tables, drop_all_tables
from .models import TaskModel

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "create_all_tables",
    "drop_all_tables",
    "TaskModel",
]
