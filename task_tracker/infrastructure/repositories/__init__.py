"""
Repository implementations.
"""

from .task_repository import SQLAlchemyTaskRepository

__all__ = ["SQLAlchemyTaskRepository"]
