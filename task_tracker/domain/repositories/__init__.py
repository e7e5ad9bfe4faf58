"""
Domain repository interfaces.
"""

from .task_repository import TaskRepository

__all__ = ["TaskRepository"]
