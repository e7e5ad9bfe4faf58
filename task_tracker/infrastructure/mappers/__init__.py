"""
Mappers between domain entities and database models.
"""

from .task_mapper import TaskMapper

__all__ = ["TaskMapper"]
