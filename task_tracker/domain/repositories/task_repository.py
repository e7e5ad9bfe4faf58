"""
Task repository interface.
Defines the contract for task data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from task_tracker.domain.models.task import Task, TaskStatus


class TaskRepository(ABC):
    """
    Repository interface for Task entity.
    Defines all operations needed for task data persistence.
    """

    @abstractmethod
    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """
        Find a task by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> List[Task]:
        """
        Find all tasks owned by a user, in every status.
        """
        pass

    @abstractmethod
    async def find_by_user_id_and_status(self, user_id: str, status: TaskStatus) -> List[Task]:
        """
        Find a user's tasks with a specific status.
        """
        pass

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """
        Persist a new task.
        Returns the saved task with its assigned ID.
        """
        pass

    @abstractmethod
    async def update(self, task: Task) -> Task:
        """
        Persist the current in-memory state of an existing task.
        """
        pass

    @abstractmethod
    async def delete(self, task_id: int) -> bool:
        """
        Permanently delete a task.
        Returns True if a task was deleted.
        """
        pass
