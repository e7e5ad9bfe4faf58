"""
Shared fixtures: an in-memory task repository and task builders.
"""

import copy
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pytest

from task_tracker.domain.models.base import utc_now
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.repositories.task_repository import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    """Task repository keeping copies in a dict, like a real store would."""

    def __init__(self):
        self.data: Dict[int, Task] = {}
        self.next_id = 1
        self.updates: List[tuple] = []

    def add(self, task: Task) -> Task:
        """Seed a task synchronously."""
        if task.id is None:
            task.id = self.next_id
        self.next_id = max(self.next_id, task.id) + 1
        self.data[task.id] = copy.deepcopy(task)
        return task

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        task = self.data.get(task_id)
        return copy.deepcopy(task) if task else None

    async def find_by_user_id(self, user_id: str) -> List[Task]:
        return [copy.deepcopy(t) for t in self.data.values() if t.owner_id == user_id]

    async def find_by_user_id_and_status(self, user_id: str, status: TaskStatus) -> List[Task]:
        return [
            copy.deepcopy(t) for t in self.data.values()
            if t.owner_id == user_id and t.status == status
        ]

    async def save(self, task: Task) -> Task:
        return self.add(task)

    async def update(self, task: Task) -> Task:
        self.updates.append((task.id, task.status))
        self.data[task.id] = copy.deepcopy(task)
        return task

    async def delete(self, task_id: int) -> bool:
        return self.data.pop(task_id, None) is not None

    def stored(self, task_id: int) -> Task:
        return self.data[task_id]


def make_task(
    status: TaskStatus = TaskStatus.PENDING,
    owner_id: str = "user-1",
    title: str = "Write report",
    description: str = "",
    start_date: Optional[datetime] = None,
    deadline: Optional[datetime] = None,
    task_id: Optional[int] = None,
    created_at: Optional[datetime] = None,
) -> Task:
    """Build a task directly in any state."""
    now = utc_now()
    return Task.reconstruct(
        id=task_id,
        title=title,
        description=description,
        status=status,
        owner_id=owner_id,
        start_date=start_date or now - timedelta(days=1),
        deadline=deadline,
        created_at=created_at or now - timedelta(days=1),
        updated_at=created_at or now - timedelta(days=1),
    )


@pytest.fixture
def repository():
    return InMemoryTaskRepository()


@pytest.fixture
def task_factory():
    return make_task
