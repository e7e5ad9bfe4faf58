"""
Task mapper for converting between domain entities and database models.
"""

from datetime import datetime
from typing import Optional

from task_tracker.domain.models.base import as_utc
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.infrastructure.db.models import TaskModel


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return as_utc(value) if value is not None else None


class TaskMapper:
    """Maps between Task domain entity and TaskModel database model."""

    def domain_to_model(self, task: Task) -> TaskModel:
        """Convert Task domain entity to TaskModel."""
        return TaskModel(
            id=task.id,
            user_id=task.owner_id,
            title=task.title,
            description=task.description or "",
            status=task.status.value,
            start_date=task.start_date,
            deadline=task.deadline,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    def update_model(self, model: TaskModel, task: Task) -> TaskModel:
        """Copy mutable task state onto an existing model."""
        model.title = task.title
        model.description = task.description or ""
        model.status = task.status.value
        model.start_date = task.start_date
        model.deadline = task.deadline
        model.updated_at = task.updated_at
        return model

    def model_to_domain(self, model: TaskModel) -> Task:
        """Convert TaskModel to Task domain entity."""
        return Task.reconstruct(
            id=model.id,
            title=model.title,
            description=model.description or "",
            status=TaskStatus.from_string(model.status),
            owner_id=model.user_id,
            start_date=_aware(model.start_date),
            deadline=_aware(model.deadline),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )
