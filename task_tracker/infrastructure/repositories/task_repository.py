"""
Task repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session

from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.repositories.task_repository import TaskRepository
from task_tracker.domain.models.base import EntityNotFoundError
from task_tracker.infrastructure.db.models import TaskModel
from task_tracker.infrastructure.mappers.task_mapper import TaskMapper


class SQLAlchemyTaskRepository(TaskRepository):
    """SQLAlchemy implementation of task repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TaskMapper()

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """Get task by ID."""
        model = self.session.get(TaskModel, task_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    async def find_by_user_id(self, user_id: str) -> List[Task]:
        """Get all tasks owned by a user, newest first."""
        models = self.session.query(TaskModel).filter_by(
            user_id=user_id
        ).order_by(TaskModel.created_at.desc(), TaskModel.id.desc()).all()

        return [self.mapper.model_to_domain(model) for model in models]

    async def find_by_user_id_and_status(self, user_id: str, status: TaskStatus) -> List[Task]:
        """Get a user's tasks in one status, newest first."""
        status_value = status.value if isinstance(status, TaskStatus) else TaskStatus.from_string(status).value
        models = self.session.query(TaskModel).filter_by(
            user_id=user_id,
            status=status_value,
        ).order_by(TaskModel.created_at.desc(), TaskModel.id.desc()).all()

        return [self.mapper.model_to_domain(model) for model in models]

    async def save(self, task: Task) -> Task:
        """Insert a new task and assign its ID."""
        model = self.mapper.domain_to_model(task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)

        task.id = model.id
        return task

    async def update(self, task: Task) -> Task:
        """Write the task's current state over the stored row."""
        model = self.session.get(TaskModel, task.id)
        if not model:
            raise EntityNotFoundError("Task", task.id)

        self.mapper.update_model(model, task)
        self.session.commit()
        return task

    async def delete(self, task_id: int) -> bool:
        """Delete task by ID."""
        model = self.session.get(TaskModel, task_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.commit()
        return True
