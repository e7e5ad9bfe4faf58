"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional, TypeVar, Generic

from task_tracker.domain.models.base import (
    DomainEvent,
    ValidationError,
    EntityNotFoundError,
    ForbiddenError,
    utc_now,
)
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)


T = TypeVar('T')
R = TypeVar('R')


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Validates the request, runs the business logic and logs execution time.
    Domain errors propagate to the caller unchanged.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, request: T) -> R:
        """
        Execute the use case with validation and logging.
        """
        self.execution_start = utc_now()
        try:
            await self._validate_request(request)
            return await self._execute_business_logic(request)
        except Exception as exc:
            logger.debug(
                f"{self.__class__.__name__} failed: {type(exc).__name__}: {exc}"
            )
            raise
        finally:
            self.execution_end = utc_now()
            execution_time = (self.execution_end - self.execution_start).total_seconds()
            logger.debug(f"{self.__class__.__name__} executed in {execution_time:.4f}s")

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if hasattr(request, 'model_validate'):
            # Pydantic models
            request.model_validate(request.model_dump())

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    Collects and publishes domain events after the command succeeds.
    """

    def __init__(self):
        super().__init__()
        self.events: List[DomainEvent] = []

    async def _execute_business_logic(self, request: T) -> R:
        result = await self._execute_command_logic(request)
        await self._publish_events()
        return result

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass

    def _collect_events(self, task: Task) -> None:
        self.events.extend(task.pull_events())

    async def _publish_events(self) -> None:
        """Publish collected domain events."""
        for event in self.events:
            logger.info(f"Domain event {event.event_name}: {event.to_dict()['data']}")
        self.events.clear()


class AuthorizedUseCase(BaseUseCase[T, R]):
    """
    Mixin for use cases that act on behalf of an authenticated user.
    """

    def __init__(self):
        super().__init__()
        self.current_user_id: Optional[str] = None

    def set_current_user(self, user_id: str) -> None:
        """Set the current user context."""
        self.current_user_id = user_id

    async def _validate_request(self, request: T) -> None:
        """Validate request with authentication check."""
        await super()._validate_request(request)

        if not self.current_user_id:
            raise ValidationError("User authentication required", "user_id")

    def _require_owner(self, task: Task) -> None:
        """Check that the current user owns the task."""
        if not task.belongs_to_user(self.current_user_id):
            raise ForbiddenError("You do not have permission to access this task")


class TaskUseCase(AuthorizedUseCase[T, R]):
    """
    Shared plumbing for task use cases: ownership-checked lookups and the
    read-path auto-transition pass.
    """

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def _get_owned_task(self, task_id: int) -> Task:
        task = await self.task_repository.find_by_id(task_id)
        if task is None:
            raise EntityNotFoundError("Task", task_id)
        self._require_owner(task)
        return task

    async def _find_for_filter(self, status_filter: Optional[TaskStatus]) -> List[Task]:
        """
        The current user's tasks for a list filter. IN_PROGRESS also
        returns PENDING tasks; no filter returns everything but CANCELLED.
        """
        user_id = self.current_user_id

        if status_filter == TaskStatus.IN_PROGRESS:
            tasks = await self.task_repository.find_by_user_id_and_status(user_id, TaskStatus.IN_PROGRESS)
            tasks += await self.task_repository.find_by_user_id_and_status(user_id, TaskStatus.PENDING)
            return tasks
        if status_filter is not None:
            return await self.task_repository.find_by_user_id_and_status(user_id, status_filter)
        return [
            task for task in await self.task_repository.find_by_user_id(user_id)
            if task.status != TaskStatus.CANCELLED
        ]

    async def _apply_auto_transitions(self, tasks: Iterable[Task]) -> None:
        """
        Promote SCHEDULED tasks whose start date has arrived and fail open
        tasks whose deadline has passed. Every change is persisted before
        the caller builds its response.
        """
        for task in tasks:
            now = utc_now()

            if task.should_transition_to_pending(now):
                task.update_status(TaskStatus.PENDING)
                await self.task_repository.update(task)
                logger.info(f"Task {task.id} reached its start date, moved to PENDING")

            if task.should_be_marked_as_failed(now):
                task.mark_as_failed()
                await self.task_repository.update(task)
                logger.info(f"Task {task.id} passed its deadline, marked as FAILED")

            # Auto transitions are logged above, not published
            task.pull_events()
