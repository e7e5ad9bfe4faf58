"""
Task router.
Plain queries, display queries and commands for the authenticated user's tasks.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from task_tracker.config import settings
from task_tracker.infrastructure.auth import get_current_user_id
from task_tracker.application.use_cases import (
    CreateTaskUseCase,
    UpdateTaskUseCase,
    ChangeTaskStatusUseCase,
    DeleteTaskUseCase,
    GetTaskListForDisplayUseCase,
    GetTaskForDisplayUseCase,
    GetStatisticsForDisplayUseCase,
    ListTasksUseCase,
    GetTaskUseCase,
    GetTaskStatisticsUseCase,
)
from task_tracker.application.dto import (
    CreateTaskRequestDTO,
    UpdateTaskBodyDTO,
    UpdateTaskRequestDTO,
    ChangeTaskStatusBodyDTO,
    ChangeTaskStatusRequestDTO,
    DeleteTaskRequestDTO,
    DeleteTaskResponseDTO,
    GetTaskRequestDTO,
    TaskListFilterRequestDTO,
    TaskResponseDTO,
    TaskListResponseDTO,
    TaskStatisticsResponseDTO,
    TaskDisplayResponseDTO,
    TaskListDisplayResponseDTO,
    StatisticsDisplayResponseDTO,
)
from task_tracker.domain.repositories.task_repository import TaskRepository
from task_tracker.infrastructure.db.database import get_db
from task_tracker.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository


router = APIRouter()

UserId = Annotated[str, Depends(get_current_user_id)]


def get_task_repository(session: Session = Depends(get_db)) -> TaskRepository:
    """Dependency to get task repository."""
    return SQLAlchemyTaskRepository(session)


Repository = Annotated[TaskRepository, Depends(get_task_repository)]


@router.get("/display", response_model=TaskListDisplayResponseDTO)
async def list_tasks_for_display(
    user_id: UserId,
    repository: Repository,
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by task status"),
):
    """
    List the user's tasks with display data.

    - **status**: SCHEDULED, PENDING, IN_PROGRESS (includes pending), COMPLETED,
      FAILED or CANCELLED. Without a filter, every task except cancelled ones.
    """
    use_case = GetTaskListForDisplayUseCase(repository, settings.timezone)
    use_case.set_current_user(user_id)
    return await use_case.execute(TaskListFilterRequestDTO(status=status_filter))


@router.get("", response_model=TaskListResponseDTO)
async def list_tasks(
    user_id: UserId,
    repository: Repository,
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by task status"),
):
    """List the user's tasks without display data. Same filter as /display."""
    use_case = ListTasksUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(TaskListFilterRequestDTO(status=status_filter))


@router.get("/statistics/display", response_model=StatisticsDisplayResponseDTO)
async def get_statistics_for_display(user_id: UserId, repository: Repository):
    """Task counts, completion rate and insights for the user."""
    use_case = GetStatisticsForDisplayUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(None)


@router.get("/statistics", response_model=TaskStatisticsResponseDTO)
async def get_statistics(user_id: UserId, repository: Repository):
    """Task counts and completion rate for the user."""
    use_case = GetTaskStatisticsUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(None)


@router.get("/{task_id}/display", response_model=TaskDisplayResponseDTO)
async def get_task_for_display(task_id: int, user_id: UserId, repository: Repository):
    """Get a single task with display data."""
    use_case = GetTaskForDisplayUseCase(repository, settings.timezone)
    use_case.set_current_user(user_id)
    return await use_case.execute(GetTaskRequestDTO(task_id=task_id))


@router.get("/{task_id}", response_model=TaskResponseDTO)
async def get_task(task_id: int, user_id: UserId, repository: Repository):
    """Get a single task."""
    use_case = GetTaskUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(GetTaskRequestDTO(task_id=task_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
async def create_task(request: CreateTaskRequestDTO, user_id: UserId, repository: Repository):
    """
    Create a new task.

    - **title**: Task title (required, up to 200 characters)
    - **description**: Task description (up to 1000 characters)
    - **start_date**: When work may begin; a future date schedules the task
    - **deadline**: Optional deadline, not before the start date
    """
    use_case = CreateTaskUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(request)


@router.put("/{task_id}", response_model=TaskResponseDTO)
async def update_task(
    task_id: int,
    body: UpdateTaskBodyDTO,
    user_id: UserId,
    repository: Repository,
):
    """Update task fields. Only the fields sent are changed."""
    request = UpdateTaskRequestDTO(task_id=task_id, **body.model_dump(exclude_unset=True))

    use_case = UpdateTaskUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(request)


@router.patch("/{task_id}/status", response_model=TaskResponseDTO)
async def change_task_status(
    task_id: int,
    body: ChangeTaskStatusBodyDTO,
    user_id: UserId,
    repository: Repository,
):
    """
    Change a task's status.

    - **status**: Target status through the general transition rules
    - **action**: start, complete or reopen
    """
    request = ChangeTaskStatusRequestDTO(task_id=task_id, **body.model_dump(exclude_unset=True))

    use_case = ChangeTaskStatusUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(request)


@router.delete("/{task_id}", response_model=DeleteTaskResponseDTO)
async def delete_task(
    task_id: int,
    user_id: UserId,
    repository: Repository,
    permanent: bool = Query(False, description="Remove the task instead of cancelling it"),
):
    """Cancel a task, or delete it permanently."""
    use_case = DeleteTaskUseCase(repository)
    use_case.set_current_user(user_id)
    return await use_case.execute(DeleteTaskRequestDTO(task_id=task_id, permanent=permanent))
