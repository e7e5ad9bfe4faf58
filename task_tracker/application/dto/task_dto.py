"""
Task DTOs for the application layer.
Data Transfer Objects for task commands, plain queries and display queries.
"""

from typing import Optional, List, Union
from dataclasses import asdict
from datetime import datetime
from pydantic import Field

from task_tracker.domain.models.task import Task
from task_tracker.domain.models.value_objects import (
    TaskDisplayData,
    TaskStatistics,
    StatisticsInsight,
)
from .base_dto import BaseDTO, RequestDTO, ResponseDTO


DateValue = Union[datetime, str]


# Request DTOs

class CreateTaskRequestDTO(RequestDTO):
    """DTO for task creation requests."""

    title: str = Field(description="Task title (1-200 characters)")
    description: Optional[str] = Field(default=None, description="Task description")
    start_date: Optional[DateValue] = Field(default=None, description="Start date, defaults to now")
    deadline: Optional[DateValue] = Field(default=None, description="Optional deadline")


class UpdateTaskBodyDTO(RequestDTO):
    """
    Body of a task update request.
    Only fields present in the payload are applied; an explicit null
    description or deadline clears it.
    """

    title: Optional[str] = Field(default=None, description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: Optional[str] = Field(default=None, description="New status")
    start_date: Optional[DateValue] = Field(default=None, description="Start date")
    deadline: Optional[DateValue] = Field(default=None, description="Deadline, null clears it")


class UpdateTaskRequestDTO(UpdateTaskBodyDTO):
    """DTO for task update requests."""

    task_id: int = Field(description="Task ID")


class ChangeTaskStatusBodyDTO(RequestDTO):
    """Body of a status change: a target status or a named action, not both."""

    status: Optional[str] = Field(default=None, description="Target status")
    action: Optional[str] = Field(
        default=None,
        pattern="^(start|complete|reopen)$",
        description="Dedicated transition: start, complete or reopen",
    )


class ChangeTaskStatusRequestDTO(ChangeTaskStatusBodyDTO):
    """DTO for status change requests."""

    task_id: int = Field(description="Task ID")


class DeleteTaskRequestDTO(RequestDTO):
    """DTO for delete requests. Soft delete (cancel) unless permanent."""

    task_id: int = Field(description="Task ID")
    permanent: bool = Field(default=False, description="Remove the record instead of cancelling")


class GetTaskRequestDTO(RequestDTO):
    """DTO for single task lookups."""

    task_id: int = Field(description="Task ID")


class TaskListFilterRequestDTO(RequestDTO):
    """DTO for task list queries."""

    status: Optional[str] = Field(default=None, description="Status filter, all non-cancelled when empty")


# Response DTOs

class TaskResponseDTO(ResponseDTO):
    """DTO for task responses."""

    title: str
    description: str = ""
    status: str
    owner_id: str
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    progress: Optional[int] = Field(default=None, description="Elapsed time percentage")
    is_overdue: bool = False

    @classmethod
    def from_domain(cls, task: Task, now: Optional[datetime] = None) -> "TaskResponseDTO":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description or "",
            status=task.status.value,
            owner_id=task.owner_id,
            start_date=task.start_date,
            deadline=task.deadline,
            progress=task.progress_percentage(now),
            is_overdue=task.is_overdue(now),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskListResponseDTO(BaseDTO):
    """DTO for plain task lists."""

    tasks: List[TaskResponseDTO] = Field(default_factory=list)
    count: int = 0


class TaskDisplayResponseDTO(TaskResponseDTO):
    """Task response enriched with presentation data."""

    progress: int = 0
    status_text: str
    status_class: str
    progress_color: str
    start_date_formatted: str
    deadline_formatted: Optional[str] = None
    created_at_formatted: str
    overdue_message: Optional[str] = None
    available_actions: List[str] = Field(default_factory=list)
    can_edit: bool = False
    can_delete: bool = False
    can_complete: bool = False
    icon: str

    @classmethod
    def from_display(
        cls,
        task: Task,
        display: TaskDisplayData,
        created_at_formatted: str,
        now: Optional[datetime] = None,
    ) -> "TaskDisplayResponseDTO":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description or "",
            status=task.status.value,
            owner_id=task.owner_id,
            start_date=task.start_date,
            deadline=task.deadline,
            progress=task.progress_percentage(now) or 0,
            is_overdue=task.is_overdue(now),
            created_at=task.created_at,
            updated_at=task.updated_at,
            created_at_formatted=created_at_formatted,
            **display.to_dict(),
        )


class TaskFilterDTO(BaseDTO):
    """Applied filter metadata."""

    applied: str
    display_text: str


class TaskListDisplayResponseDTO(BaseDTO):
    """DTO for enriched task lists."""

    tasks: List[TaskDisplayResponseDTO] = Field(default_factory=list)
    count: int = 0
    filter: TaskFilterDTO
    empty_message: Optional[str] = None


class DeleteTaskResponseDTO(BaseDTO):
    """DTO for delete responses."""

    task_id: int
    success: bool
    permanent: bool = False
    message: str


class InsightDTO(BaseDTO):
    """DTO for a statistics insight."""

    type: str
    message: str
    icon: str
    priority: int


def format_task_count(count: int, context: Optional[str] = None) -> str:
    """Format a count with its unit, e.g. '1 task', '5 tasks', '3 overdue'."""
    if context is None:
        return f"{count} task" if count == 1 else f"{count} tasks"
    return f"{count} {context}"


class TaskStatisticsResponseDTO(BaseDTO):
    """Raw task counts and the completion rate."""

    total_tasks: int
    scheduled_tasks: int
    pending_tasks: int
    in_progress_tasks: int
    completed_tasks: int
    failed_tasks: int
    cancelled_tasks: int
    overdue_tasks: int
    completion_rate: int

    @classmethod
    def from_statistics(cls, stats: TaskStatistics) -> "TaskStatisticsResponseDTO":
        return cls(**asdict(stats))


class StatisticsDisplayResponseDTO(BaseDTO):
    """Statistics with formatted strings and insights."""

    total_tasks: int
    scheduled_tasks: int
    pending_tasks: int
    in_progress_tasks: int
    completed_tasks: int
    failed_tasks: int
    cancelled_tasks: int
    overdue_tasks: int
    completion_rate: int

    total_tasks_formatted: str
    scheduled_tasks_formatted: str
    pending_tasks_formatted: str
    in_progress_tasks_formatted: str
    completed_tasks_formatted: str
    failed_tasks_formatted: str
    cancelled_tasks_formatted: str
    overdue_tasks_formatted: str
    completion_rate_formatted: str

    insights: List[InsightDTO] = Field(default_factory=list)

    @classmethod
    def from_statistics(
        cls,
        stats: TaskStatistics,
        insights: List[StatisticsInsight],
    ) -> "StatisticsDisplayResponseDTO":
        return cls(
            total_tasks=stats.total_tasks,
            scheduled_tasks=stats.scheduled_tasks,
            pending_tasks=stats.pending_tasks,
            in_progress_tasks=stats.in_progress_tasks,
            completed_tasks=stats.completed_tasks,
            failed_tasks=stats.failed_tasks,
            cancelled_tasks=stats.cancelled_tasks,
            overdue_tasks=stats.overdue_tasks,
            completion_rate=stats.completion_rate,
            total_tasks_formatted=format_task_count(stats.total_tasks),
            scheduled_tasks_formatted=format_task_count(stats.scheduled_tasks, "scheduled"),
            pending_tasks_formatted=format_task_count(stats.pending_tasks, "pending"),
            in_progress_tasks_formatted=format_task_count(stats.in_progress_tasks, "in progress"),
            completed_tasks_formatted=format_task_count(stats.completed_tasks, "completed"),
            failed_tasks_formatted=format_task_count(stats.failed_tasks, "failed"),
            cancelled_tasks_formatted=format_task_count(stats.cancelled_tasks, "cancelled"),
            overdue_tasks_formatted=format_task_count(stats.overdue_tasks, "overdue"),
            completion_rate_formatted=f"{stats.completion_rate}%",
            insights=[InsightDTO(**insight.to_dict()) for insight in insights],
        )
