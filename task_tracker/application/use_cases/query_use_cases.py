"""
Query use cases for the application layer.
Plain task reads, with the lazy status corrections applied first.
"""

from typing import List, Optional

from task_tracker.application.use_cases.base_use_case import TaskUseCase, QueryUseCase
from task_tracker.application.dto.task_dto import (
    GetTaskRequestDTO,
    TaskListFilterRequestDTO,
    TaskListResponseDTO,
    TaskResponseDTO,
    TaskStatisticsResponseDTO,
)
from task_tracker.domain.models.base import ValidationError, utc_now
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.repositories.task_repository import TaskRepository
from task_tracker.domain.services.statistics_service import TaskStatisticsService


ALL_FILTER = "ALL"


def parse_status_filter(value: Optional[str]) -> Optional[TaskStatus]:
    """
    Parse a list filter. Missing, blank and ALL mean no status filter;
    anything else must name a status.
    """
    if not value or not value.strip() or value.strip().upper() == ALL_FILTER:
        return None
    try:
        return TaskStatus.from_string(value)
    except ValidationError:
        allowed = ", ".join(s.value for s in TaskStatus.all_statuses())
        raise ValidationError(
            f"Invalid status filter. Must be one of: {allowed}",
            "status",
            code="INVALID_STATUS_FILTER",
        )


class ListTasksUseCase(TaskUseCase, QueryUseCase[TaskListFilterRequestDTO, TaskListResponseDTO]):
    """Use case for listing a user's tasks, optionally filtered by status."""

    async def _execute_business_logic(self, request: TaskListFilterRequestDTO) -> TaskListResponseDTO:
        status_filter = parse_status_filter(request.status if request else None)
        tasks = await self._find_for_filter(status_filter)
        await self._apply_auto_transitions(tasks)

        now = utc_now()
        return TaskListResponseDTO(
            tasks=[TaskResponseDTO.from_domain(task, now) for task in tasks],
            count=len(tasks),
        )


class GetTaskUseCase(TaskUseCase, QueryUseCase[GetTaskRequestDTO, TaskResponseDTO]):
    """Use case for a single task."""

    async def _execute_business_logic(self, request: GetTaskRequestDTO) -> TaskResponseDTO:
        task = await self._get_owned_task(request.task_id)
        await self._apply_auto_transitions([task])
        return TaskResponseDTO.from_domain(task)


class GetTaskStatisticsUseCase(TaskUseCase, QueryUseCase[None, TaskStatisticsResponseDTO]):
    """Use case for raw task counts and the completion rate."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__(task_repository)
        self.statistics_service = TaskStatisticsService()

    async def _execute_business_logic(self, request: None = None) -> TaskStatisticsResponseDTO:
        tasks: List[Task] = await self.task_repository.find_by_user_id(self.current_user_id)
        await self._apply_auto_transitions(tasks)
        return TaskStatisticsResponseDTO.from_statistics(self.statistics_service.calculate(tasks))
