"""
Display use cases for the application layer.
Fetch tasks, apply lazy status corrections and enrich them for the frontend.
"""

from datetime import datetime
from typing import Dict, List, Optional

from task_tracker.application.use_cases.base_use_case import TaskUseCase, QueryUseCase
from task_tracker.application.use_cases.query_use_cases import ALL_FILTER, parse_status_filter
from task_tracker.application.dto.task_dto import (
    GetTaskRequestDTO,
    TaskListFilterRequestDTO,
    TaskDisplayResponseDTO,
    TaskListDisplayResponseDTO,
    TaskFilterDTO,
    StatisticsDisplayResponseDTO,
)
from task_tracker.domain.models.base import utc_now
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.models.value_objects import StatisticsInsight
from task_tracker.domain.repositories.task_repository import TaskRepository
from task_tracker.domain.services.task_display_service import TaskDisplayService
from task_tracker.domain.services.statistics_service import TaskStatisticsService


FILTER_LABELS: Dict[str, str] = {
    TaskStatus.SCHEDULED.value: "Scheduled",
    TaskStatus.PENDING.value: "Pending",
    TaskStatus.IN_PROGRESS.value: "In Progress",
    TaskStatus.COMPLETED.value: "Completed",
    TaskStatus.FAILED.value: "Failed",
    TaskStatus.CANCELLED.value: "Cancelled",
    ALL_FILTER: "All",
}

EMPTY_MESSAGES: Dict[str, str] = {
    TaskStatus.SCHEDULED.value: "No scheduled tasks yet",
    TaskStatus.PENDING.value: "No pending tasks yet",
    TaskStatus.IN_PROGRESS.value: "No tasks in progress yet",
    TaskStatus.COMPLETED.value: "No completed tasks yet",
    TaskStatus.FAILED.value: "No failed tasks",
    TaskStatus.CANCELLED.value: "No cancelled tasks",
    ALL_FILTER: "You have no tasks yet. Create your first task!",
}


class DisplayUseCase(TaskUseCase):
    """Task use case that renders tasks with a display service."""

    def __init__(self, task_repository: TaskRepository, timezone_name: str = "UTC"):
        super().__init__(task_repository)
        self.display_service = TaskDisplayService(timezone_name)

    def _enrich_task(self, task: Task, now: Optional[datetime] = None) -> TaskDisplayResponseDTO:
        now = now or utc_now()
        display = self.display_service.build_display_data(task, now)
        return TaskDisplayResponseDTO.from_display(
            task,
            display,
            created_at_formatted=self.display_service.format_date(task.created_at),
            now=now,
        )


class GetTaskListForDisplayUseCase(DisplayUseCase, QueryUseCase[TaskListFilterRequestDTO, TaskListDisplayResponseDTO]):
    """
    Use case for listing a user's tasks with display data.
    The IN_PROGRESS filter also returns PENDING tasks; no filter returns
    everything except cancelled tasks.
    """

    async def _execute_business_logic(self, request: TaskListFilterRequestDTO) -> TaskListDisplayResponseDTO:
        status_filter = parse_status_filter(request.status if request else None)
        tasks = await self._find_for_filter(status_filter)
        await self._apply_auto_transitions(tasks)

        now = utc_now()
        enriched = [self._enrich_task(task, now) for task in tasks]
        filter_key = status_filter.value if status_filter else ALL_FILTER

        return TaskListDisplayResponseDTO(
            tasks=enriched,
            count=len(enriched),
            filter=TaskFilterDTO(applied=filter_key, display_text=FILTER_LABELS[filter_key]),
            empty_message=None if enriched else EMPTY_MESSAGES[filter_key],
        )


class GetTaskForDisplayUseCase(DisplayUseCase, QueryUseCase[GetTaskRequestDTO, TaskDisplayResponseDTO]):
    """Use case for a single task with display data."""

    async def _execute_business_logic(self, request: GetTaskRequestDTO) -> TaskDisplayResponseDTO:
        task = await self._get_owned_task(request.task_id)
        await self._apply_auto_transitions([task])
        return self._enrich_task(task)


class GetStatisticsForDisplayUseCase(TaskUseCase, QueryUseCase[None, StatisticsDisplayResponseDTO]):
    """
    Use case for task statistics with formatted counts and insights.
    Pending auto transitions are persisted before counting.
    """

    def __init__(self, task_repository: TaskRepository):
        super().__init__(task_repository)
        self.statistics_service = TaskStatisticsService()

    async def _execute_business_logic(self, request: None = None) -> StatisticsDisplayResponseDTO:
        tasks: List[Task] = await self.task_repository.find_by_user_id(self.current_user_id)
        await self._apply_auto_transitions(tasks)

        stats = self.statistics_service.calculate(tasks)
        insights = StatisticsInsight.generate_from_statistics(stats)

        return StatisticsDisplayResponseDTO.from_statistics(stats, insights)
