"""Statistics service for aggregating a user's tasks."""

import math
from datetime import datetime
from typing import Iterable, Optional

from task_tracker.domain.models.base import utc_now
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.models.value_objects import TaskStatistics


class TaskStatisticsService:
    """
    Counts tasks by status and computes the completion rate.

    Cancelled tasks are left out of the active total. PENDING tasks are
    folded into the in-progress bucket while still being counted on their
    own. Failed tasks are left out of the completion-rate denominator.
    """

    def calculate(self, tasks: Iterable[Task], now: Optional[datetime] = None) -> TaskStatistics:
        now = now or utc_now()
        all_tasks = list(tasks)
        active = [t for t in all_tasks if t.status != TaskStatus.CANCELLED]

        def count(*statuses: TaskStatus) -> int:
            return sum(1 for t in active if t.status in statuses)

        total = len(active)
        completed = count(TaskStatus.COMPLETED)
        failed = count(TaskStatus.FAILED)

        return TaskStatistics(
            total_tasks=total,
            scheduled_tasks=count(TaskStatus.SCHEDULED),
            pending_tasks=count(TaskStatus.PENDING),
            in_progress_tasks=count(TaskStatus.IN_PROGRESS, TaskStatus.PENDING),
            completed_tasks=completed,
            failed_tasks=failed,
            cancelled_tasks=len(all_tasks) - total,
            overdue_tasks=sum(1 for t in active if t.is_overdue(now)),
            completion_rate=self.completion_rate(completed, total, failed),
        )

    @staticmethod
    def completion_rate(completed: int, total: int, failed: int) -> int:
        """Percentage of completable (non-failed) tasks that are done, half-up rounded."""
        completable = total - failed
        if completable <= 0:
            return 0
        return int(math.floor(completed / completable * 100 + 0.5))
