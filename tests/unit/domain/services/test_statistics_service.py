"""
Unit tests for the statistics service.
"""

from datetime import datetime, timedelta, timezone

import pytest

from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.services.statistics_service import TaskStatisticsService


NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def build(status, deadline=None):
    return Task.reconstruct(
        id=None,
        title="Task",
        description="",
        status=status,
        owner_id="user-1",
        start_date=NOW - timedelta(days=5),
        deadline=deadline,
        created_at=NOW - timedelta(days=5),
        updated_at=NOW - timedelta(days=5),
    )


class TestTaskStatisticsService:
    """Test cases for TaskStatisticsService."""

    def test_completion_rate_leaves_out_failed_tasks(self):
        """Failed tasks leave the denominator: 4 completed out of 8 is 50%."""
        tasks = (
            [build(TaskStatus.FAILED)] * 2
            + [build(TaskStatus.COMPLETED)] * 4
            + [build(TaskStatus.PENDING)] * 4
        )

        stats = TaskStatisticsService().calculate(tasks, NOW)

        assert stats.total_tasks == 10
        assert stats.completion_rate == 50

    def test_counts(self):
        past = NOW - timedelta(days=1)
        tasks = [
            build(TaskStatus.SCHEDULED),
            build(TaskStatus.PENDING, deadline=past),
            build(TaskStatus.PENDING),
            build(TaskStatus.IN_PROGRESS),
            build(TaskStatus.COMPLETED, deadline=past),
            build(TaskStatus.FAILED, deadline=past),
            build(TaskStatus.CANCELLED, deadline=past),
        ]

        stats = TaskStatisticsService().calculate(tasks, NOW)

        assert stats.total_tasks == 6
        assert stats.scheduled_tasks == 1
        assert stats.pending_tasks == 2
        assert stats.in_progress_tasks == 3
        assert stats.completed_tasks == 1
        assert stats.failed_tasks == 1
        assert stats.cancelled_tasks == 1
        # The cancelled task is left out, the completed one is never overdue
        assert stats.overdue_tasks == 2
        assert stats.completion_rate == 20

    def test_empty(self):
        stats = TaskStatisticsService().calculate([], NOW)

        assert stats.total_tasks == 0
        assert stats.completion_rate == 0

    @pytest.mark.parametrize("completed, total, failed, rate", [
        (0, 0, 0, 0),
        (0, 3, 3, 0),
        (1, 3, 0, 33),
        (2, 3, 0, 67),
        (1, 8, 0, 13),
        (3, 3, 0, 100),
    ])
    def test_completion_rate(self, completed, total, failed, rate):
        assert TaskStatisticsService.completion_rate(completed, total, failed) == rate
