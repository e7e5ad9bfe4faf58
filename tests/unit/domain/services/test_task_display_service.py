"""
Unit tests for the task display service.
"""

from datetime import datetime, timedelta, timezone

import pytest

from task_tracker.domain.models.base import ValidationError
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.services.task_display_service import (
    TaskDisplayService,
    calculate_overdue_message,
)


NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def build(status, start=None, deadline=None):
    return Task.reconstruct(
        id=1,
        title="Prepare slides",
        description="",
        status=status,
        owner_id="user-1",
        start_date=start or NOW - timedelta(days=1),
        deadline=deadline,
        created_at=NOW - timedelta(days=2),
        updated_at=NOW - timedelta(days=2),
    )


class TestOverdueMessage:
    """Test cases for calculate_overdue_message."""

    @pytest.mark.parametrize("elapsed, message", [
        (timedelta(days=1), "Overdue 1 day"),
        (timedelta(days=3, hours=5), "Overdue 3 days"),
        (timedelta(hours=1), "Overdue 1 hour"),
        (timedelta(hours=2, minutes=30), "Overdue 2 hours"),
        (timedelta(minutes=1, seconds=30), "Overdue 1 minute"),
        (timedelta(minutes=45), "Overdue 45 minutes"),
    ])
    def test_largest_whole_unit(self, elapsed, message):
        assert calculate_overdue_message(NOW - elapsed, NOW) == message

    def test_not_overdue(self):
        assert calculate_overdue_message(NOW + timedelta(minutes=5), NOW) is None
        assert calculate_overdue_message(None, NOW) is None


class TestTaskDisplayService:
    """Test cases for TaskDisplayService."""

    def test_format_date_in_display_timezone(self):
        service = TaskDisplayService("Asia/Ho_Chi_Minh")

        assert service.format_date(NOW) == "15/06/2025 19:00"

    def test_format_missing_date(self):
        assert TaskDisplayService().format_date(None) == "N/A"

    def test_naive_dates_are_read_as_utc(self):
        assert TaskDisplayService("UTC").format_date(datetime(2025, 1, 2, 3, 4)) == "02/01/2025 03:04"

    @pytest.mark.parametrize("name", ["Mars/Olympus_Mons", "", "../etc/passwd"])
    def test_unknown_timezone(self, name):
        with pytest.raises(ValidationError) as exc_info:
            TaskDisplayService(name)

        assert exc_info.value.field == "timezone"

    def test_pending_overdue(self):
        task = build(TaskStatus.PENDING, deadline=NOW - timedelta(hours=3))

        display = TaskDisplayService().build_display_data(task, NOW)

        assert display.status_class == "pending"
        assert display.overdue_message == "Overdue 3 hours"
        assert display.deadline_formatted == "15/06/2025 09:00"

    def test_in_progress_uses_progress_color(self):
        task = build(
            TaskStatus.IN_PROGRESS,
            start=NOW - timedelta(days=9),
            deadline=NOW + timedelta(days=1),
        )

        display = TaskDisplayService().build_display_data(task, NOW)

        assert display.progress_color == "danger"
        assert display.overdue_message is None

    def test_in_progress_without_deadline_is_safe(self):
        display = TaskDisplayService().build_display_data(build(TaskStatus.IN_PROGRESS), NOW)

        assert display.progress_color == "safe"
        assert display.deadline_formatted is None

    @pytest.mark.parametrize("status", [TaskStatus.SCHEDULED, TaskStatus.COMPLETED, TaskStatus.CANCELLED])
    def test_statuses_without_overdue_message(self, status):
        task = build(status, deadline=NOW - timedelta(days=2), start=NOW - timedelta(days=3))

        display = TaskDisplayService().build_display_data(task, NOW)

        assert display.overdue_message is None

    def test_failed_keeps_overdue_message(self):
        task = build(TaskStatus.FAILED, deadline=NOW - timedelta(days=2), start=NOW - timedelta(days=3))

        display = TaskDisplayService().build_display_data(task, NOW)

        assert display.status_text == "Failed"
        assert display.overdue_message == "Overdue 2 days"
        assert display.can_complete is True

    @pytest.mark.parametrize("status, css_class", [
        (TaskStatus.SCHEDULED, "scheduled"),
        (TaskStatus.PENDING, "pending"),
        (TaskStatus.IN_PROGRESS, "in-progress"),
        (TaskStatus.COMPLETED, "completed"),
        (TaskStatus.FAILED, "failed"),
        (TaskStatus.CANCELLED, "cancelled"),
    ])
    def test_dispatch_by_status(self, status, css_class):
        display = TaskDisplayService().build_display_data(build(status), NOW)

        assert display.status_class == css_class
