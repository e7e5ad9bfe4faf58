"""Task display service.
Derives presentation data (labels, colors, actions, formatted dates) from a task.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from task_tracker.domain.models.base import ValidationError, as_utc, utc_now
from task_tracker.domain.models.task import Task, TaskStatus
from task_tracker.domain.models.value_objects import TaskDisplayData


DATE_DISPLAY_FORMAT = "%d/%m/%Y %H:%M"
MISSING_DATE_TEXT = "N/A"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def calculate_overdue_message(deadline: Optional[datetime], now: Optional[datetime] = None) -> Optional[str]:
    """
    Describe how long ago the deadline passed, in the largest whole unit.
    Returns None when there is no deadline or it has not passed.
    """
    if not deadline:
        return None

    now = now or utc_now()
    elapsed_seconds = (now - as_utc(deadline)).total_seconds()
    if elapsed_seconds <= 0:
        return None

    minutes = int(elapsed_seconds // 60)
    hours = int(elapsed_seconds // 3600)
    days = int(elapsed_seconds // 86400)

    if days > 0:
        return f"Overdue {_plural(days, 'day')}"
    if hours > 0:
        return f"Overdue {_plural(hours, 'hour')}"
    return f"Overdue {_plural(minutes, 'minute')}"


class TaskDisplayService:
    """
    Domain service that maps a task's status and time-derived state to
    display data. Dates are rendered in the configured timezone.
    """

    def __init__(self, timezone_name: str = "UTC"):
        try:
            self.timezone = ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValidationError(f"Unknown timezone: {timezone_name}", "timezone")

    def format_date(self, value: Optional[datetime]) -> str:
        """Format as DD/MM/YYYY HH:MM in the display timezone."""
        if value is None:
            return MISSING_DATE_TEXT
        return as_utc(value).astimezone(self.timezone).strftime(DATE_DISPLAY_FORMAT)

    def build_display_data(self, task: Task, now: Optional[datetime] = None) -> TaskDisplayData:
        """Pick the display factory for the task's status."""
        now = now or utc_now()

        start_formatted = self.format_date(task.start_date)
        deadline_formatted = self.format_date(task.deadline) if task.deadline else None
        overdue_message = (
            calculate_overdue_message(task.deadline, now) if task.is_overdue(now) else None
        )

        status = task.status
        if status == TaskStatus.SCHEDULED:
            return TaskDisplayData.for_scheduled(start_formatted, deadline_formatted)
        if status == TaskStatus.IN_PROGRESS:
            return TaskDisplayData.for_in_progress(
                start_formatted,
                deadline_formatted,
                task.progress_percentage(now) or 0,
                overdue_message,
            )
        if status == TaskStatus.COMPLETED:
            return TaskDisplayData.for_completed(start_formatted, deadline_formatted)
        if status == TaskStatus.FAILED:
            return TaskDisplayData.for_failed(start_formatted, deadline_formatted, overdue_message)
        if status == TaskStatus.CANCELLED:
            return TaskDisplayData.for_cancelled(start_formatted, deadline_formatted)
        return TaskDisplayData.for_pending(start_formatted, deadline_formatted, overdue_message)
