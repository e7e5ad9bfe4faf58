"""
Task domain model.
Represents a personal task with a time-driven status lifecycle.
"""

import math
from dataclasses import dataclass
from datetime import datetime, date, time, timezone
from typing import Optional, List, Union, Any
from enum import Enum

from task_tracker.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    DomainEvent,
    utc_now,
    as_utc,
)


TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

DateInput = Union[datetime, date, str, None]


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""
    SCHEDULED = "SCHEDULED"
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @classmethod
    def all_statuses(cls) -> List["TaskStatus"]:
        """All statuses in lifecycle order."""
        return list(cls)

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Check whether value is exactly one of the canonical tags."""
        if isinstance(value, cls):
            return True
        return isinstance(value, str) and value in cls._value2member_map_

    @classmethod
    def from_string(cls, value: Optional[str]) -> "TaskStatus":
        """
        Normalize a status string to its canonical tag.

        Accepts case variants and the legacy space-separated format
        ("In Progress"). Empty input defaults to PENDING.
        """
        if isinstance(value, cls):
            return value
        if not value or not str(value).strip():
            return cls.PENDING

        normalized = "_".join(str(value).strip().upper().split())
        if normalized in cls._value2member_map_:
            return cls(normalized)

        allowed = ", ".join(s.value for s in cls)
        raise ValidationError(
            f"Invalid task status: {value}. Must be one of: {allowed}",
            "status"
        )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_datetime(value: DateInput) -> Optional[datetime]:
    """
    Parse a date input into a timezone-aware datetime.
    Returns None when the value is empty or cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return as_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


# Domain Events

class TaskStatusChangedEvent(DomainEvent):
    """Event raised when task status changes."""

    def __init__(self, task_id: Optional[int], old_status: TaskStatus, new_status: TaskStatus):
        super().__init__()
        self.task_id = task_id
        self.old_status = old_status
        self.new_status = new_status

    @property
    def event_name(self) -> str:
        return "task.status.changed"


@dataclass(eq=False)
class Task(BaseEntity):
    """
    Task entity.

    Owns the lifecycle rules: validation, manual status transitions,
    auto-transition predicates and time-based progress. Use ``Task.create``
    for new tasks and ``Task.reconstruct`` when loading from storage.
    """

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    owner_id: str = ""
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        title: str,
        owner_id: str,
        description: Optional[str] = None,
        start_date: DateInput = None,
        deadline: DateInput = None,
    ) -> "Task":
        """
        Create a new, validated task.

        A missing or unparsable start date defaults to now. The initial
        status is SCHEDULED when the start date lies in the future,
        otherwise PENDING.
        """
        cls._validate_title(title)
        cls._validate_description(description)
        if not owner_id:
            raise ValidationError("User ID is required for task", "owner_id")

        now = utc_now()
        effective_start = parse_datetime(start_date) or now
        effective_deadline = cls._parse_deadline(deadline, effective_start)

        return cls(
            title=title.strip(),
            description=description.strip() if description else "",
            status=TaskStatus.SCHEDULED if effective_start > now else TaskStatus.PENDING,
            owner_id=owner_id,
            start_date=effective_start,
            deadline=effective_deadline,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstruct(
        cls,
        id: Optional[int],
        title: str,
        description: str,
        status: TaskStatus,
        owner_id: str,
        start_date: Optional[datetime],
        deadline: Optional[datetime],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Task":
        """Rehydrate a task from trusted persisted data, without validation."""
        return cls(
            id=id,
            title=title,
            description=description,
            status=status,
            owner_id=owner_id,
            start_date=start_date,
            deadline=deadline,
            created_at=created_at,
            updated_at=updated_at,
        )

    # Validation

    @staticmethod
    def _validate_title(title: Any) -> None:
        if not title or not isinstance(title, str):
            raise ValidationError("Task title is required", "title")
        if not title.strip():
            raise ValidationError("Task title cannot be empty", "title")
        if len(title.strip()) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Task title must not exceed {TITLE_MAX_LENGTH} characters", "title"
            )

    @staticmethod
    def _validate_description(description: Optional[str]) -> None:
        if description and len(description.strip()) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Task description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
                "description"
            )

    @staticmethod
    def _parse_deadline(deadline: DateInput, start_date: Optional[datetime]) -> Optional[datetime]:
        if not deadline:
            return None
        parsed = parse_datetime(deadline)
        if parsed is None:
            raise ValidationError("Invalid deadline date format", "deadline")
        if start_date is not None and parsed < as_utc(start_date):
            raise ValidationError("Deadline cannot be before start date", "deadline")
        return parsed

    @staticmethod
    def _coerce_status(value: Any) -> TaskStatus:
        if isinstance(value, TaskStatus):
            return value
        if not value:
            allowed = ", ".join(s.value for s in TaskStatus)
            raise ValidationError(f"Invalid task status. Must be one of: {allowed}", "status")
        return TaskStatus.from_string(value)

    # Field mutations

    def update_title(self, title: str) -> None:
        """Replace the title."""
        self._apply_title(title)
        self.mark_as_updated()

    def update_description(self, description: Optional[str]) -> None:
        """Replace the description; None clears it."""
        self._apply_description(description)
        self.mark_as_updated()

    def update_start_date(self, start_date: DateInput) -> None:
        """Move the start date. It may not fall after an existing deadline."""
        self._apply_start_date(start_date)
        self.mark_as_updated()

    def update_deadline(self, deadline: DateInput) -> None:
        """Set the deadline, or clear it when a falsy value is given."""
        self._apply_deadline(deadline)
        self.mark_as_updated()

    def update_status(self, new_status: Union[TaskStatus, str]) -> None:
        """
        Change status through the general transition table.

        FAILED, CANCELLED and SCHEDULED cannot be set here. A FAILED task may
        only move to COMPLETED, and a COMPLETED task cannot go straight back
        to PENDING.
        """
        self._apply_status(new_status)
        self.mark_as_updated()

    def update(
        self,
        title: Optional[str] = None,
        description: Any = ...,
        status: Union[TaskStatus, str, None] = None,
        start_date: DateInput = None,
        deadline: Any = ...,
    ) -> None:
        """
        Apply the provided fields in order: title, description, status,
        start date, deadline. Pass ``description=None`` or ``deadline=None``
        to clear them; leave them out to keep the current values.
        """
        if title is not None:
            self._apply_title(title)
        if description is not ...:
            self._apply_description(description)
        if status is not None:
            self._apply_status(status)
        if start_date is not None:
            self._apply_start_date(start_date)
        if deadline is not ...:
            self._apply_deadline(deadline)
        self.mark_as_updated()

    def _apply_title(self, title: str) -> None:
        self._validate_title(title)
        self.title = title.strip()

    def _apply_description(self, description: Optional[str]) -> None:
        self._validate_description(description)
        self.description = description.strip() if description else ""

    def _apply_start_date(self, start_date: DateInput) -> None:
        start = parse_datetime(start_date)
        if start is None:
            raise ValidationError("Invalid start date format", "start_date")
        if self.deadline is not None and start > as_utc(self.deadline):
            raise ValidationError("Start date cannot be after deadline", "start_date")
        self.start_date = start

    def _apply_deadline(self, deadline: DateInput) -> None:
        self.deadline = self._parse_deadline(deadline, self.start_date)

    def _apply_status(self, new_status: Union[TaskStatus, str]) -> None:
        target = self._coerce_status(new_status)

        if self.status == TaskStatus.FAILED and target != TaskStatus.COMPLETED:
            raise BusinessRuleViolation(
                "A failed task can only be marked as completed."
            )
        if target == TaskStatus.FAILED:
            raise BusinessRuleViolation(
                "Cannot manually set task to FAILED status. "
                "It is assigned automatically when the deadline passes."
            )
        if target == TaskStatus.CANCELLED:
            raise BusinessRuleViolation(
                "Cannot manually set task to CANCELLED. Use cancel_task() instead."
            )
        if target == TaskStatus.SCHEDULED:
            raise BusinessRuleViolation(
                "Cannot manually set task to SCHEDULED. It is derived from a future start date."
            )
        if self.status == TaskStatus.COMPLETED and target == TaskStatus.PENDING:
            raise BusinessRuleViolation(
                "Cannot change completed task back to pending. Set to In Progress first."
            )

        self._change_status(target)

    def _change_status(self, new_status: TaskStatus) -> None:
        old_status = self.status
        self.status = new_status
        if old_status != new_status:
            self.add_event(TaskStatusChangedEvent(self.id, old_status, new_status))

    # Dedicated transitions

    def mark_as_in_progress(self) -> None:
        """Start working on the task. Completed tasks cannot be restarted."""
        if self.status == TaskStatus.COMPLETED:
            raise BusinessRuleViolation("Cannot restart a completed task")
        self._change_status(TaskStatus.IN_PROGRESS)
        self.mark_as_updated()

    def mark_as_completed(self) -> None:
        """Complete the task from any state, including late completion of a FAILED task."""
        self._change_status(TaskStatus.COMPLETED)
        self.mark_as_updated()

    def mark_as_failed(self) -> None:
        """
        Mark the task as failed. No-op when already COMPLETED or FAILED.
        Callers check should_be_marked_as_failed() first.
        """
        if self.status in (TaskStatus.COMPLETED, TaskStatus.FAILED):
            return
        self._change_status(TaskStatus.FAILED)
        self.mark_as_updated()

    def reopen(self) -> None:
        """Reopen a task: COMPLETED goes back to IN_PROGRESS, others to PENDING."""
        if self.status == TaskStatus.FAILED:
            raise BusinessRuleViolation(
                "Cannot reopen a failed task. Create a new task instead."
            )
        if self.status == TaskStatus.COMPLETED:
            self._change_status(TaskStatus.IN_PROGRESS)
        else:
            self._change_status(TaskStatus.PENDING)
        self.mark_as_updated()

    def cancel_task(self) -> None:
        """Soft delete. No-op when already CANCELLED."""
        if self.status == TaskStatus.CANCELLED:
            return
        self._change_status(TaskStatus.CANCELLED)
        self.mark_as_updated()

    # Auto-transition predicates

    def should_transition_to_pending(self, now: Optional[datetime] = None) -> bool:
        """True when a SCHEDULED task has reached its start date."""
        if self.status != TaskStatus.SCHEDULED or self.start_date is None:
            return False
        now = now or utc_now()
        return now >= as_utc(self.start_date)

    def should_be_marked_as_failed(self, now: Optional[datetime] = None) -> bool:
        """True when an open task has passed its deadline."""
        if not self.deadline:
            return False
        if self.status in (TaskStatus.COMPLETED, TaskStatus.FAILED, TaskStatus.CANCELLED):
            return False
        now = now or utc_now()
        return now > as_utc(self.deadline)

    # Derived state

    def progress_percentage(self, now: Optional[datetime] = None) -> Optional[int]:
        """Share of the start-to-deadline window that has elapsed, 0-100."""
        if not self.deadline:
            return None
        if self.status == TaskStatus.COMPLETED:
            return 100

        now = now or utc_now()
        start = as_utc(self.start_date) if self.start_date else now
        end = as_utc(self.deadline)

        if now >= end:
            return 100
        if now <= start:
            return 0

        total = (end - start).total_seconds()
        elapsed = (now - start).total_seconds()
        return _round_half_up(elapsed / total * 100)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """
        True when the deadline has passed and the task is not completed.
        FAILED and CANCELLED tasks with a past deadline still count as overdue.
        """
        if not self.deadline or self.status == TaskStatus.COMPLETED:
            return False
        now = now or utc_now()
        return now > as_utc(self.deadline)

    # Queries

    def belongs_to_user(self, user_id: str) -> bool:
        return self.owner_id == user_id

    def is_scheduled(self) -> bool:
        return self.status == TaskStatus.SCHEDULED

    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING

    def is_in_progress(self) -> bool:
        return self.status == TaskStatus.IN_PROGRESS

    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_failed(self) -> bool:
        return self.status == TaskStatus.FAILED

    def is_cancelled(self) -> bool:
        return self.status == TaskStatus.CANCELLED
