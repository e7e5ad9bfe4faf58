"""
Value objects for the task domain.
Immutable presentation facts and statistics insights derived from tasks.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Tuple, List, Dict, Any
from enum import Enum

from task_tracker.domain.models.base import ValueObject, ValidationError


class ProgressColor(str, Enum):
    """Progress bar color bands."""
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    COMPLETED = "completed"


class TaskAction(str, Enum):
    """Actions a user can take on a task card."""
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    COMPLETE = "complete"


class InsightType(str, Enum):
    """Insight severity types."""
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    INFO = "info"


STATUS_CLASSES = ("scheduled", "pending", "in-progress", "completed", "failed", "cancelled")

IN_PROGRESS_WARNING_THRESHOLD = 50
IN_PROGRESS_DANGER_THRESHOLD = 80


@dataclass(frozen=True)
class TaskDisplayData(ValueObject):
    """
    Presentation data for a task card.
    Built through one factory per status.
    """

    status_text: str
    status_class: str
    progress_color: str
    start_date_formatted: str
    deadline_formatted: Optional[str] = None
    overdue_message: Optional[str] = None
    available_actions: Tuple[str, ...] = field(default_factory=tuple)
    can_edit: bool = False
    can_delete: bool = False
    can_complete: bool = False
    icon: str = "📋"

    def validate(self) -> None:
        """Validate required fields and enum-like values."""
        if not self.status_text:
            raise ValidationError("status_text is required", "status_text")
        if not self.start_date_formatted:
            raise ValidationError("start_date_formatted is required", "start_date_formatted")

        if self.status_class not in STATUS_CLASSES:
            raise ValidationError(
                f"status_class must be one of: {', '.join(STATUS_CLASSES)}", "status_class"
            )

        colors = [c.value for c in ProgressColor]
        if self.progress_color not in colors:
            raise ValidationError(
                f"progress_color must be one of: {', '.join(colors)}", "progress_color"
            )

        actions = [a.value for a in TaskAction]
        for action in self.available_actions:
            if action not in actions:
                raise ValidationError(
                    f"Invalid action '{action}'. Must be one of: {', '.join(actions)}",
                    "available_actions"
                )

    @classmethod
    def for_scheduled(cls, start_date_formatted: str, deadline_formatted: Optional[str] = None) -> "TaskDisplayData":
        """Task waiting for its start date. Cannot be completed yet."""
        return cls(
            status_text="Scheduled",
            status_class="scheduled",
            progress_color=ProgressColor.SAFE.value,
            start_date_formatted=start_date_formatted,
            deadline_formatted=deadline_formatted,
            available_actions=(TaskAction.EDIT.value, TaskAction.DELETE.value),
            can_edit=True,
            can_delete=True,
            can_complete=False,
            icon="📅",
        )

    @classmethod
    def for_pending(
        cls,
        start_date_formatted: str,
        deadline_formatted: Optional[str] = None,
        overdue_message: Optional[str] = None,
    ) -> "TaskDisplayData":
        return cls(
            status_text="Pending",
            status_class="pending",
            progress_color=ProgressColor.SAFE.value,
            start_date_formatted=start_date_formatted,
            deadline_formatted=deadline_formatted,
            overdue_message=overdue_message,
            available_actions=(TaskAction.EDIT.value, TaskAction.DELETE.value, TaskAction.COMPLETE.value),
            can_edit=True,
            can_delete=True,
            can_complete=True,
            icon="⏸️",
        )

    @classmethod
    def for_in_progress(
        cls,
        start_date_formatted: str,
        deadline_formatted: Optional[str] = None,
        progress: int = 0,
        overdue_message: Optional[str] = None,
    ) -> "TaskDisplayData":
        """The progress color tightens as the deadline approaches."""
        if progress >= IN_PROGRESS_DANGER_THRESHOLD:
            color = ProgressColor.DANGER
        elif progress >= IN_PROGRESS_WARNING_THRESHOLD:
            color = ProgressColor.WARNING
        else:
            color = ProgressColor.SAFE

        return cls(
            status_text="In Progress",
            status_class="in-progress",
            progress_color=color.value,
            start_date_formatted=start_date_formatted,
            deadline_formatted=deadline_formatted,
            overdue_message=overdue_message,
            available_actions=(TaskAction.EDIT.value, TaskAction.DELETE.value, TaskAction.COMPLETE.value),
            can_edit=True,
            can_delete=True,
            can_complete=True,
            icon="🔄",
        )

    @classmethod
    def for_completed(cls, start_date_formatted: str, deadline_formatted: Optional[str] = None) -> "TaskDisplayData":
        return cls(
            status_text="Completed",
            status_class="completed",
            progress_color=ProgressColor.COMPLETED.value,
            start_date_formatted=start_date_formatted,
            deadline_formatted=deadline_formatted,
            available_actions=(TaskAction.VIEW.value, TaskAction.DELETE.value),
            can_edit=False,
            can_delete=True,
            can_complete=False,
            icon="✅",
        )

    @classmethod
    def for_failed(
        cls,
        start_date_formatted: str,
        deadline_formatted: Optional[str] = None,
        overdue_message: Optional[str] = None,
    ) -> "TaskDisplayData":
        """Failed tasks stay completable (late completion)."""
        return cls(
            status_text="Failed",
            status_class="failed",
            progress_color=ProgressColor.DANGER.value,
            start_date_formatted=start_date_formatted,
            deadline_formatted=deadline_formatted,
            overdue_message=overdue_message,
            available_actions=(TaskAction.VIEW.value, TaskAction.DELETE.value, TaskAction.COMPLETE.value),
            can_edit=False,
            can_delete=True,
            can_complete=True,
            icon="❌",
        )

    @classmethod
    def for_cancelled(cls, start_date_formatted: str, deadline_formatted: Optional[str] = None) -> "TaskDisplayData":
        return cls(
            status_text="Cancelled",
            status_class="cancelled",
            progress_color=ProgressColor.SAFE.value,
            start_date_formatted=start_date_formatted,
            deadline_formatted=deadline_formatted,
            available_actions=(TaskAction.VIEW.value,),
            can_edit=False,
            can_delete=False,
            can_complete=False,
            icon="🚫",
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["available_actions"] = list(self.available_actions)
        return data


@dataclass(frozen=True)
class TaskStatistics:
    """Raw task counts for one user."""

    total_tasks: int = 0
    scheduled_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0
    failed_tasks: int = 0
    cancelled_tasks: int = 0
    overdue_tasks: int = 0
    completion_rate: int = 0


@dataclass(frozen=True)
class StatisticsInsight(ValueObject):
    """An advisory message derived from task statistics."""

    type: str
    message: str
    icon: str
    priority: int = 0

    def validate(self) -> None:
        types = [t.value for t in InsightType]
        if self.type not in types:
            raise ValidationError(f"type must be one of: {', '.join(types)}", "type")
        if not self.message:
            raise ValidationError("message is required", "message")
        if not self.icon:
            raise ValidationError("icon is required", "icon")
        if self.priority < 0:
            raise ValidationError("priority must be a non-negative number", "priority")

    @classmethod
    def success(cls, message: str, priority: int = 1) -> "StatisticsInsight":
        return cls(InsightType.SUCCESS.value, message, "✅", priority)

    @classmethod
    def warning(cls, message: str, priority: int = 2) -> "StatisticsInsight":
        return cls(InsightType.WARNING.value, message, "⚠️", priority)

    @classmethod
    def danger(cls, message: str, priority: int = 3) -> "StatisticsInsight":
        return cls(InsightType.DANGER.value, message, "🚨", priority)

    @classmethod
    def info(cls, message: str, priority: int = 0) -> "StatisticsInsight":
        return cls(InsightType.INFO.value, message, "ℹ️", priority)

    @classmethod
    def generate_from_statistics(cls, stats: TaskStatistics) -> List["StatisticsInsight"]:
        """
        Apply the insight rules to a statistics snapshot.
        Returns insights sorted by priority, highest first.
        """
        total = stats.total_tasks
        pending = stats.pending_tasks
        in_progress = stats.in_progress_tasks
        completed = stats.completed_tasks
        overdue = stats.overdue_tasks
        rate = stats.completion_rate

        if total == 0:
            return [cls.info("You have no tasks yet. Create your first task!", 0)]

        insights: List[StatisticsInsight] = []

        if overdue == 1:
            insights.append(cls.danger("You have 1 overdue task. Handle it now!", 10))
        elif overdue > 1:
            insights.append(cls.danger(f"You have {overdue} overdue tasks. Handle them urgently!", 10))

        if pending > 10:
            insights.append(cls.warning(f"You have {pending} tasks not started yet. Prioritize them!", 8))
        elif pending >= 5:
            insights.append(cls.info(f"You have {pending} tasks not started yet.", 3))

        if total >= 5 and rate >= 80:
            insights.append(cls.success(f"Excellent! You have completed {rate}% of your tasks.", 7))
        elif total >= 5 and rate >= 50:
            insights.append(cls.success(f"Good job! You have completed {rate}% of your tasks.", 6))

        if total >= 5 and rate < 30:
            insights.append(cls.warning(f"Your completion rate is low ({rate}%). Keep pushing!", 5))

        if in_progress > 5:
            insights.append(cls.info(f"You have {in_progress} tasks in progress. Stay focused!", 4))

        if completed == total:
            insights.append(cls.success("🎉 Perfect! You have completed all of your tasks!", 9))

        if overdue == 0 and total >= 3 and (in_progress + completed) > 0:
            insights.append(cls.success("All tasks are on track. Keep it up!", 2))

        insights.sort(key=lambda insight: insight.priority, reverse=True)
        return insights

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
