"""
Domain models for the task tracker.
"""

from .base import (
    BaseEntity,
    DomainEvent,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    ForbiddenError,
    ValueObject,
)
from .task import Task, TaskStatus, TaskStatusChangedEvent
from .value_objects import (
    TaskDisplayData,
    TaskStatistics,
    StatisticsInsight,
    ProgressColor,
    TaskAction,
    InsightType,
)

__all__ = [
    "BaseEntity",
    "DomainEvent",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "ForbiddenError",
    "ValueObject",
    "Task",
    "TaskStatus",
    "TaskStatusChangedEvent",
    "TaskDisplayData",
    "TaskStatistics",
    "StatisticsInsight",
    "ProgressColor",
    "TaskAction",
    "InsightType",
]
