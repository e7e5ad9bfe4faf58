"""
Application layer use cases.
Business logic for the task tracker.
"""

from .base_use_case import *
from .task_use_cases import *
from .query_use_cases import *
from .display_use_cases import *

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "AuthorizedUseCase",
    "TaskUseCase",

    # Task Commands
    "CreateTaskUseCase",
    "UpdateTaskUseCase",
    "ChangeTaskStatusUseCase",
    "DeleteTaskUseCase",

    # Task Queries
    "ListTasksUseCase",
    "GetTaskUseCase",
    "GetTaskStatisticsUseCase",
    "parse_status_filter",

    # Display Queries
    "GetTaskListForDisplayUseCase",
    "GetTaskForDisplayUseCase",
    "GetStatisticsForDisplayUseCase",
]
