"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .task_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",

    # Task DTOs
    "CreateTaskRequestDTO",
    "UpdateTaskBodyDTO",
    "UpdateTaskRequestDTO",
    "ChangeTaskStatusBodyDTO",
    "ChangeTaskStatusRequestDTO",
    "DeleteTaskRequestDTO",
    "GetTaskRequestDTO",
    "TaskListFilterRequestDTO",
    "TaskResponseDTO",
    "TaskListResponseDTO",
    "TaskDisplayResponseDTO",
    "TaskFilterDTO",
    "TaskListDisplayResponseDTO",
    "DeleteTaskResponseDTO",
    "InsightDTO",
    "TaskStatisticsResponseDTO",
    "StatisticsDisplayResponseDTO",
    "format_task_count",
]
