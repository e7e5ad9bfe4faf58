"""
Domain services.
"""

from .task_display_service import TaskDisplayService, calculate_overdue_message
from .statistics_service import TaskStatisticsService

__all__ = [
    "TaskDisplayService",
    "TaskStatisticsService",
    "calculate_overdue_message",
]
