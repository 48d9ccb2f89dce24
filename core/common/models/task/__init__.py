"""
Task models package for core.common.
"""

from core.common.models.task.task import (
    ISSUE_STATUSES,
    MaintenanceTask,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from core.common.models.task.parts_request import (
    PartsRequest,
    PartsRequestStatus,
    PartsUrgency,
)

__all__ = [
    "ISSUE_STATUSES",
    "MaintenanceTask",
    "PartsRequest",
    "PartsRequestStatus",
    "PartsUrgency",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
]
