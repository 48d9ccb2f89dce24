"""
Models for core.common.
"""

from core.common.models.asset import Asset, MaintenanceFrequency
from core.common.models.log import LogStatus, PlantRoomLog
from core.common.models.plant_room import PlantRoom, PlantRoomType
from core.common.models.task import (
    ISSUE_STATUSES,
    MaintenanceTask,
    PartsRequest,
    PartsRequestStatus,
    PartsUrgency,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from core.common.models.team import TeamMember, TeamRole

__all__ = [
    "Asset",
    "ISSUE_STATUSES",
    "LogStatus",
    "MaintenanceFrequency",
    "MaintenanceTask",
    "PartsRequest",
    "PartsRequestStatus",
    "PartsUrgency",
    "PlantRoom",
    "PlantRoomLog",
    "PlantRoomType",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "TeamMember",
    "TeamRole",
]
