"""
Dashboard statistics for PlantOps.
"""

import logging
from typing import Any, Optional

from django.db.models import Count, Q
from django.utils import timezone

from core.common.models import (
    Asset,
    MaintenanceTask,
    PartsRequest,
    PartsRequestStatus,
    PlantRoom,
    PlantRoomLog,
    TaskStatus,
    TeamMember,
)

logger = logging.getLogger("plantops")


def get_dashboard_stats(team_member: Optional[TeamMember] = None) -> dict[str, Any]:
    """
    Get headline counts and chart data for the dashboard.

    Args:
        team_member: The member viewing the dashboard. Engineers also get
            counts of their own open and overdue work.

    Returns:
        Dictionary with "stats" and "chart_data" keys
    """
    today = timezone.localdate()
    tasks = MaintenanceTask.objects.all()
    overdue_filter = Q(due_date__lt=today) & ~Q(status=TaskStatus.COMPLETED)

    task_counts = tasks.aggregate(
        total=Count("id"),
        open=Count("id", filter=Q(status=TaskStatus.OPEN)),
        completed=Count("id", filter=Q(status=TaskStatus.COMPLETED)),
        overdue=Count("id", filter=overdue_filter),
    )

    my_tasks = 0
    my_overdue_tasks = 0
    if team_member is not None and team_member.is_engineer:
        mine = tasks.filter(assigned_to=team_member)
        my_tasks = mine.count()
        my_overdue_tasks = mine.filter(overdue_filter).count()

    asset_counts = Asset.objects.aggregate(
        total=Count("id"),
        operational=Count("id", filter=Q(operational=True)),
    )

    parts_counts = PartsRequest.objects.aggregate(
        total=Count("id"),
        pending=Count(
            "id",
            filter=Q(status__in=[PartsRequestStatus.REQUESTED, PartsRequestStatus.ORDERED]),
        ),
    )

    total_tasks = task_counts["total"]
    completion_rate = (task_counts["completed"] / total_tasks) * 100 if total_tasks else 0

    tasks_by_type = [
        {"name": item["task_type"] or "Unknown", "count": item["count"]}
        for item in tasks.values("task_type").annotate(count=Count("id")).order_by("task_type")
    ]
    assets_by_type = [
        {
            "name": item["asset_type"] or "Unknown",
            "total": item["total"],
            "operational": item["operational"],
        }
        for item in Asset.objects.values("asset_type")
        .annotate(total=Count("id"), operational=Count("id", filter=Q(operational=True)))
        .order_by("asset_type")
    ]

    stats = {
        "total_plant_rooms": PlantRoom.objects.count(),
        "total_assets": asset_counts["total"],
        "operational_assets": asset_counts["operational"],
        "total_engineers": TeamMember.objects.count(),
        "total_tasks": total_tasks,
        "open_tasks": task_counts["open"],
        "overdue_tasks": task_counts["overdue"],
        "completed_tasks": task_counts["completed"],
        "my_tasks": my_tasks,
        "my_overdue_tasks": my_overdue_tasks,
        "total_logs": PlantRoomLog.objects.count(),
        "parts_requests": parts_counts["total"],
        "pending_parts": parts_counts["pending"],
        "completion_rate": round(completion_rate, 1),
    }

    logger.debug(f"Dashboard stats computed: {stats}")
    return {
        "stats": stats,
        "chart_data": {
            "tasks_by_type": tasks_by_type,
            "assets_by_type": assets_by_type,
        },
    }
