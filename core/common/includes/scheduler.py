"""
Recurring maintenance (PPM) scheduling.

Works out when assets next fall due for service, raises PPM tasks for the
ones that have, and reports on tasks that have slipped past their due date.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.utils import timezone

from core.common.code_generator import CodeGenerator
from core.common.includes.store import StoreError, TaskStoreInterface
from core.common.includes.types import (
    AutomationResult,
    OverdueTask,
    OverdueTasksResult,
    PPMGenerationResult,
    TaskCreationResult,
    TaskRecord,
)
from core.common.models import TaskPriority, TaskStatus, TaskType

logger = logging.getLogger("plantops")

SERVICE_INTERVALS = {
    "daily": relativedelta(days=1),
    "weekly": relativedelta(weeks=1),
    "fortnightly": relativedelta(weeks=2),
    "monthly": relativedelta(months=1),
    "quarterly": relativedelta(months=3),
    "annually": relativedelta(months=12),
}
DEFAULT_SERVICE_INTERVAL = relativedelta(months=1)

# Overdue thresholds in days
DUE_DATE_RESET_AFTER_DAYS = 7
HIGH_PRIORITY_AFTER_DAYS = 30

FOLLOW_UP_SOURCE_TYPES = ("log", "form")


def _get_store(store: Optional[TaskStoreInterface]) -> TaskStoreInterface:
    if store is not None:
        return store

    from core.common.includes.django_store import DjangoTaskStore

    return DjangoTaskStore()


def _as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return isoparse(value).date()


def calculate_next_service_date(last_service_date: Union[date, datetime, str], frequency: Optional[str]) -> date:
    """
    Return the date an asset is next due for service.

    The frequency label is case-insensitive. Unknown or empty labels fall
    back to a monthly interval. Month arithmetic clamps to the end of the
    month, so 31 January plus one month is the last day of February.
    """
    interval = SERVICE_INTERVALS.get((frequency or "").strip().lower(), DEFAULT_SERVICE_INTERVAL)
    return _as_date(last_service_date) + interval


def _ppm_priority(days_overdue: int) -> str:
    if days_overdue > HIGH_PRIORITY_AFTER_DAYS:
        return TaskPriority.HIGH
    if days_overdue > DUE_DATE_RESET_AFTER_DAYS:
        return TaskPriority.MEDIUM
    return TaskPriority.LOW


def _ppm_notes(asset, days_overdue: int) -> str:
    due_text = f"{days_overdue} days overdue." if days_overdue > 0 else "Due today."
    return (
        f"Auto-generated PPM task for {asset.asset_name}. "
        f"Last service: {_as_date(asset.last_service_date).isoformat()}. {due_text}"
    )


def generate_auto_ppm_tasks(assigned_to=None, store: Optional[TaskStoreInterface] = None) -> PPMGenerationResult:
    """
    Create PPM tasks for every operational asset whose service has fallen due.

    Args:
        assigned_to: Optional team member id to assign the new tasks to.
        store: Data access to use, defaults to the ORM backed store.

    Returns:
        PPMGenerationResult. Failing to load assets or plant rooms aborts the
        run with nothing created and ``aborted`` set. All new tasks are
        written in one batch, so ``created`` is either the batch size or zero.
    """
    store = _get_store(store)
    result = PPMGenerationResult()

    try:
        try:
            assets = store.list_operational_assets_with_last_service()
        except StoreError as e:
            logger.error(f"PPM generation aborted, could not load assets: {e}")
            result.errors.append(str(e))
            result.aborted = True
            return result

        if not assets:
            result.details.append({"action": "no_assets", "message": "No assets found"})
            return result

        try:
            plant_rooms = store.map_plant_room_external_ids(
                {asset.plant_room_ref for asset in assets}
            )
        except StoreError as e:
            logger.error(f"PPM generation aborted, could not load plant rooms: {e}")
            result.errors.append(str(e))
            result.aborted = True
            return result

        today = timezone.localdate()
        batch = []

        for asset in assets:
            if not asset.last_service_date or not asset.frequency:
                continue

            next_service_date = calculate_next_service_date(asset.last_service_date, asset.frequency)
            days_difference = (today - next_service_date).days
            needs_service = days_difference >= 0

            detail = {
                "asset_id": asset.asset_id,
                "asset_name": asset.asset_name,
                "last_service_date": _as_date(asset.last_service_date).isoformat(),
                "frequency": asset.frequency,
                "next_service_date": next_service_date.isoformat(),
                "days_difference": days_difference,
                "needs_service": needs_service,
                "action": "not_due",
            }
            result.details.append(detail)

            if not needs_service:
                continue

            try:
                existing = store.find_existing_ppm_task(asset.id, next_service_date)
            except StoreError as e:
                logger.error(f"Duplicate check failed for asset {asset.asset_id}: {e}")
                result.errors.append(f"Duplicate check failed for asset {asset.asset_id}: {e}")
                detail["action"] = "lookup_failed"
                continue

            if existing is not None:
                detail["action"] = "skipped_existing"
                continue

            plant_room_pk = plant_rooms.get(asset.plant_room_ref)
            if plant_room_pk is None:
                logger.warning(
                    f"Asset {asset.asset_id} is due for service but plant room "
                    f"'{asset.plant_room_ref}' could not be resolved; no task created"
                )
                detail["action"] = "skipped_no_plant_room"
                continue

            batch.append(
                TaskRecord(
                    task_id=CodeGenerator.task_id("AUTO-PPM", asset.asset_id),
                    plant_room_id=plant_room_pk,
                    asset_id=asset.id,
                    assigned_to_id=assigned_to or None,
                    due_date=today if days_difference > DUE_DATE_RESET_AFTER_DAYS else next_service_date,
                    task_type=TaskType.PPM,
                    status=TaskStatus.OPEN,
                    priority=_ppm_priority(days_difference),
                    notes=_ppm_notes(asset, days_difference),
                )
            )
            detail["action"] = "created"

        if batch:
            try:
                result.created = store.insert_tasks(batch)
            except StoreError as e:
                logger.error(f"Failed to insert {len(batch)} PPM tasks: {e}")
                result.errors.append(str(e))
                for detail in result.details:
                    if detail["action"] == "created":
                        detail["action"] = "insert_failed"

    except Exception as e:
        logger.exception("Unexpected error while generating PPM tasks")
        result.errors.append(f"Unexpected error in generate_auto_ppm_tasks: {e}")

    logger.info(f"PPM generation finished: {result.created} created, {len(result.errors)} errors")
    return result


def get_overdue_tasks(store: Optional[TaskStoreInterface] = None) -> OverdueTasksResult:
    """
    Return every task that is not completed and was due before today.

    A failed query is logged and reported through ``error`` rather than
    raised, so callers can tell an empty result from a failed one.
    """
    store = _get_store(store)
    today = timezone.localdate()

    try:
        tasks = store.list_incomplete_tasks_due_before(today)
    except StoreError as e:
        logger.error(f"Failed to fetch overdue tasks: {e}")
        return OverdueTasksResult(error=str(e))

    overdue = [
        OverdueTask(
            id=task.id,
            task_id=task.task_id,
            asset_name=task.asset.asset_name if task.asset else "General Task",
            plant_room_block=task.plant_room.block if task.plant_room and task.plant_room.block else "Unknown",
            due_date=task.due_date,
            assigned_engineer_email=task.assigned_to.email if task.assigned_to and task.assigned_to.email else "Unassigned",
            priority=task.priority,
            days_past_due=(today - task.due_date).days,
        )
        for task in tasks
    ]
    return OverdueTasksResult(tasks=overdue)


def create_follow_up_task(
    source_type: str,
    source_id: str,
    issue: str,
    plant_room_id,
    asset_id=None,
    priority: str = TaskPriority.MEDIUM,
    store: Optional[TaskStoreInterface] = None,
) -> TaskCreationResult:
    """Raise a corrective task from a plant room log or inspection form."""
    source_type = (source_type or "").lower()
    if source_type not in FOLLOW_UP_SOURCE_TYPES:
        return TaskCreationResult(success=False, error=f"Unknown follow-up source type: {source_type}")
    if priority not in TaskPriority.values:
        return TaskCreationResult(success=False, error=f"Invalid priority: {priority}")

    store = _get_store(store)
    due_date = timezone.localdate() + timedelta(days=settings.FOLLOW_UP_TASK_DUE_DAYS)
    record = TaskRecord(
        task_id=CodeGenerator.task_id("FOLLOWUP", source_type.upper()),
        plant_room_id=plant_room_id,
        asset_id=asset_id or None,
        due_date=due_date,
        task_type=TaskType.CORRECTIVE,
        status=TaskStatus.OPEN,
        priority=priority,
        notes=f"Follow-up task created from {source_type} (ID: {source_id}). Issue: {issue}",
    )

    try:
        task = store.insert_task(record)
    except StoreError as e:
        logger.error(f"Failed to create follow-up task from {source_type} {source_id}: {e}")
        return TaskCreationResult(success=False, error=str(e))

    logger.info(f"Follow-up task {task.task_id} created from {source_type} {source_id}")
    return TaskCreationResult(success=True, task_id=task.task_id)


def run_task_automation(assigned_to=None, store: Optional[TaskStoreInterface] = None) -> AutomationResult:
    """
    Daily automation run: raise due PPM tasks, then count overdue work.

    This is the only implementation of the run. The HTTP endpoint, the
    Celery beat task and the management command all call it.
    The result is marked failed when PPM generation was aborted.
    """
    store = _get_store(store)

    ppm = generate_auto_ppm_tasks(assigned_to=assigned_to, store=store)
    overdue = get_overdue_tasks(store=store)

    result = AutomationResult(
        tasks_created=ppm.created,
        overdue_tasks_found=len(overdue.tasks),
        errors=list(ppm.errors),
        results=ppm.details,
        failed=ppm.aborted,
    )
    if not overdue.ok:
        result.errors.append(f"Overdue task query failed: {overdue.error}")

    logger.info(
        f"Task automation finished: {result.tasks_created} tasks created, "
        f"{result.overdue_tasks_found} overdue, {len(result.errors)} errors"
    )
    return result
