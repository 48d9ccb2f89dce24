"""
Corrective maintenance workflow.

Issues found while working a task are tracked by moving the task to an
issue status and raising corrective tasks, including the installation work
that follows a parts delivery.
"""

import logging
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from core.common.code_generator import CodeGenerator
from core.common.exceptions import InvalidStatusTransitionException
from core.common.includes.types import TaskCreationResult
from core.common.models import (
    ISSUE_STATUSES,
    MaintenanceTask,
    PartsRequest,
    PartsRequestStatus,
    PartsUrgency,
    TaskPriority,
    TaskStatus,
    TaskType,
)

logger = logging.getLogger("plantops")

DAYS_DUE_BY_URGENCY = {
    PartsUrgency.CRITICAL: 1,
    PartsUrgency.HIGH: 2,
    PartsUrgency.MEDIUM: 5,
    PartsUrgency.LOW: 7,
}


def _priority_for_urgency(urgency):
    if urgency == PartsUrgency.CRITICAL:
        return TaskPriority.HIGH
    return urgency


def create_corrective_task(
    original_task_id,
    reason,
    urgency=PartsUrgency.MEDIUM,
    assign_to_original_engineer=False,
    days_from_now=None,
    additional_notes="",
):
    """
    Raise a corrective maintenance task against the plant room and asset
    of an existing task.

    Args:
        original_task_id: Primary key of the task the issue was found on.
        reason: Why the corrective work is needed.
        urgency: Low, Medium, High or Critical. Critical tasks get High priority.
        assign_to_original_engineer: Carry over the original assignee.
        days_from_now: Explicit due offset; otherwise derived from urgency.
        additional_notes: Appended to the task notes.

    Returns:
        TaskCreationResult carrying the new task id.
    """
    if urgency not in DAYS_DUE_BY_URGENCY:
        return TaskCreationResult(success=False, error=f"Invalid urgency: {urgency}")

    try:
        original = MaintenanceTask.objects.get(id=original_task_id)
    except (MaintenanceTask.DoesNotExist, ValidationError):
        return TaskCreationResult(success=False, error="Original task not found")

    days = DAYS_DUE_BY_URGENCY[urgency] if days_from_now is None else days_from_now
    notes = f"{reason}. Original task: {original.task_id}"
    if additional_notes:
        notes = f"{notes}. {additional_notes}"

    try:
        task = MaintenanceTask.objects.create(
            task_id=CodeGenerator.task_id("CORRECTIVE", original.task_id),
            plant_room_id=original.plant_room_id,
            asset_id=original.asset_id,
            assigned_to_id=original.assigned_to_id if assign_to_original_engineer else None,
            due_date=timezone.localdate() + timedelta(days=days),
            task_type=TaskType.CORRECTIVE,
            status=TaskStatus.OPEN,
            priority=_priority_for_urgency(urgency),
            notes=notes,
        )
    except DatabaseError as e:
        logger.error(f"Failed to create corrective task for {original.task_id}: {e}")
        return TaskCreationResult(success=False, error=str(e))

    logger.info(f"Corrective task {task.task_id} created from {original.task_id}")
    return TaskCreationResult(success=True, task_id=task.task_id)


def update_task_with_issue(task_id, new_status, reason, parts_required=None, follow_up_date=None):
    """
    Put a task into an issue status.

    Requires Follow-up also raises a Medium corrective task for the same
    engineer; the returned task_id is that corrective task.
    """
    if new_status not in ISSUE_STATUSES:
        return TaskCreationResult(success=False, error=f"Invalid issue status: {new_status}")

    try:
        task = MaintenanceTask.objects.get(id=task_id)
    except (MaintenanceTask.DoesNotExist, ValidationError):
        return TaskCreationResult(success=False, error="Task not found")

    notes = reason
    if parts_required:
        notes = f"{notes}. Parts required: {', '.join(parts_required)}"
    if follow_up_date:
        notes = f"{notes}. Follow up by {follow_up_date}"

    try:
        with transaction.atomic():
            task.transition_to(new_status, notes=notes)

            if new_status != TaskStatus.REQUIRES_FOLLOW_UP:
                return TaskCreationResult(success=True)

            corrective = create_corrective_task(
                original_task_id=task.id,
                reason=reason,
                urgency=PartsUrgency.MEDIUM,
                assign_to_original_engineer=True,
            )
            if not corrective.success:
                # Roll the status change back with the failed task creation.
                transaction.set_rollback(True)
            return corrective
    except InvalidStatusTransitionException as e:
        return TaskCreationResult(success=False, error=str(e.detail))
    except DatabaseError as e:
        logger.error(f"Failed to update task {task.task_id} with issue: {e}")
        return TaskCreationResult(success=False, error=str(e))


def handle_parts_received(parts_request_id):
    """
    Record a parts delivery and raise the installation task.

    The original task goes back to In Progress once the installation task
    exists.
    """
    try:
        parts_request = PartsRequest.objects.select_related("task").get(id=parts_request_id)
    except (PartsRequest.DoesNotExist, ValidationError):
        return TaskCreationResult(success=False, error="Parts request not found")

    part_label = f"{parts_request.quantity}x {parts_request.part_name}"
    if parts_request.part_number:
        part_label = f"{part_label} ({parts_request.part_number})"

    try:
        with transaction.atomic():
            parts_request.status = PartsRequestStatus.RECEIVED
            parts_request.received_date = timezone.localdate()
            parts_request.save(update_fields=["status", "received_date", "last_modified_at"])

            corrective = create_corrective_task(
                original_task_id=parts_request.task_id,
                reason=(
                    f"Parts received: {parts_request.part_name}. "
                    "Complete installation and return equipment to service."
                ),
                urgency=parts_request.urgency,
                assign_to_original_engineer=True,
                days_from_now=1 if parts_request.urgency == PartsUrgency.CRITICAL else 2,
                additional_notes=f"Received parts: {part_label}",
            )
            if not corrective.success:
                transaction.set_rollback(True)
                return corrective

            parts_request.corrective_task = MaintenanceTask.objects.get(task_id=corrective.task_id)
            parts_request.save(update_fields=["corrective_task", "last_modified_at"])

            parts_request.task.transition_to(
                TaskStatus.IN_PROGRESS,
                notes=f"Parts received. Corrective task created: {corrective.task_id}",
            )
    except InvalidStatusTransitionException as e:
        return TaskCreationResult(success=False, error=str(e.detail))
    except DatabaseError as e:
        logger.error(f"Failed to process received parts for request {parts_request_id}: {e}")
        return TaskCreationResult(success=False, error=str(e))

    logger.info(f"Parts request {parts_request.id} received, installation task {corrective.task_id}")
    return corrective


def mark_parts_installed(parts_request_id):
    """Mark parts as installed and complete the installation task, if any."""
    try:
        parts_request = PartsRequest.objects.select_related("corrective_task").get(id=parts_request_id)
    except (PartsRequest.DoesNotExist, ValidationError):
        return TaskCreationResult(success=False, error="Parts request not found")

    corrective_task = parts_request.corrective_task
    try:
        with transaction.atomic():
            parts_request.status = PartsRequestStatus.INSTALLED
            parts_request.installed_date = timezone.localdate()
            parts_request.save(update_fields=["status", "installed_date", "last_modified_at"])

            if corrective_task is not None:
                corrective_task.transition_to(
                    TaskStatus.COMPLETED,
                    notes=f"Parts installation completed: {parts_request.part_name}",
                )
    except DatabaseError as e:
        logger.error(f"Failed to mark parts request {parts_request_id} installed: {e}")
        return TaskCreationResult(success=False, error=str(e))

    logger.info(f"Parts request {parts_request.id} installed")
    return TaskCreationResult(
        success=True,
        task_id=corrective_task.task_id if corrective_task is not None else None,
    )
