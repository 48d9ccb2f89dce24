"""
ORM backed implementation of the scheduler's task store.
"""

import logging
from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from core.common.includes.store import StoreError, TaskStoreInterface
from core.common.includes.types import TaskRecord
from core.common.models import (
    Asset,
    MaintenanceTask,
    PlantRoom,
    TaskStatus,
    TaskType,
)

logger = logging.getLogger("plantops")


class DjangoTaskStore(TaskStoreInterface):
    """Task store over the default database connection."""

    def list_operational_assets_with_last_service(self) -> list[Asset]:
        try:
            return list(
                Asset.objects.filter(operational=True, last_service_date__isnull=False)
            )
        except DatabaseError as e:
            raise StoreError(f"Failed to fetch assets: {e}") from e

    def map_plant_room_external_ids(self, external_ids: Iterable[str]) -> dict[str, UUID]:
        ids = {external_id for external_id in external_ids if external_id}
        try:
            rows = PlantRoom.objects.filter(plant_room_id__in=ids).values_list(
                "plant_room_id", "id"
            )
            return dict(rows)
        except DatabaseError as e:
            raise StoreError(f"Failed to fetch plant rooms: {e}") from e

    def find_existing_ppm_task(self, asset_id: UUID, min_due_date: date) -> Optional[MaintenanceTask]:
        try:
            return MaintenanceTask.objects.filter(
                asset_id=asset_id,
                task_type=TaskType.PPM,
                due_date__gte=min_due_date,
            ).first()
        except DatabaseError as e:
            raise StoreError(f"Failed to look up PPM tasks for asset {asset_id}: {e}") from e

    def insert_tasks(self, records: list[TaskRecord]) -> int:
        tasks = [self._build_task(record) for record in records]
        try:
            with transaction.atomic():
                MaintenanceTask.objects.bulk_create(tasks)
        except (DatabaseError, ValidationError) as e:
            raise StoreError(f"Failed to insert {len(tasks)} tasks: {e}") from e

        logger.info(f"Inserted {len(tasks)} maintenance tasks")
        return len(tasks)

    def list_incomplete_tasks_due_before(self, day: date) -> list[MaintenanceTask]:
        try:
            return list(
                MaintenanceTask.objects.exclude(status=TaskStatus.COMPLETED)
                .filter(due_date__lt=day)
                .select_related("asset", "plant_room", "assigned_to")
                .order_by("due_date")
            )
        except DatabaseError as e:
            raise StoreError(f"Failed to fetch overdue tasks: {e}") from e

    def insert_task(self, record: TaskRecord) -> MaintenanceTask:
        try:
            if not PlantRoom.objects.filter(id=record.plant_room_id).exists():
                raise StoreError(f"Plant room {record.plant_room_id} not found")
            if record.asset_id and not Asset.objects.filter(id=record.asset_id).exists():
                raise StoreError(f"Asset {record.asset_id} not found")

            with transaction.atomic():
                task = self._build_task(record)
                task.save(force_insert=True)
        except (DatabaseError, ValidationError) as e:
            raise StoreError(f"Failed to insert task {record.task_id}: {e}") from e

        logger.info(f"Inserted maintenance task {task.task_id}")
        return task

    @staticmethod
    def _build_task(record: TaskRecord) -> MaintenanceTask:
        return MaintenanceTask(
            task_id=record.task_id,
            plant_room_id=record.plant_room_id,
            asset_id=record.asset_id,
            assigned_to_id=record.assigned_to_id,
            due_date=record.due_date,
            task_type=record.task_type,
            status=record.status,
            priority=record.priority,
            notes=record.notes,
        )
