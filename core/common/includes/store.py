from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from core.common.includes.types import TaskRecord


class StoreError(Exception):
    """Raised by store implementations when a read or write fails."""
    pass


class TaskStoreInterface(ABC):
    """Data access used by the maintenance scheduler."""

    @abstractmethod
    def list_operational_assets_with_last_service(self) -> list:
        """Return operational assets that have a recorded last service date."""
        pass

    @abstractmethod
    def map_plant_room_external_ids(self, external_ids: Iterable[str]) -> dict[str, UUID]:
        """Map external plant room identifiers to internal primary keys."""
        pass

    @abstractmethod
    def find_existing_ppm_task(self, asset_id: UUID, min_due_date: date) -> Optional[object]:
        """Return a PPM task for the asset due on or after min_due_date, if any."""
        pass

    @abstractmethod
    def insert_tasks(self, records: list[TaskRecord]) -> int:
        """
        Insert all records in one atomic operation.

        Either every record is written or none is; failure raises StoreError.
        """
        pass

    @abstractmethod
    def list_incomplete_tasks_due_before(self, day: date) -> list:
        """Return tasks not yet completed whose due date is before day."""
        pass

    @abstractmethod
    def insert_task(self, record: TaskRecord):
        """Insert a single record and return the created task."""
        pass
