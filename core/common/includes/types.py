"""
Result types returned by the scheduling and task workflows.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Optional
from uuid import UUID


@dataclass(frozen=True, order=False)
class TaskRecord:
    """
    A task waiting to be written to the store.

    plant_room_id, asset_id and assigned_to_id are internal primary keys.
    """

    task_id: str
    plant_room_id: UUID
    due_date: date
    task_type: str
    status: str
    priority: str
    notes: str
    asset_id: Optional[UUID] = None
    assigned_to_id: Optional[UUID] = None


@dataclass
class PPMGenerationResult:
    """
    Outcome of one PPM generation run.

    Attributes
    created:
        Number of tasks written. Zero whenever the batch insert failed.
    errors:
        Messages for every failure met during the run.
    details:
        One diagnostic dict per asset considered, each with an ``action``.
    aborted:
        Set when assets or plant rooms could not be loaded and the run
        stopped before looking at any asset.
    """

    created: int = 0
    errors: list[str] = field(default_factory=list)
    details: list[dict[str, Any]] = field(default_factory=list)
    aborted: bool = False


@dataclass(frozen=True)
class OverdueTask:
    id: UUID
    task_id: str
    asset_name: str
    plant_room_block: str
    due_date: date
    assigned_engineer_email: str
    priority: str
    days_past_due: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["id"] = str(self.id)
        data["due_date"] = self.due_date.isoformat()
        return data


@dataclass(frozen=True)
class OverdueTasksResult:
    """
    Overdue tasks, or the reason they could not be fetched.

    An empty ``tasks`` list only means "nothing overdue" when ``ok`` is true.
    """

    tasks: list[OverdueTask] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __len__(self):
        return len(self.tasks)


@dataclass(frozen=True)
class TaskCreationResult:
    success: bool
    task_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"success": self.success}
        if self.task_id is not None:
            data["task_id"] = self.task_id
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class AutomationResult:
    """
    Outcome of a daily automation run, local or remote.

    ``failed`` is set when the run itself could not be performed, as opposed
    to a run that completed with per-asset errors.
    """

    tasks_created: int = 0
    overdue_tasks_found: int = 0
    errors: list[str] = field(default_factory=list)
    results: list[Any] = field(default_factory=list)
    failed: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {
            "tasksCreated": self.tasks_created,
            "overdueTasksFound": self.overdue_tasks_found,
            "errors": self.errors,
            "results": self.results,
        }
