"""
Maintenance task models for the PlantOps application.
"""

import logging

from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.common.exceptions import InvalidStatusTransitionException
from core.common.models.base import AbstractPlantOpsModel

logger = logging.getLogger("plantops")


class TaskType:
    """
    Well-known task categories.

    The task type column is an open label; these are the values the
    application itself writes.
    """

    PPM = "PPM"
    CORRECTIVE = "Corrective Maintenance"
    INSPECTION = "Inspection"
    GENERAL = "General"


class TaskStatus(models.TextChoices):
    """Status of a maintenance task."""

    OPEN = "Open", _("Open")
    IN_PROGRESS = "In Progress", _("In Progress")
    COMPLETED = "Completed", _("Completed")
    AWAITING_PARTS = "Awaiting Parts", _("Awaiting Parts")
    PARTS_REQUIRED = "Parts Required", _("Parts Required")
    ON_HOLD = "On Hold", _("On Hold")
    REQUIRES_FOLLOW_UP = "Requires Follow-up", _("Requires Follow-up")


# Statuses an engineer can report when an issue blocks the work.
ISSUE_STATUSES = (
    TaskStatus.AWAITING_PARTS,
    TaskStatus.PARTS_REQUIRED,
    TaskStatus.ON_HOLD,
    TaskStatus.REQUIRES_FOLLOW_UP,
)


class TaskPriority(models.TextChoices):
    """Priority levels for tasks."""

    LOW = "Low", _("Low")
    MEDIUM = "Medium", _("Medium")
    HIGH = "High", _("High")


class MaintenanceTask(AbstractPlantOpsModel):
    """
    A unit of maintenance work in a plant room, optionally against one asset.
    """

    task_id = models.CharField(
        verbose_name=_("task id"),
        max_length=120,
        unique=True,
        help_text=_("System generated task reference"),
    )

    plant_room = models.ForeignKey(
        verbose_name=_("plant room"),
        to="common.PlantRoom",
        on_delete=models.CASCADE,
        related_name="tasks",
    )

    asset = models.ForeignKey(
        verbose_name=_("asset"),
        to="common.Asset",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tasks",
    )

    assigned_to = models.ForeignKey(
        verbose_name=_("assigned to"),
        to="common.TeamMember",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_tasks",
    )

    due_date = models.DateField(verbose_name=_("due date"))

    task_type = models.CharField(
        verbose_name=_("type of task"),
        max_length=50,
        default=TaskType.GENERAL,
    )

    status = models.CharField(
        verbose_name=_("status"),
        max_length=30,
        choices=TaskStatus.choices,
        default=TaskStatus.OPEN,
    )

    priority = models.CharField(
        verbose_name=_("priority"),
        max_length=10,
        choices=TaskPriority.choices,
        default=TaskPriority.MEDIUM,
    )

    notes = models.TextField(verbose_name=_("notes"), blank=True)

    date_completed = models.DateField(
        verbose_name=_("date completed"),
        null=True,
        blank=True,
    )

    class Meta:
        verbose_name = _("maintenance task")
        verbose_name_plural = _("maintenance tasks")
        ordering = ["due_date"]
        indexes = [
            models.Index(fields=["status"], name="task_status_idx"),
            models.Index(fields=["due_date"], name="task_due_date_idx"),
            models.Index(fields=["task_type"], name="task_type_idx"),
        ]
        constraints = [
            # One PPM task per asset and due date, so overlapping runs cannot double insert.
            models.UniqueConstraint(
                fields=["asset", "due_date"],
                condition=Q(task_type="PPM"),
                name="unique_ppm_task_per_asset_due_date",
            ),
        ]

    def __str__(self):
        return f"{self.task_id} ({self.status})"

    @property
    def is_overdue(self):
        if self.status == TaskStatus.COMPLETED:
            return False
        return self.due_date < timezone.localdate()

    @property
    def days_past_due(self):
        return (timezone.localdate() - self.due_date).days

    def transition_to(self, new_status, notes=""):
        """
        Move the task to a new status.

        Completed is terminal. Completing a task stamps date_completed.
        """
        if self.status == TaskStatus.COMPLETED and new_status != TaskStatus.COMPLETED:
            raise InvalidStatusTransitionException(
                f"Task {self.task_id} is completed and cannot move to {new_status}"
            )

        old_status = self.status
        self.status = new_status
        if new_status == TaskStatus.COMPLETED and not self.date_completed:
            self.date_completed = timezone.localdate()
        if notes:
            self.notes = notes
        self.save()

        logger.info(f"Task {self.task_id} status updated from {old_status} to {new_status}")
        return self
