"""
Parts request models for the PlantOps application.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractPlantOpsModel


class PartsUrgency(models.TextChoices):
    LOW = "Low", _("Low")
    MEDIUM = "Medium", _("Medium")
    HIGH = "High", _("High")
    CRITICAL = "Critical", _("Critical")


class PartsRequestStatus(models.TextChoices):
    REQUESTED = "Requested", _("Requested")
    ORDERED = "Ordered", _("Ordered")
    RECEIVED = "Received", _("Received")
    INSTALLED = "Installed", _("Installed")


class PartsRequest(AbstractPlantOpsModel):
    """
    Parts needed to finish a maintenance task.
    """

    task = models.ForeignKey(
        verbose_name=_("task"),
        to="common.MaintenanceTask",
        on_delete=models.CASCADE,
        related_name="parts_requests",
    )

    part_name = models.CharField(verbose_name=_("part name"), max_length=200)

    part_number = models.CharField(
        verbose_name=_("part number"),
        max_length=100,
        blank=True,
    )

    quantity = models.PositiveIntegerField(verbose_name=_("quantity"), default=1)

    urgency = models.CharField(
        verbose_name=_("urgency"),
        max_length=10,
        choices=PartsUrgency.choices,
        default=PartsUrgency.MEDIUM,
    )

    status = models.CharField(
        verbose_name=_("status"),
        max_length=20,
        choices=PartsRequestStatus.choices,
        default=PartsRequestStatus.REQUESTED,
    )

    received_date = models.DateField(null=True, blank=True)
    installed_date = models.DateField(null=True, blank=True)

    corrective_task = models.ForeignKey(
        verbose_name=_("corrective task"),
        to="common.MaintenanceTask",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="installation_parts_requests",
        help_text=_("Installation task raised when the parts arrived"),
    )

    class Meta:
        verbose_name = _("parts request")
        verbose_name_plural = _("parts requests")
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.quantity}x {self.part_name} ({self.status})"

    @property
    def is_pending(self):
        return self.status in (PartsRequestStatus.REQUESTED, PartsRequestStatus.ORDERED)
