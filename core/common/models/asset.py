"""
Asset models for the PlantOps application.
"""

import logging

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractPlantOpsModel

logger = logging.getLogger("plantops")


class MaintenanceFrequency(models.TextChoices):
    """
    Known service intervals.

    Asset frequency labels are matched case-insensitively against these
    values; anything else is serviced monthly.
    """

    DAILY = "daily", _("Daily")
    WEEKLY = "weekly", _("Weekly")
    FORTNIGHTLY = "fortnightly", _("Fortnightly")
    MONTHLY = "monthly", _("Monthly")
    QUARTERLY = "quarterly", _("Quarterly")
    ANNUALLY = "annually", _("Annually")


class Asset(AbstractPlantOpsModel):
    """
    A piece of equipment installed in a plant room.
    """

    asset_id = models.CharField(
        verbose_name=_("asset id"),
        max_length=50,
        unique=True,
        help_text=_("External asset identifier"),
    )

    asset_name = models.CharField(
        verbose_name=_("asset name"),
        max_length=200,
    )

    asset_type = models.CharField(
        verbose_name=_("asset type"),
        max_length=100,
        blank=True,
    )

    plant_room_ref = models.CharField(
        verbose_name=_("plant room id"),
        max_length=50,
        blank=True,
        db_index=True,
        help_text=_("External identifier of the plant room housing this asset"),
    )

    operational = models.BooleanField(
        verbose_name=_("operational"),
        default=True,
    )

    frequency = models.CharField(
        verbose_name=_("maintenance frequency"),
        max_length=20,
        default=MaintenanceFrequency.MONTHLY,
        help_text=_("Service interval label, e.g. weekly or quarterly"),
    )

    last_service_date = models.DateField(
        verbose_name=_("last service date"),
        null=True,
        blank=True,
    )

    manufacturer = models.CharField(max_length=200, blank=True)
    model_number = models.CharField(max_length=200, blank=True)
    serial_number = models.CharField(max_length=200, blank=True)
    install_date = models.DateField(null=True, blank=True)

    class Meta:
        verbose_name = _("asset")
        verbose_name_plural = _("assets")
        ordering = ["asset_id"]
        indexes = [
            models.Index(fields=["operational"], name="asset_operational_idx"),
            models.Index(fields=["last_service_date"], name="asset_last_service_idx"),
        ]

    def __str__(self):
        return f"{self.asset_id} - {self.asset_name}"

    @property
    def next_service_date(self):
        """Date the next service falls due, or None without a service history."""
        if not self.last_service_date:
            return None

        from core.common.includes.scheduler import calculate_next_service_date

        return calculate_next_service_date(self.last_service_date, self.frequency)
