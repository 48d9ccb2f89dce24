"""
Plant room models for the PlantOps application.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractPlantOpsModel


class PlantRoomType(models.TextChoices):
    """Kinds of plant room."""

    DOMESTIC = "Domestic", _("Domestic")
    NON_DOMESTIC = "Non-Domestic", _("Non-Domestic")
    COMMERCIAL = "Commercial", _("Commercial")
    OTHER = "Other", _("Other")


class PlantRoom(AbstractPlantOpsModel):
    """
    A physical location housing one or more equipment assets.
    """

    plant_room_id = models.CharField(
        verbose_name=_("plant room id"),
        max_length=50,
        unique=True,
        help_text=_("External plant room identifier used by assets"),
    )

    block = models.CharField(
        verbose_name=_("block"),
        max_length=200,
        help_text=_("Block or building the plant room belongs to"),
    )

    address = models.CharField(
        verbose_name=_("address"),
        max_length=255,
        blank=True,
    )

    postcode = models.CharField(
        verbose_name=_("postcode"),
        max_length=20,
        blank=True,
    )

    plant_room_type = models.CharField(
        verbose_name=_("plant room type"),
        max_length=20,
        choices=PlantRoomType.choices,
        default=PlantRoomType.OTHER,
    )

    lgsr_date = models.DateField(
        verbose_name=_("LGSR date"),
        null=True,
        blank=True,
        help_text=_("Date of the last Landlord Gas Safety Record inspection"),
    )

    class Meta:
        verbose_name = _("plant room")
        verbose_name_plural = _("plant rooms")
        ordering = ["plant_room_id"]

    def __str__(self):
        return f"{self.plant_room_id} - {self.block}"
