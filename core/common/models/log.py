"""
Plant room log models for the PlantOps application.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractPlantOpsModel


class LogStatus(models.TextChoices):
    OK = "OK", _("OK")
    ISSUE_FOUND = "Issue Found", _("Issue Found")
    FOLLOW_UP_RAISED = "Follow-up Raised", _("Follow-up Raised")


class PlantRoomLog(AbstractPlantOpsModel):
    """
    An entry recorded by an engineer visiting a plant room.
    """

    log_id = models.CharField(
        verbose_name=_("log id"),
        max_length=100,
        unique=True,
    )

    plant_room = models.ForeignKey(
        verbose_name=_("plant room"),
        to="common.PlantRoom",
        on_delete=models.CASCADE,
        related_name="logs",
    )

    date = models.DateField(verbose_name=_("date"), default=timezone.localdate)
    time = models.TimeField(verbose_name=_("time"), null=True, blank=True)
    user_email = models.EmailField(verbose_name=_("user email"))
    log_entry = models.TextField(verbose_name=_("log entry"))

    status = models.CharField(
        verbose_name=_("status"),
        max_length=20,
        choices=LogStatus.choices,
        default=LogStatus.OK,
    )

    comments = models.TextField(verbose_name=_("comments"), blank=True)

    class Meta:
        verbose_name = _("plant room log")
        verbose_name_plural = _("plant room logs")
        ordering = ["-date", "-created_at"]

    def __str__(self):
        return f"{self.log_id} - {self.plant_room_id}"
