"""
Abstract base model shared by every PlantOps table.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class AbstractPlantOpsModel(models.Model):
    """
    UUID primary key plus creation and modification timestamps.

    External references such as asset or task ids live in their own columns;
    the UUID is only used inside the API.
    """

    id = models.UUIDField(
        verbose_name="id",
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text=_("UUID primary key"),
    )
    created_at = models.DateTimeField(
        verbose_name=_("creation date"),
        auto_now_add=True,
    )
    last_modified_at = models.DateTimeField(
        verbose_name=_("last modified date"),
        auto_now=True,
    )

    class Meta:
        abstract = True
