"""
Team models for the PlantOps application.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractPlantOpsModel


class TeamRole(models.TextChoices):
    ENGINEER = "Engineer", _("Engineer")
    SUPERVISOR = "Supervisor", _("Supervisor")
    ADMIN = "Admin", _("Admin")


class TeamMember(AbstractPlantOpsModel):
    """
    An engineer or office member tasks can be assigned to.
    """

    engineer_id = models.CharField(
        verbose_name=_("engineer id"),
        max_length=50,
        unique=True,
    )

    name = models.CharField(verbose_name=_("name"), max_length=200)

    email = models.EmailField(verbose_name=_("email"))

    phone_number = models.CharField(
        verbose_name=_("phone number"),
        max_length=30,
        blank=True,
    )

    role = models.CharField(
        verbose_name=_("role"),
        max_length=20,
        choices=TeamRole.choices,
        default=TeamRole.ENGINEER,
    )

    skills = models.JSONField(
        verbose_name=_("skills"),
        default=list,
        blank=True,
    )

    user = models.OneToOneField(
        verbose_name=_("user"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="team_member",
        help_text=_("Login account of this team member"),
    )

    class Meta:
        verbose_name = _("team member")
        verbose_name_plural = _("team members")
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.role})"

    @property
    def is_engineer(self):
        return self.role == TeamRole.ENGINEER
