from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Plant room, asset and task models plus the scheduling code around them."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core.common"
    label = "common"
    verbose_name = "PlantOps records"
