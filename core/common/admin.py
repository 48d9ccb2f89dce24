"""
Admin configuration for core.common models.
"""

from django.contrib import admin
from core.common.models import (
    Asset,
    MaintenanceTask,
    PartsRequest,
    PlantRoom,
    PlantRoomLog,
    TeamMember,
)


@admin.register(PlantRoom)
class PlantRoomAdmin(admin.ModelAdmin):
    """Admin configuration for PlantRoom model."""

    list_display = ("plant_room_id", "block", "postcode", "plant_room_type", "lgsr_date")
    list_filter = ("plant_room_type",)
    search_fields = ("plant_room_id", "block", "address", "postcode")
    readonly_fields = ("created_at", "last_modified_at")


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    """Admin configuration for Asset model."""

    list_display = (
        "asset_id",
        "asset_name",
        "asset_type",
        "plant_room_ref",
        "operational",
        "frequency",
        "last_service_date",
    )
    list_filter = ("operational", "frequency", "asset_type")
    search_fields = ("asset_id", "asset_name", "plant_room_ref", "serial_number")
    readonly_fields = ("created_at", "last_modified_at")
    fieldsets = (
        (
            "Basic Information",
            {"fields": ("asset_id", "asset_name", "asset_type", "plant_room_ref", "operational")},
        ),
        ("Servicing", {"fields": ("frequency", "last_service_date")}),
        (
            "Equipment",
            {"fields": ("manufacturer", "model_number", "serial_number", "install_date")},
        ),
        ("Tracking", {"fields": ("created_at", "last_modified_at"), "classes": ("collapse",)}),
    )


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ("engineer_id", "name", "email", "role")
    list_filter = ("role",)
    search_fields = ("engineer_id", "name", "email")
    raw_id_fields = ("user",)


class PartsRequestInline(admin.TabularInline):
    model = PartsRequest
    fk_name = "task"
    extra = 0
    fields = ("part_name", "part_number", "quantity", "urgency", "status")


@admin.register(MaintenanceTask)
class MaintenanceTaskAdmin(admin.ModelAdmin):
    """Admin configuration for MaintenanceTask model."""

    list_display = ("task_id", "task_type", "status", "priority", "due_date", "assigned_to")
    list_filter = ("status", "priority", "task_type")
    search_fields = ("task_id", "notes", "asset__asset_name")
    date_hierarchy = "due_date"
    raw_id_fields = ("plant_room", "asset", "assigned_to")
    readonly_fields = ("created_at", "last_modified_at")
    inlines = [PartsRequestInline]


@admin.register(PartsRequest)
class PartsRequestAdmin(admin.ModelAdmin):
    list_display = ("part_name", "quantity", "urgency", "status", "task", "received_date", "installed_date")
    list_filter = ("status", "urgency")
    search_fields = ("part_name", "part_number", "task__task_id")
    raw_id_fields = ("task", "corrective_task")


@admin.register(PlantRoomLog)
class PlantRoomLogAdmin(admin.ModelAdmin):
    list_display = ("log_id", "plant_room", "date", "user_email", "status")
    list_filter = ("status", "date")
    search_fields = ("log_id", "log_entry", "user_email")
    raw_id_fields = ("plant_room",)
