"""
Task serializers for PlantOps.
"""

from rest_framework import serializers

from core.common.code_generator import CodeGenerator
from core.common.includes.scheduler import FOLLOW_UP_SOURCE_TYPES
from core.common.models import (
    ISSUE_STATUSES,
    MaintenanceTask,
    PartsRequest,
    PartsUrgency,
    PlantRoomLog,
    TaskPriority,
    TaskStatus,
)


class MaintenanceTaskSerializer(serializers.ModelSerializer):
    """Serializer for task list and detail views."""

    asset_name = serializers.CharField(source='asset.asset_name', read_only=True, default=None)
    plant_room_block = serializers.CharField(source='plant_room.block', read_only=True)
    assigned_to_name = serializers.CharField(source='assigned_to.name', read_only=True, default=None)

    # Computed fields
    is_overdue = serializers.ReadOnlyField()
    days_past_due = serializers.ReadOnlyField()

    class Meta:
        model = MaintenanceTask
        fields = [
            'id', 'task_id', 'plant_room', 'plant_room_block', 'asset', 'asset_name',
            'assigned_to', 'assigned_to_name', 'due_date', 'task_type', 'status',
            'priority', 'notes', 'date_completed', 'is_overdue', 'days_past_due',
            'created_at', 'last_modified_at'
        ]
        read_only_fields = fields


class MaintenanceTaskCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating tasks by hand."""

    task_id = serializers.CharField(required=False, max_length=120)

    class Meta:
        model = MaintenanceTask
        fields = [
            'task_id', 'plant_room', 'asset', 'assigned_to', 'due_date',
            'task_type', 'status', 'priority', 'notes'
        ]
        # Uniqueness is enforced by the database and reported as a conflict.
        validators = []

    def validate_status(self, value):
        if value == TaskStatus.COMPLETED:
            raise serializers.ValidationError("Tasks cannot be created as completed.")
        return value

    def create(self, validated_data):
        validated_data.setdefault('task_id', CodeGenerator.task_id("TASK"))
        return super().create(validated_data)


class MaintenanceTaskUpdateSerializer(serializers.ModelSerializer):
    """Serializer for updating tasks. Status changes go through the task lifecycle."""

    class Meta:
        model = MaintenanceTask
        fields = [
            'asset', 'assigned_to', 'due_date', 'task_type',
            'status', 'priority', 'notes'
        ]
        validators = []

    def update(self, instance, validated_data):
        new_status = validated_data.pop('status', None)
        instance = super().update(instance, validated_data)
        if new_status and new_status != instance.status:
            instance.transition_to(new_status)
        return instance


class PartsRequestSerializer(serializers.ModelSerializer):
    """Serializer for parts requests."""

    task_reference = serializers.CharField(source='task.task_id', read_only=True)
    corrective_task_reference = serializers.CharField(
        source='corrective_task.task_id', read_only=True, default=None
    )

    class Meta:
        model = PartsRequest
        fields = [
            'id', 'task', 'task_reference', 'part_name', 'part_number', 'quantity',
            'urgency', 'status', 'received_date', 'installed_date',
            'corrective_task', 'corrective_task_reference', 'created_at', 'last_modified_at'
        ]
        read_only_fields = [
            'id', 'received_date', 'installed_date', 'corrective_task',
            'created_at', 'last_modified_at'
        ]


class PlantRoomLogSerializer(serializers.ModelSerializer):
    """Serializer for plant room log entries."""

    plant_room_block = serializers.CharField(source='plant_room.block', read_only=True)

    class Meta:
        model = PlantRoomLog
        fields = [
            'id', 'log_id', 'plant_room', 'plant_room_block', 'date', 'time',
            'user_email', 'log_entry', 'status', 'comments', 'created_at'
        ]
        read_only_fields = ['id', 'log_id', 'user_email', 'created_at']

    def create(self, validated_data):
        validated_data['log_id'] = CodeGenerator.log_id()
        return super().create(validated_data)


class OverdueTaskSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    task_id = serializers.CharField()
    asset_name = serializers.CharField()
    plant_room_block = serializers.CharField()
    due_date = serializers.DateField()
    assigned_engineer_email = serializers.CharField()
    priority = serializers.CharField()
    days_past_due = serializers.IntegerField()


class FollowUpTaskRequestSerializer(serializers.Serializer):
    """Serializer for raising a follow-up task from a log or form."""

    source_type = serializers.ChoiceField(choices=FOLLOW_UP_SOURCE_TYPES)
    source_id = serializers.CharField(max_length=120)
    issue = serializers.CharField()
    plant_room = serializers.UUIDField()
    asset = serializers.UUIDField(required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=TaskPriority.choices, default=TaskPriority.MEDIUM)


class LogFollowUpRequestSerializer(serializers.Serializer):
    issue = serializers.CharField(required=False, allow_blank=True)
    asset = serializers.UUIDField(required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=TaskPriority.choices, default=TaskPriority.MEDIUM)


class CorrectiveTaskRequestSerializer(serializers.Serializer):
    """Serializer for raising a corrective task from an existing task."""

    reason = serializers.CharField()
    urgency = serializers.ChoiceField(choices=PartsUrgency.choices, default=PartsUrgency.MEDIUM)
    assign_to_original_engineer = serializers.BooleanField(default=False)
    days_from_now = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    additional_notes = serializers.CharField(allow_blank=True, default="")


class TaskIssueRequestSerializer(serializers.Serializer):
    """Serializer for reporting an issue that blocks a task."""

    status = serializers.ChoiceField(choices=[issue_status.value for issue_status in ISSUE_STATUSES])
    reason = serializers.CharField()
    parts_required = serializers.ListField(
        child=serializers.CharField(), required=False, allow_empty=True
    )
    follow_up_date = serializers.DateField(required=False, allow_null=True)


class TaskCreationResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    task_id = serializers.CharField(required=False)
    error = serializers.CharField(required=False)


class AutomationRequestSerializer(serializers.Serializer):
    assignedToTeamId = serializers.UUIDField(required=False, allow_null=True)
