"""
Plant room, asset and team serializers for PlantOps.
"""

from django.utils import timezone
from rest_framework import serializers

from core.common.models import Asset, PlantRoom, TeamMember


class PlantRoomSerializer(serializers.ModelSerializer):
    """Serializer for plant rooms."""

    asset_count = serializers.SerializerMethodField()

    class Meta:
        model = PlantRoom
        fields = [
            'id', 'plant_room_id', 'block', 'address', 'postcode',
            'plant_room_type', 'lgsr_date', 'asset_count',
            'created_at', 'last_modified_at'
        ]
        read_only_fields = ['id', 'created_at', 'last_modified_at']

    def get_asset_count(self, obj):
        return Asset.objects.filter(plant_room_ref=obj.plant_room_id).count()


class AssetSerializer(serializers.ModelSerializer):
    """Serializer for assets."""

    next_service_date = serializers.ReadOnlyField()

    class Meta:
        model = Asset
        fields = [
            'id', 'asset_id', 'asset_name', 'asset_type', 'plant_room_ref',
            'operational', 'frequency', 'last_service_date', 'next_service_date',
            'manufacturer', 'model_number', 'serial_number', 'install_date',
            'created_at', 'last_modified_at'
        ]
        read_only_fields = ['id', 'created_at', 'last_modified_at']

    def validate_frequency(self, value):
        return value.strip().lower()

    def validate_last_service_date(self, value):
        if value and value > timezone.localdate():
            raise serializers.ValidationError("Last service date cannot be in the future.")
        return value


class NextServiceSerializer(serializers.Serializer):
    """Next service date of an asset and how overdue it is."""

    asset_id = serializers.CharField()
    frequency = serializers.CharField()
    last_service_date = serializers.DateField(allow_null=True)
    next_service_date = serializers.DateField(allow_null=True)
    days_difference = serializers.IntegerField(allow_null=True)
    needs_service = serializers.BooleanField()


class TeamMemberSerializer(serializers.ModelSerializer):
    """Serializer for team members."""

    class Meta:
        model = TeamMember
        fields = [
            'id', 'engineer_id', 'name', 'email', 'phone_number',
            'role', 'skills', 'created_at', 'last_modified_at'
        ]
        read_only_fields = ['id', 'created_at', 'last_modified_at']

    def validate_skills(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Skills must be a list.")
        return value
