import django_filters
from django.db.models import Q
from django.utils import timezone

from core.common.models import (
    Asset,
    MaintenanceTask,
    PartsRequest,
    PlantRoom,
    PlantRoomLog,
    TaskStatus,
    TeamMember,
)


class PlantRoomFilter(django_filters.FilterSet):
    """Filter for plant rooms"""
    plant_room_type = django_filters.CharFilter(field_name='plant_room_type')
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = PlantRoom
        fields = ['plant_room_type', 'search']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(plant_room_id__icontains=value)
            | Q(block__icontains=value)
            | Q(address__icontains=value)
            | Q(postcode__icontains=value)
        )


class AssetFilter(django_filters.FilterSet):
    """Filter for assets"""
    plant_room = django_filters.CharFilter(field_name='plant_room_ref')
    asset_type = django_filters.CharFilter(field_name='asset_type', lookup_expr='iexact')
    operational = django_filters.BooleanFilter(field_name='operational')
    frequency = django_filters.CharFilter(field_name='frequency', lookup_expr='iexact')
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Asset
        fields = ['plant_room', 'asset_type', 'operational', 'frequency', 'search']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(asset_id__icontains=value) | Q(asset_name__icontains=value)
        )


class MaintenanceTaskFilter(django_filters.FilterSet):
    """Filter for maintenance tasks"""
    status = django_filters.CharFilter(field_name='status')
    priority = django_filters.CharFilter(field_name='priority')
    task_type = django_filters.CharFilter(field_name='task_type')
    plant_room = django_filters.UUIDFilter(field_name='plant_room_id')
    asset = django_filters.UUIDFilter(field_name='asset_id')
    assigned_to = django_filters.UUIDFilter(field_name='assigned_to_id')
    due_from = django_filters.DateFilter(field_name='due_date', lookup_expr='gte')
    due_to = django_filters.DateFilter(field_name='due_date', lookup_expr='lte')
    overdue = django_filters.BooleanFilter(method='filter_overdue')
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = MaintenanceTask
        fields = [
            'status', 'priority', 'task_type', 'plant_room', 'asset',
            'assigned_to', 'due_from', 'due_to', 'overdue', 'search'
        ]

    def filter_overdue(self, queryset, name, value):
        overdue = Q(due_date__lt=timezone.localdate()) & ~Q(status=TaskStatus.COMPLETED)
        if value:
            return queryset.filter(overdue)
        return queryset.exclude(overdue)

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(task_id__icontains=value)
            | Q(notes__icontains=value)
            | Q(asset__asset_name__icontains=value)
        )


class PartsRequestFilter(django_filters.FilterSet):
    """Filter for parts requests"""
    status = django_filters.CharFilter(field_name='status')
    urgency = django_filters.CharFilter(field_name='urgency')
    task = django_filters.UUIDFilter(field_name='task_id')

    class Meta:
        model = PartsRequest
        fields = ['status', 'urgency', 'task']


class PlantRoomLogFilter(django_filters.FilterSet):
    """Filter for plant room logs"""
    plant_room = django_filters.UUIDFilter(field_name='plant_room_id')
    status = django_filters.CharFilter(field_name='status')
    date_from = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = PlantRoomLog
        fields = ['plant_room', 'status', 'date_from', 'date_to']


class TeamMemberFilter(django_filters.FilterSet):
    role = django_filters.CharFilter(field_name='role')

    class Meta:
        model = TeamMember
        fields = ['role']
