"""
Plant room, asset and team views for the PlantOps management app.
"""

from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.common.includes.scheduler import calculate_next_service_date
from core.common.models import Asset, PlantRoom, TeamMember
from core.common.serializers.asset_serializers import (
    AssetSerializer,
    NextServiceSerializer,
    PlantRoomSerializer,
    TeamMemberSerializer,
)
from management.filters import AssetFilter, PlantRoomFilter, TeamMemberFilter
from management.permissions import IsSupervisorOrReadOnly


class PlantRoomViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing plant rooms.
    """

    queryset = PlantRoom.objects.all()
    serializer_class = PlantRoomSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PlantRoomFilter
    ordering_fields = ['plant_room_id', 'block', 'lgsr_date', 'created_at']
    ordering = ['plant_room_id']


class AssetViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing assets and their service schedule.
    """

    queryset = Asset.objects.all()
    serializer_class = AssetSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = AssetFilter
    ordering_fields = ['asset_id', 'asset_name', 'last_service_date', 'created_at']
    ordering = ['asset_id']

    @swagger_auto_schema(
        responses={200: NextServiceSerializer},
        operation_description="Next service date of an asset and how many days it is overdue",
    )
    @action(detail=True, methods=['get'], url_path='next-service')
    def next_service(self, request, pk=None):
        """Get the next service date for an asset."""
        asset = self.get_object()

        next_service_date = None
        days_difference = None
        if asset.last_service_date:
            next_service_date = calculate_next_service_date(asset.last_service_date, asset.frequency)
            days_difference = (timezone.localdate() - next_service_date).days

        serializer = NextServiceSerializer({
            'asset_id': asset.asset_id,
            'frequency': asset.frequency,
            'last_service_date': asset.last_service_date,
            'next_service_date': next_service_date,
            'days_difference': days_difference,
            'needs_service': days_difference is not None and days_difference >= 0,
        })
        return Response(serializer.data)


class TeamMemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing the maintenance team.
    """

    queryset = TeamMember.objects.all()
    serializer_class = TeamMemberSerializer
    permission_classes = [IsAuthenticated, IsSupervisorOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = TeamMemberFilter
    ordering = ['name']
