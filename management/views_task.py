"""
Maintenance task views for the PlantOps management app.
"""

import logging

from django.db import IntegrityError, transaction
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.common.error_codes import CommonAPIErrorCodes
from core.common.exceptions import DuplicateEntityException
from core.common.includes import corrective, scheduler
from core.common.models import LogStatus, MaintenanceTask, PartsRequest, PlantRoomLog
from core.common.responses import created_response, error_response, store_error_response, success_response
from core.common.serializers.task_serializers import (
    CorrectiveTaskRequestSerializer,
    FollowUpTaskRequestSerializer,
    LogFollowUpRequestSerializer,
    MaintenanceTaskCreateSerializer,
    MaintenanceTaskSerializer,
    MaintenanceTaskUpdateSerializer,
    OverdueTaskSerializer,
    PartsRequestSerializer,
    PlantRoomLogSerializer,
    TaskCreationResultSerializer,
    TaskIssueRequestSerializer,
)
from management.filters import MaintenanceTaskFilter, PartsRequestFilter, PlantRoomLogFilter

logger = logging.getLogger("plantops")


def _task_result_response(result, message):
    """Turn a TaskCreationResult into an API response."""
    if not result.success:
        return error_response(
            CommonAPIErrorCodes.BUSINESS_LOGIC_ERROR,
            result.error,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return success_response(result.to_dict(), message)


class MaintenanceTaskViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing maintenance tasks.
    Provides CRUD plus the overdue report, follow-ups and corrective work.
    """

    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = MaintenanceTaskFilter
    ordering_fields = ['due_date', 'priority', 'status', 'created_at']
    ordering = ['due_date']

    def get_queryset(self):
        return MaintenanceTask.objects.select_related('plant_room', 'asset', 'assigned_to')

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action == 'create':
            return MaintenanceTaskCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return MaintenanceTaskUpdateSerializer
        return MaintenanceTaskSerializer

    def perform_create(self, serializer):
        try:
            with transaction.atomic():
                serializer.save()
        except IntegrityError as e:
            logger.warning(f"Rejected duplicate task: {e}")
            raise DuplicateEntityException(
                "A task with this reference, or a PPM task for this asset and due date, already exists."
            )

    def perform_update(self, serializer):
        try:
            with transaction.atomic():
                serializer.save()
        except IntegrityError as e:
            logger.warning(f"Rejected duplicate task update: {e}")
            raise DuplicateEntityException("A PPM task for this asset and due date already exists.")

    @swagger_auto_schema(
        responses={200: OverdueTaskSerializer(many=True)},
        operation_description="Tasks not yet completed whose due date has passed",
    )
    @action(detail=False, methods=['get'])
    def overdue(self, request):
        """List overdue tasks."""
        result = scheduler.get_overdue_tasks()
        if not result.ok:
            return store_error_response("Overdue tasks could not be fetched.", result.error)

        return Response({
            'count': len(result.tasks),
            'results': OverdueTaskSerializer(result.tasks, many=True).data,
        })

    @swagger_auto_schema(
        request_body=FollowUpTaskRequestSerializer,
        responses={201: TaskCreationResultSerializer},
        operation_description="Raise a follow-up task from a log entry or inspection form",
    )
    @action(detail=False, methods=['post'], url_path='follow-up')
    def follow_up(self, request):
        """Create a follow-up task."""
        serializer = FollowUpTaskRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = scheduler.create_follow_up_task(
            source_type=data['source_type'],
            source_id=data['source_id'],
            issue=data['issue'],
            plant_room_id=data['plant_room'],
            asset_id=data.get('asset'),
            priority=data['priority'],
        )
        if not result.success:
            return _task_result_response(result, None)
        return created_response(result.to_dict(), "Follow-up task created.")

    @swagger_auto_schema(
        request_body=CorrectiveTaskRequestSerializer,
        responses={201: TaskCreationResultSerializer},
        operation_description="Raise a corrective maintenance task from this task",
    )
    @action(detail=True, methods=['post'])
    def corrective(self, request, pk=None):
        """Create a corrective task."""
        task = self.get_object()
        serializer = CorrectiveTaskRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = corrective.create_corrective_task(original_task_id=task.id, **serializer.validated_data)
        if not result.success:
            return _task_result_response(result, None)
        return created_response(result.to_dict(), "Corrective task created.")

    @swagger_auto_schema(
        request_body=TaskIssueRequestSerializer,
        responses={200: TaskCreationResultSerializer},
        operation_description="Put the task into an issue status such as Awaiting Parts",
    )
    @action(detail=True, methods=['post'], url_path='report-issue')
    def report_issue(self, request, pk=None):
        """Report an issue on a task."""
        task = self.get_object()
        serializer = TaskIssueRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = corrective.update_task_with_issue(
            task_id=task.id,
            new_status=data['status'],
            reason=data['reason'],
            parts_required=data.get('parts_required'),
            follow_up_date=data.get('follow_up_date'),
        )
        return _task_result_response(result, f"Task status updated to {data['status']}")


class PartsRequestViewSet(viewsets.ModelViewSet):
    """
    ViewSet for parts requests raised against tasks.
    """

    serializer_class = PartsRequestSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PartsRequestFilter
    ordering = ['-created_at']

    def get_queryset(self):
        return PartsRequest.objects.select_related('task', 'corrective_task')

    @swagger_auto_schema(
        request_body=None,
        responses={200: TaskCreationResultSerializer},
        operation_description="Record parts as received and raise the installation task",
    )
    @action(detail=True, methods=['post'])
    def received(self, request, pk=None):
        parts_request = self.get_object()
        result = corrective.handle_parts_received(parts_request.id)
        return _task_result_response(result, "Parts received, installation task created.")

    @swagger_auto_schema(
        request_body=None,
        responses={200: TaskCreationResultSerializer},
        operation_description="Record parts as installed and complete the installation task",
    )
    @action(detail=True, methods=['post'])
    def installed(self, request, pk=None):
        parts_request = self.get_object()
        result = corrective.mark_parts_installed(parts_request.id)
        return _task_result_response(result, "Parts installed.")


class PlantRoomLogViewSet(viewsets.ModelViewSet):
    """
    ViewSet for plant room log entries.
    """

    serializer_class = PlantRoomLogSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PlantRoomLogFilter
    ordering = ['-date', '-created_at']

    def get_queryset(self):
        return PlantRoomLog.objects.select_related('plant_room')

    def perform_create(self, serializer):
        serializer.save(user_email=self.request.user.email)

    @swagger_auto_schema(
        request_body=LogFollowUpRequestSerializer,
        responses={201: TaskCreationResultSerializer},
        operation_description="Raise a follow-up task from this log entry",
    )
    @action(detail=True, methods=['post'], url_path='follow-up')
    def follow_up(self, request, pk=None):
        log = self.get_object()
        serializer = LogFollowUpRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = scheduler.create_follow_up_task(
            source_type="log",
            source_id=log.log_id,
            issue=data.get('issue') or log.log_entry,
            plant_room_id=log.plant_room_id,
            asset_id=data.get('asset'),
            priority=data['priority'],
        )
        if not result.success:
            return _task_result_response(result, None)

        log.status = LogStatus.FOLLOW_UP_RAISED
        log.save(update_fields=['status', 'last_modified_at'])
        return created_response(result.to_dict(), "Follow-up task created.")
