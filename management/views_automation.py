"""
Task automation and dashboard views for the PlantOps management app.
"""

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework.authentication import SessionAuthentication

from core.common.includes import dashboard, scheduler
from core.common.models import TeamMember
from core.common.responses import not_found_response, store_error_response
from core.common.serializers.task_serializers import AutomationRequestSerializer
from management.permissions import (
    AUTOMATION_KEY_AUTH,
    AutomationKeyAuthentication,
    IsAutomationClientOrAuthenticated,
)

logger = logging.getLogger("plantops")

AUTOMATION_RESPONSE_SCHEMA = {
    200: openapi.Response(
        "Automation run summary",
        openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "tasksCreated": openapi.Schema(type=openapi.TYPE_INTEGER),
                "overdueTasksFound": openapi.Schema(type=openapi.TYPE_INTEGER),
                "errors": openapi.Schema(type=openapi.TYPE_ARRAY, items=openapi.Schema(type=openapi.TYPE_STRING)),
                "results": openapi.Schema(type=openapi.TYPE_ARRAY, items=openapi.Schema(type=openapi.TYPE_OBJECT)),
            },
        ),
    ),
    503: "Assets or plant rooms could not be loaded, nothing was created",
}


class DailyTaskAutomationView(APIView):
    """
    Runs the daily task automation: due PPM tasks are raised and overdue
    tasks counted. Called by the automation client with the automation key,
    or by a signed-in user.
    """

    authentication_classes = [AutomationKeyAuthentication, JWTAuthentication, SessionAuthentication]
    permission_classes = [IsAutomationClientOrAuthenticated]

    @swagger_auto_schema(
        request_body=AutomationRequestSerializer,
        responses=AUTOMATION_RESPONSE_SCHEMA,
        operation_description="Run the daily PPM task generation and overdue check",
    )
    def post(self, request: Request, *args, **kwargs) -> Response:
        serializer = AutomationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        assigned_to = serializer.validated_data.get("assignedToTeamId")
        if assigned_to and not TeamMember.objects.filter(id=assigned_to).exists():
            return not_found_response(f"Team member {assigned_to} not found")

        caller = "automation key" if request.auth == AUTOMATION_KEY_AUTH else request.user
        logger.info(f"Daily task automation triggered via API by {caller}")
        result = scheduler.run_task_automation(assigned_to=assigned_to)
        if result.failed:
            return store_error_response(
                "Task automation could not load assets or plant rooms.", details=result.to_dict()
            )
        return Response(result.to_dict(), status=status.HTTP_200_OK)


class DashboardStatsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(operation_description="Headline counts and chart data for the dashboard")
    def get(self, request: Request, *args, **kwargs) -> Response:
        team_member = getattr(request.user, "team_member", None)
        return Response(dashboard.get_dashboard_stats(team_member=team_member))
