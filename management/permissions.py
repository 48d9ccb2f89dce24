import hmac
from typing import Any, Optional, cast

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from rest_framework import authentication
from rest_framework.permissions import SAFE_METHODS, BasePermission
from rest_framework.request import Request
from rest_framework.views import APIView

from core.common.models import TeamRole

AUTOMATION_KEY_AUTH = "automation-key"


class AutomationKeyAuthentication(authentication.BaseAuthentication):
    """
    Accepts the task automation key as a bearer credential.

    Requests carrying any other bearer token fall through to the next
    authentication class.
    """

    keyword = "Bearer"

    def authenticate(self, request: Request) -> Optional[tuple[Any, str]]:
        expected_key = settings.TASK_AUTOMATION_API_KEY
        if not expected_key:
            return None

        header = authentication.get_authorization_header(request).split()
        if len(header) != 2 or header[0].decode().lower() != self.keyword.lower():
            return None

        if not hmac.compare_digest(header[1].decode(), expected_key):
            return None

        return AnonymousUser(), AUTOMATION_KEY_AUTH

    def authenticate_header(self, request: Request) -> str:
        return self.keyword


class IsAutomationClientOrAuthenticated(BasePermission):
    message = "A valid automation key or an authenticated user is required."

    def has_permission(self, request: Request, view: APIView) -> bool:
        if request.auth == AUTOMATION_KEY_AUTH:
            return True
        return bool(request.user and request.user.is_authenticated)


class IsSupervisorOrReadOnly(BasePermission):
    """
    Anyone signed in can read; supervisors, admins and staff users can write.
    """

    message = "Only supervisors or admins can perform this action!"

    def has_permission(self, request: Request, view: APIView) -> bool:
        if request.method in SAFE_METHODS:
            return True

        user = cast(Any, request.user)
        if user.is_staff:
            return True

        team_member = getattr(user, "team_member", None)
        return team_member is not None and team_member.role in (TeamRole.SUPERVISOR, TeamRole.ADMIN)
