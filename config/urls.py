"""
Root URL configuration for PlantOps.

The management API sits under /api/v1/management/, next to the JWT token
endpoints that clients sign in with.
"""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

API_PREFIX = f"api/{settings.API_VERSION}/"


@api_view(["GET"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def health_check(request):
    return Response({"status": "ok", "service": "plantops", "version": settings.API_VERSION})


schema_view = get_schema_view(
    openapi.Info(
        title="PlantOps API",
        default_version=settings.API_VERSION,
        description="Plant rooms, assets, PPM scheduling and maintenance tasks",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

auth_patterns = [
    path("token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path(f"{API_PREFIX}health/", health_check, name="health-check"),
    path(f"{API_PREFIX}auth/", include(auth_patterns)),
    path(f"{API_PREFIX}management/", include("management.urls")),
    path("docs/", schema_view.with_ui("swagger", cache_timeout=0), name="api-docs"),
    path("docs/redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="api-redoc"),
]
