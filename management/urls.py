from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views_asset
from . import views_automation
from . import views_task

app_name = "management"

# Create a router for ViewSets
router = DefaultRouter()
router.register(r'plant-rooms', views_asset.PlantRoomViewSet, basename='management-plant-room')
router.register(r'assets', views_asset.AssetViewSet, basename='management-asset')
router.register(r'team', views_asset.TeamMemberViewSet, basename='management-team')
router.register(r'tasks', views_task.MaintenanceTaskViewSet, basename='management-task')
router.register(r'parts-requests', views_task.PartsRequestViewSet, basename='management-parts-request')
router.register(r'logs', views_task.PlantRoomLogViewSet, basename='management-log')

urlpatterns = [
    path(
        'automation/daily-task-automation/',
        views_automation.DailyTaskAutomationView.as_view(),
        name='daily-task-automation',
    ),
    path('dashboard/stats/', views_automation.DashboardStatsView.as_view(), name='dashboard-stats'),

    # Include router URLs
    path('', include(router.urls)),
]
