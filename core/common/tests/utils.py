from datetime import date

from django.contrib.auth import get_user_model

from core.common.models import (
    Asset,
    MaintenanceTask,
    PartsRequest,
    PlantRoom,
    TaskStatus,
    TaskType,
    TeamMember,
    TeamRole,
)

MOCK_USER_PWD = "testpassword"


def create_user(username="engineer", email="engineer@example.com", is_staff=False):
    """
    Create and return a new auth user.
    """
    return get_user_model().objects.create_user(
        username=username,
        email=email,
        password=MOCK_USER_PWD,
        is_staff=is_staff,
    )


def create_plant_room(plant_room_id="PR-001", block="Block A", **kwargs):
    """
    Create and return a new plant room.
    """
    return PlantRoom.objects.create(plant_room_id=plant_room_id, block=block, **kwargs)


def create_asset(
    asset_id="AST-001",
    asset_name="Boiler 1",
    plant_room_ref="PR-001",
    frequency="monthly",
    last_service_date=date(2024, 1, 1),
    operational=True,
    **kwargs,
):
    """
    Create and return a new asset.
    """
    return Asset.objects.create(
        asset_id=asset_id,
        asset_name=asset_name,
        plant_room_ref=plant_room_ref,
        frequency=frequency,
        last_service_date=last_service_date,
        operational=operational,
        **kwargs,
    )


def create_team_member(engineer_id="ENG-001", name="Sam Engineer", email="sam@example.com", role=TeamRole.ENGINEER, **kwargs):
    """
    Create and return a new team member.
    """
    return TeamMember.objects.create(engineer_id=engineer_id, name=name, email=email, role=role, **kwargs)


def create_task(
    plant_room,
    task_id="TASK-001",
    due_date=date(2024, 3, 1),
    task_type=TaskType.GENERAL,
    status=TaskStatus.OPEN,
    **kwargs,
):
    """
    Create and return a new maintenance task.
    """
    return MaintenanceTask.objects.create(
        task_id=task_id,
        plant_room=plant_room,
        due_date=due_date,
        task_type=task_type,
        status=status,
        **kwargs,
    )


def create_parts_request(task, part_name="Pump seal", **kwargs):
    """
    Create and return a new parts request.
    """
    return PartsRequest.objects.create(task=task, part_name=part_name, **kwargs)
