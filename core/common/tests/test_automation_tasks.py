"""
Tests for the automation Celery tasks and management command.
"""

from datetime import date
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from freezegun import freeze_time

from core.common.includes.store import StoreError
from core.common.includes.types import AutomationResult
from core.common.models import MaintenanceTask, TaskType
from core.common.tasks.automation import report_overdue_tasks, run_daily_task_automation
from core.common.tests.utils import create_asset, create_plant_room, create_task, create_team_member


@freeze_time("2024-03-15 12:00:00")
class AutomationTasksTest(TestCase):
    def setUp(self):
        self.plant_room = create_plant_room()
        self.asset = create_asset()

    def test_daily_task_automation(self):
        summary = run_daily_task_automation()

        self.assertEqual(summary["tasksCreated"], 1)
        self.assertEqual(summary["overdueTasksFound"], 0)
        self.assertEqual(summary["errors"], [])
        self.assertTrue(MaintenanceTask.objects.filter(asset=self.asset, task_type=TaskType.PPM).exists())

    def test_daily_task_automation_with_assignee(self):
        engineer = create_team_member()

        run_daily_task_automation(assigned_to=str(engineer.id))

        self.assertEqual(MaintenanceTask.objects.get(asset=self.asset).assigned_to, engineer)

    def test_report_overdue_tasks(self):
        create_task(self.plant_room, task_id="T-LATE", due_date=date(2024, 3, 1))

        with self.assertLogs("plantops", level="WARNING") as logs:
            summary = report_overdue_tasks()

        self.assertEqual(summary, {"success": True, "overdue_tasks": 1})
        self.assertTrue(any("T-LATE" in line and "14 days past due" in line for line in logs.output))

    @patch("core.common.includes.django_store.DjangoTaskStore.list_operational_assets_with_last_service")
    def test_daily_task_automation_logs_aborted_run(self, mock_assets):
        mock_assets.side_effect = StoreError("db down")

        with self.assertLogs("plantops", level="ERROR") as logs:
            summary = run_daily_task_automation()

        self.assertEqual(summary["tasksCreated"], 0)
        self.assertTrue(any("aborted" in line for line in logs.output))


@freeze_time("2024-03-15 12:00:00")
class RunTaskAutomationCommandTest(TestCase):
    def setUp(self):
        create_plant_room()
        create_asset()

    def test_runs_locally(self):
        out = StringIO()

        call_command("run_task_automation", stdout=out)

        self.assertIn("PPM tasks created: 1", out.getvalue())
        self.assertEqual(MaintenanceTask.objects.count(), 1)

    def test_dry_run_makes_no_changes(self):
        out = StringIO()

        call_command("run_task_automation", "--dry-run", stdout=out)

        self.assertIn("AST-001 Boiler 1: due 2024-02-01 (43 days overdue)", out.getvalue())
        self.assertFalse(MaintenanceTask.objects.exists())

    def test_assignee_by_engineer_id(self):
        engineer = create_team_member(engineer_id="ENG-042")

        call_command("run_task_automation", "--assignee", "ENG-042", stdout=StringIO())

        self.assertEqual(MaintenanceTask.objects.get().assigned_to, engineer)

    def test_unknown_assignee(self):
        with self.assertRaises(CommandError):
            call_command("run_task_automation", "--assignee", "ENG-404", stdout=StringIO())

    @patch("core.common.includes.django_store.DjangoTaskStore.list_operational_assets_with_last_service")
    def test_local_failure_raises(self, mock_assets):
        mock_assets.side_effect = StoreError("db down")
        out = StringIO()

        with self.assertLogs("plantops", level="ERROR"), self.assertRaises(CommandError):
            call_command("run_task_automation", stdout=out)

        self.assertIn("Error: db down", out.getvalue())
        self.assertFalse(MaintenanceTask.objects.exists())

    @patch("core.common.management.commands.run_task_automation.AutomationClient.run_daily_automation")
    def test_remote_failure_raises(self, mock_run):
        mock_run.return_value = AutomationResult(errors=["Network error: timed out"], failed=True)
        out = StringIO()

        with self.assertRaises(CommandError):
            call_command("run_task_automation", "--remote", stdout=out)

        self.assertIn("Network error: timed out", out.getvalue())
        self.assertFalse(MaintenanceTask.objects.exists())
