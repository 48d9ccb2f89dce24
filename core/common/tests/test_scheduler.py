"""
Tests for the PPM scheduler.
"""

from datetime import date, datetime
from types import SimpleNamespace
from uuid import uuid4

from django.test import SimpleTestCase, TestCase
from freezegun import freeze_time

from core.common.includes import scheduler
from core.common.includes.store import StoreError, TaskStoreInterface
from core.common.models import MaintenanceTask, TaskPriority, TaskStatus, TaskType
from core.common.tests.utils import (
    create_asset,
    create_plant_room,
    create_task,
    create_team_member,
)


class CalculateNextServiceDateTest(SimpleTestCase):
    def test_known_frequencies(self):
        last_service = date(2024, 1, 1)
        expected = {
            "daily": date(2024, 1, 2),
            "weekly": date(2024, 1, 8),
            "fortnightly": date(2024, 1, 15),
            "monthly": date(2024, 2, 1),
            "quarterly": date(2024, 4, 1),
            "annually": date(2025, 1, 1),
        }
        for frequency, next_date in expected.items():
            with self.subTest(frequency=frequency):
                self.assertEqual(
                    scheduler.calculate_next_service_date(last_service, frequency), next_date
                )

    def test_frequency_is_case_insensitive(self):
        self.assertEqual(
            scheduler.calculate_next_service_date(date(2024, 1, 1), "Quarterly"),
            date(2024, 4, 1),
        )
        self.assertEqual(
            scheduler.calculate_next_service_date(date(2024, 1, 1), "WEEKLY"),
            date(2024, 1, 8),
        )

    def test_unknown_frequency_defaults_to_monthly(self):
        self.assertEqual(
            scheduler.calculate_next_service_date(date(2024, 1, 1), "biennially"),
            date(2024, 2, 1),
        )
        self.assertEqual(scheduler.calculate_next_service_date(date(2024, 1, 1), None), date(2024, 2, 1))
        self.assertEqual(scheduler.calculate_next_service_date(date(2024, 1, 1), ""), date(2024, 2, 1))

    def test_month_end_clamps(self):
        self.assertEqual(
            scheduler.calculate_next_service_date("2024-01-31", "monthly"), date(2024, 2, 29)
        )
        self.assertEqual(
            scheduler.calculate_next_service_date(date(2023, 1, 31), "monthly"), date(2023, 2, 28)
        )
        self.assertEqual(
            scheduler.calculate_next_service_date(date(2024, 2, 29), "annually"), date(2025, 2, 28)
        )

    def test_accepts_datetime_and_string(self):
        self.assertEqual(
            scheduler.calculate_next_service_date(datetime(2024, 1, 1, 15, 30), "daily"),
            date(2024, 1, 2),
        )
        self.assertEqual(scheduler.calculate_next_service_date("2024-01-01", "weekly"), date(2024, 1, 8))


class GenerateAutoPPMTasksTest(TestCase):
    """Test PPM generation against the database."""

    def setUp(self):
        self.plant_room = create_plant_room()
        self.asset = create_asset()

    @freeze_time("2024-03-15 12:00:00")
    def test_long_overdue_asset_gets_high_priority_task_due_today(self):
        result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 1)
        self.assertEqual(result.errors, [])

        task = MaintenanceTask.objects.get(asset=self.asset)
        self.assertEqual(task.due_date, date(2024, 3, 15))
        self.assertEqual(task.priority, TaskPriority.HIGH)
        self.assertEqual(task.status, TaskStatus.OPEN)
        self.assertEqual(task.task_type, TaskType.PPM)
        self.assertEqual(task.plant_room, self.plant_room)
        self.assertTrue(task.task_id.startswith("AUTO-PPM-AST-001-"))
        self.assertEqual(
            task.notes,
            "Auto-generated PPM task for Boiler 1. Last service: 2024-01-01. 43 days overdue.",
        )

        detail = result.details[0]
        self.assertEqual(detail["next_service_date"], "2024-02-01")
        self.assertEqual(detail["days_difference"], 43)
        self.assertTrue(detail["needs_service"])
        self.assertEqual(detail["action"], "created")

    @freeze_time("2024-02-03 12:00:00")
    def test_recently_due_asset_keeps_computed_due_date(self):
        result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 1)
        task = MaintenanceTask.objects.get(asset=self.asset)
        self.assertEqual(task.due_date, date(2024, 2, 1))
        self.assertEqual(task.priority, TaskPriority.LOW)
        self.assertEqual(result.details[0]["days_difference"], 2)

    @freeze_time("2024-02-15 12:00:00")
    def test_medium_priority_between_one_week_and_one_month(self):
        scheduler.generate_auto_ppm_tasks()

        task = MaintenanceTask.objects.get(asset=self.asset)
        self.assertEqual(task.priority, TaskPriority.MEDIUM)
        self.assertEqual(task.due_date, date(2024, 2, 15))

    @freeze_time("2024-02-01 12:00:00")
    def test_due_today_note(self):
        scheduler.generate_auto_ppm_tasks()

        task = MaintenanceTask.objects.get(asset=self.asset)
        self.assertTrue(task.notes.endswith("Due today."))
        self.assertEqual(task.priority, TaskPriority.LOW)

    @freeze_time("2024-01-20 12:00:00")
    def test_asset_not_yet_due(self):
        result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 0)
        self.assertFalse(MaintenanceTask.objects.exists())
        self.assertFalse(result.details[0]["needs_service"])
        self.assertEqual(result.details[0]["action"], "not_due")

    @freeze_time("2024-03-15 12:00:00")
    def test_existing_ppm_task_prevents_duplicate(self):
        create_task(
            self.plant_room,
            task_id="PPM-EXISTING",
            asset=self.asset,
            due_date=date(2024, 2, 1),
            task_type=TaskType.PPM,
        )

        result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 0)
        self.assertEqual(MaintenanceTask.objects.filter(asset=self.asset).count(), 1)
        self.assertEqual(result.details[0]["action"], "skipped_existing")

    @freeze_time("2024-03-15 12:00:00")
    def test_older_ppm_task_does_not_block_new_one(self):
        create_task(
            self.plant_room,
            task_id="PPM-OLD",
            asset=self.asset,
            due_date=date(2024, 1, 1),
            task_type=TaskType.PPM,
        )

        result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 1)

    @freeze_time("2024-03-15 12:00:00")
    def test_second_run_on_same_day_creates_nothing(self):
        first = scheduler.generate_auto_ppm_tasks()
        second = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(first.created, 1)
        self.assertEqual(second.created, 0)
        self.assertEqual(second.errors, [])
        self.assertEqual(MaintenanceTask.objects.count(), 1)

    @freeze_time("2024-03-15 12:00:00")
    def test_asset_with_unknown_plant_room_is_reported_not_scheduled(self):
        create_asset(asset_id="AST-002", asset_name="Orphan pump", plant_room_ref="PR-MISSING")

        with self.assertLogs("plantops", level="WARNING") as logs:
            result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 1)
        self.assertEqual(result.errors, [])
        actions = {detail["asset_id"]: detail["action"] for detail in result.details}
        self.assertEqual(actions["AST-002"], "skipped_no_plant_room")
        self.assertTrue(any("PR-MISSING" in line for line in logs.output))

    @freeze_time("2024-03-15 12:00:00")
    def test_non_operational_and_unserviced_assets_are_ignored(self):
        create_asset(asset_id="AST-002", operational=False)
        create_asset(asset_id="AST-003", last_service_date=None)

        result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 1)
        self.assertEqual([detail["asset_id"] for detail in result.details], ["AST-001"])

    @freeze_time("2024-03-15 12:00:00")
    def test_assignee_is_applied(self):
        engineer = create_team_member()

        scheduler.generate_auto_ppm_tasks(assigned_to=engineer.id)

        self.assertEqual(MaintenanceTask.objects.get(asset=self.asset).assigned_to, engineer)

    def test_no_assets(self):
        self.asset.delete()

        result = scheduler.generate_auto_ppm_tasks()

        self.assertEqual(result.created, 0)
        self.assertFalse(result.aborted)
        self.assertEqual(result.details, [{"action": "no_assets", "message": "No assets found"}])

    @freeze_time("2024-03-15 12:00:00")
    def test_unusable_assignee_fails_the_insert(self):
        with self.assertLogs("plantops", level="ERROR"):
            result = scheduler.generate_auto_ppm_tasks(assigned_to="not-a-uuid")

        self.assertEqual(result.created, 0)
        self.assertEqual(len(result.errors), 1)
        self.assertTrue(result.errors[0].startswith("Failed to insert 1 tasks"))
        self.assertEqual([detail["action"] for detail in result.details], ["insert_failed"])
        self.assertFalse(MaintenanceTask.objects.exists())


class FakeStore(TaskStoreInterface):
    """In-memory store whose operations can be made to fail."""

    def __init__(self, assets=None, plant_rooms=None, fail=()):
        self.assets = assets or []
        self.plant_rooms = plant_rooms or {}
        self.fail = set(fail)
        self.inserted = []

    def _maybe_fail(self, operation):
        if operation in self.fail:
            raise StoreError(f"{operation} failed")

    def list_operational_assets_with_last_service(self):
        self._maybe_fail("assets")
        return self.assets

    def map_plant_room_external_ids(self, external_ids):
        self._maybe_fail("plant_rooms")
        return self.plant_rooms

    def find_existing_ppm_task(self, asset_id, min_due_date):
        self._maybe_fail("lookup")
        return None

    def insert_tasks(self, records):
        self._maybe_fail("insert")
        self.inserted.extend(records)
        return len(records)

    def list_incomplete_tasks_due_before(self, day):
        self._maybe_fail("overdue")
        return []

    def insert_task(self, record):
        self._maybe_fail("insert")
        self.inserted.append(record)
        return record


def make_asset(asset_id="AST-001", plant_room_ref="PR-001"):
    return SimpleNamespace(
        id=uuid4(),
        asset_id=asset_id,
        asset_name=f"Asset {asset_id}",
        plant_room_ref=plant_room_ref,
        last_service_date=date(2024, 1, 1),
        frequency="monthly",
    )


@freeze_time("2024-03-15 12:00:00")
class GenerateAutoPPMTasksFailureTest(SimpleTestCase):
    """Test how store failures surface in the generation result."""

    def setUp(self):
        self.assets = [make_asset("AST-001"), make_asset("AST-002")]
        self.plant_rooms = {"PR-001": uuid4()}

    def test_asset_fetch_failure_is_fatal(self):
        store = FakeStore(fail={"assets"})

        result = scheduler.generate_auto_ppm_tasks(store=store)

        self.assertEqual(result.created, 0)
        self.assertEqual(result.errors, ["assets failed"])
        self.assertEqual(result.details, [])
        self.assertTrue(result.aborted)

    def test_plant_room_fetch_failure_is_fatal(self):
        store = FakeStore(assets=self.assets, fail={"plant_rooms"})

        result = scheduler.generate_auto_ppm_tasks(store=store)

        self.assertEqual(result.created, 0)
        self.assertEqual(result.errors, ["plant_rooms failed"])
        self.assertEqual(store.inserted, [])
        self.assertTrue(result.aborted)

    def test_failed_duplicate_check_never_creates_a_task(self):
        store = FakeStore(assets=self.assets, plant_rooms=self.plant_rooms, fail={"lookup"})

        result = scheduler.generate_auto_ppm_tasks(store=store)

        self.assertEqual(result.created, 0)
        self.assertEqual(len(result.errors), 2)
        self.assertEqual(store.inserted, [])
        self.assertFalse(result.aborted)
        self.assertEqual({detail["action"] for detail in result.details}, {"lookup_failed"})

    def test_insert_failure_reports_single_error_and_zero_created(self):
        assets = [make_asset("AST-001"), make_asset("AST-002")]
        store = FakeStore(assets=assets, plant_rooms=self.plant_rooms, fail={"insert"})

        result = scheduler.generate_auto_ppm_tasks(store=store)

        self.assertEqual(result.created, 0)
        self.assertEqual(result.errors, ["insert failed"])
        self.assertEqual(
            {detail["action"] for detail in result.details}, {"insert_failed"}
        )

    def test_batch_inserted_once(self):
        assets = [make_asset("AST-001"), make_asset("AST-002")]
        store = FakeStore(assets=assets, plant_rooms=self.plant_rooms)

        result = scheduler.generate_auto_ppm_tasks(store=store)

        self.assertEqual(result.created, 2)
        self.assertEqual(len(store.inserted), 2)
        self.assertEqual(len({record.task_id for record in store.inserted}), 2)


class GetOverdueTasksTest(TestCase):
    def setUp(self):
        self.plant_room = create_plant_room(block="Block C")

    @freeze_time("2024-03-15 12:00:00")
    def test_only_incomplete_tasks_due_before_today(self):
        asset = create_asset()
        engineer = create_team_member()
        overdue = create_task(
            self.plant_room,
            task_id="T-OVERDUE",
            due_date=date(2024, 3, 10),
            asset=asset,
            assigned_to=engineer,
            priority=TaskPriority.HIGH,
        )
        create_task(self.plant_room, task_id="T-DONE", due_date=date(2024, 3, 1), status=TaskStatus.COMPLETED)
        create_task(self.plant_room, task_id="T-TODAY", due_date=date(2024, 3, 15))
        create_task(self.plant_room, task_id="T-LATER", due_date=date(2024, 3, 20))

        result = scheduler.get_overdue_tasks()

        self.assertTrue(result.ok)
        self.assertEqual(len(result.tasks), 1)
        task = result.tasks[0]
        self.assertEqual(task.id, overdue.id)
        self.assertEqual(task.task_id, "T-OVERDUE")
        self.assertEqual(task.asset_name, "Boiler 1")
        self.assertEqual(task.plant_room_block, "Block C")
        self.assertEqual(task.assigned_engineer_email, "sam@example.com")
        self.assertEqual(task.priority, TaskPriority.HIGH)
        self.assertEqual(task.days_past_due, 5)

    @freeze_time("2024-03-15 12:00:00")
    def test_defaults_for_missing_relations(self):
        create_task(self.plant_room, task_id="T-GENERAL", due_date=date(2024, 3, 14))

        task = scheduler.get_overdue_tasks().tasks[0]

        self.assertEqual(task.asset_name, "General Task")
        self.assertEqual(task.assigned_engineer_email, "Unassigned")

    @freeze_time("2024-03-15 12:00:00")
    def test_in_progress_and_issue_statuses_count_as_overdue(self):
        create_task(self.plant_room, task_id="T-1", due_date=date(2024, 3, 1), status=TaskStatus.IN_PROGRESS)
        create_task(self.plant_room, task_id="T-2", due_date=date(2024, 3, 1), status=TaskStatus.AWAITING_PARTS)

        self.assertEqual(len(scheduler.get_overdue_tasks().tasks), 2)

    def test_empty_result_is_ok(self):
        result = scheduler.get_overdue_tasks()

        self.assertTrue(result.ok)
        self.assertEqual(result.tasks, [])

    def test_failed_query_is_distinguishable_from_empty(self):
        with self.assertLogs("plantops", level="ERROR"):
            result = scheduler.get_overdue_tasks(store=FakeStore(fail={"overdue"}))

        self.assertFalse(result.ok)
        self.assertEqual(result.tasks, [])
        self.assertEqual(result.error, "overdue failed")


class CreateFollowUpTaskTest(TestCase):
    def setUp(self):
        self.plant_room = create_plant_room()

    @freeze_time("2024-03-15 12:00:00")
    def test_follow_up_from_log(self):
        result = scheduler.create_follow_up_task(
            source_type="log",
            source_id="LOG-20240315-000123",
            issue="Leaking valve",
            plant_room_id=self.plant_room.id,
        )

        self.assertTrue(result.success)
        self.assertTrue(result.task_id.startswith("FOLLOWUP-LOG-"))

        task = MaintenanceTask.objects.get(task_id=result.task_id)
        self.assertEqual(task.due_date, date(2024, 3, 18))
        self.assertEqual(task.task_type, TaskType.CORRECTIVE)
        self.assertEqual(task.priority, TaskPriority.MEDIUM)
        self.assertEqual(task.status, TaskStatus.OPEN)
        self.assertEqual(
            task.notes,
            "Follow-up task created from log (ID: LOG-20240315-000123). Issue: Leaking valve",
        )

    @freeze_time("2024-12-30 12:00:00")
    def test_follow_up_from_form_with_asset(self):
        asset = create_asset()

        result = scheduler.create_follow_up_task(
            source_type="form",
            source_id="FORM-9",
            issue="Flue damaged",
            plant_room_id=self.plant_room.id,
            asset_id=asset.id,
            priority=TaskPriority.HIGH,
        )

        self.assertTrue(result.task_id.startswith("FOLLOWUP-FORM-"))
        task = MaintenanceTask.objects.get(task_id=result.task_id)
        self.assertEqual(task.due_date, date(2025, 1, 2))
        self.assertEqual(task.asset, asset)
        self.assertEqual(task.priority, TaskPriority.HIGH)

    def test_unknown_plant_room_fails_without_raising(self):
        with self.assertLogs("plantops", level="ERROR"):
            result = scheduler.create_follow_up_task(
                source_type="log",
                source_id="LOG-1",
                issue="Noise",
                plant_room_id=uuid4(),
            )

        self.assertFalse(result.success)
        self.assertIn("not found", result.error)
        self.assertFalse(MaintenanceTask.objects.exists())

    def test_invalid_source_type(self):
        result = scheduler.create_follow_up_task(
            source_type="email",
            source_id="1",
            issue="Noise",
            plant_room_id=self.plant_room.id,
        )

        self.assertFalse(result.success)
        self.assertFalse(MaintenanceTask.objects.exists())


class RunTaskAutomationTest(TestCase):
    @freeze_time("2024-03-15 12:00:00")
    def test_creates_tasks_and_counts_overdue(self):
        plant_room = create_plant_room()
        create_asset()
        create_task(plant_room, task_id="T-LATE", due_date=date(2024, 3, 1))

        result = scheduler.run_task_automation()

        self.assertTrue(result.ok)
        self.assertEqual(result.tasks_created, 1)
        # The new PPM task is due today, so only the older task is overdue.
        self.assertEqual(result.overdue_tasks_found, 1)
        self.assertEqual(result.errors, [])
        self.assertEqual(result.to_dict()["tasksCreated"], 1)
        self.assertEqual(result.to_dict()["overdueTasksFound"], 1)

    def test_overdue_failure_is_reported(self):
        with self.assertLogs("plantops", level="ERROR"):
            result = scheduler.run_task_automation(store=FakeStore(fail={"overdue"}))

        self.assertEqual(result.overdue_tasks_found, 0)
        self.assertEqual(result.errors, ["Overdue task query failed: overdue failed"])

    def test_unloadable_assets_fail_the_run(self):
        with self.assertLogs("plantops", level="ERROR"):
            result = scheduler.run_task_automation(store=FakeStore(fail={"assets"}))

        self.assertTrue(result.failed)
        self.assertFalse(result.ok)
        self.assertEqual(result.tasks_created, 0)
        self.assertEqual(result.errors, ["assets failed"])

    def test_unloadable_plant_rooms_fail_the_run(self):
        store = FakeStore(assets=[make_asset()], fail={"plant_rooms"})

        with self.assertLogs("plantops", level="ERROR"):
            result = scheduler.run_task_automation(store=store)

        self.assertTrue(result.failed)
        self.assertEqual(store.inserted, [])

    def test_failed_overdue_query_does_not_fail_the_run(self):
        with self.assertLogs("plantops", level="ERROR"):
            result = scheduler.run_task_automation(store=FakeStore(fail={"overdue"}))

        self.assertFalse(result.failed)
