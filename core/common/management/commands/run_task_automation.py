"""
Django management command to run the daily maintenance task automation.
"""

import logging

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.common.includes import scheduler
from core.common.includes.automation_client import AutomationClient
from core.common.includes.django_store import DjangoTaskStore
from core.common.includes.store import StoreError
from core.common.models import TeamMember

logger = logging.getLogger("plantops")


class Command(BaseCommand):
    help = "Raise due PPM tasks and report overdue maintenance tasks"

    def add_arguments(self, parser):
        parser.add_argument(
            "--assignee",
            type=str,
            help="Engineer ID to assign new PPM tasks to (optional)",
        )
        parser.add_argument(
            "--remote",
            action="store_true",
            help="Trigger the automation endpoint of the configured deployment instead of running locally",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List assets that are due without creating tasks",
        )

    def handle(self, *args, **options):
        dry_run = options.get("dry_run", False)
        remote = options.get("remote", False)
        assigned_to = self._resolve_assignee(options.get("assignee"))

        self.stdout.write(self.style.SUCCESS(f"Starting task automation at {timezone.now()}"))

        if dry_run:
            self.stdout.write(self.style.WARNING("Running in DRY-RUN mode - no changes will be made"))
            self._dry_run()
            return

        if remote:
            result = AutomationClient().run_daily_automation(assigned_to=assigned_to)
        else:
            result = scheduler.run_task_automation(assigned_to=assigned_to)

        self.stdout.write(f"\n{'=' * 50}")
        self.stdout.write(self.style.SUCCESS("TASK AUTOMATION SUMMARY"))
        self.stdout.write(f"{'=' * 50}")
        self.stdout.write(f"PPM tasks created: {result.tasks_created}")
        self.stdout.write(f"Overdue tasks found: {result.overdue_tasks_found}")
        for error in result.errors:
            self.stdout.write(self.style.ERROR(f"  Error: {error}"))

        if result.failed:
            raise CommandError("Task automation could not be run")

        self.stdout.write(f"Completed at: {timezone.now()}")

    def _resolve_assignee(self, engineer_id):
        if not engineer_id:
            return None
        try:
            return TeamMember.objects.get(engineer_id=engineer_id).id
        except TeamMember.DoesNotExist:
            raise CommandError(f"Team member with engineer ID {engineer_id} not found")

    def _dry_run(self):
        try:
            assets = DjangoTaskStore().list_operational_assets_with_last_service()
        except StoreError as e:
            logger.error(f"Dry run could not load assets: {e}")
            raise CommandError(str(e))

        today = timezone.localdate()
        due = 0
        for asset in assets:
            next_service_date = scheduler.calculate_next_service_date(asset.last_service_date, asset.frequency)
            days_overdue = (today - next_service_date).days
            if days_overdue >= 0:
                due += 1
                self.stdout.write(
                    f"  - {asset.asset_id} {asset.asset_name}: due {next_service_date} "
                    f"({days_overdue} days overdue)"
                )

        self.stdout.write(self.style.WARNING(f"Would consider {due} of {len(assets)} assets for PPM tasks"))
