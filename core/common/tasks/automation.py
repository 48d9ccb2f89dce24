import logging
import time

from celery import shared_task

from core.common.includes import scheduler
from core.common.logging import log_performance

logger = logging.getLogger("plantops")


@shared_task(name="run_daily_task_automation")
def run_daily_task_automation(assigned_to=None):
    """
    Raises due PPM tasks and counts overdue work.
    """
    started = time.monotonic()
    result = scheduler.run_task_automation(assigned_to=assigned_to)
    log_performance(
        "run_daily_task_automation",
        time.monotonic() - started,
        result.ok,
        {"created": result.tasks_created, "overdue": result.overdue_tasks_found},
    )

    for error in result.errors:
        logger.error(f"Daily task automation error: {error}")
    if result.failed:
        logger.error("Daily task automation aborted before any asset was checked")
    return result.to_dict()


@shared_task(name="report_overdue_tasks")
def report_overdue_tasks():
    """
    Logs a summary line for every overdue task.
    """
    overdue = scheduler.get_overdue_tasks()
    if not overdue.ok:
        logger.error(f"Could not report overdue tasks: {overdue.error}")
        return {"success": False, "error": overdue.error}

    for task in overdue.tasks:
        logger.warning(
            f"Overdue task {task.task_id} ({task.asset_name}, {task.plant_room_block}) "
            f"{task.days_past_due} days past due, assigned to {task.assigned_engineer_email}"
        )
    logger.info(f"{len(overdue.tasks)} overdue tasks reported")
    return {"success": True, "overdue_tasks": len(overdue.tasks)}
