from core.common.tasks.automation import report_overdue_tasks, run_daily_task_automation

__all__ = ["report_overdue_tasks", "run_daily_task_automation"]
