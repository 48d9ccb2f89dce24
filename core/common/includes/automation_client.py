"""
Client for triggering the daily task automation on a remote deployment.
"""

import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from core.common.includes.types import AutomationResult
from core.common.logging import log_error

logger = logging.getLogger("plantops")

AUTOMATION_ENDPOINT = "/automation/daily-task-automation/"


class AutomationClient:
    """Posts automation requests to the daily automation endpoint."""

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None, timeout: Optional[int] = None):
        self.base_url = (base_url or settings.TASK_AUTOMATION_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.TASK_AUTOMATION_API_KEY
        self.timeout = timeout or settings.TASK_AUTOMATION_TIMEOUT

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _failed(message: str) -> AutomationResult:
        return AutomationResult(errors=[message], failed=True)

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or "Failed to run automation"
        return "Failed to run automation"

    def run_daily_automation(self, assigned_to: Optional[Any] = None) -> AutomationResult:
        """
        Run the daily automation remotely.

        Never raises. HTTP and network failures come back as a result with
        ``failed`` set and the reason in ``errors``.
        """
        url = f"{self.base_url}{AUTOMATION_ENDPOINT}"
        payload = {"assignedToTeamId": str(assigned_to) if assigned_to else None}

        try:
            response = requests.post(url, headers=self._headers(), json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            log_error("Task automation request failed", e, {"url": url})
            return self._failed(f"Network error: {e}")

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"Task automation returned {response.status_code}: {message}")
            return self._failed(message)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Task automation returned an unreadable body: {e}")
            return self._failed(f"Invalid response from automation endpoint: {e}")

        result = AutomationResult(
            tasks_created=data.get("tasksCreated") or 0,
            overdue_tasks_found=data.get("overdueTasksFound") or 0,
            errors=data.get("errors") or [],
            results=data.get("results") or [],
        )
        logger.info(
            f"Remote task automation created {result.tasks_created} tasks, "
            f"found {result.overdue_tasks_found} overdue"
        )
        return result
