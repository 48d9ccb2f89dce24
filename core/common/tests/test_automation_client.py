"""
Tests for the remote task automation client.
"""

from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase, override_settings

from core.common.includes.automation_client import AutomationClient


def mock_response(status_code=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@override_settings(
    TASK_AUTOMATION_URL="https://plantops.example.com/api/v1/management/",
    TASK_AUTOMATION_API_KEY="automation-secret",
    TASK_AUTOMATION_TIMEOUT=15,
)
class AutomationClientTest(SimpleTestCase):
    def setUp(self):
        self.automation_client = AutomationClient()

    @patch("core.common.includes.automation_client.requests.post")
    def test_posts_assignee_with_bearer_key(self, mock_post):
        mock_post.return_value = mock_response(payload={"tasksCreated": 0, "overdueTasksFound": 0})

        self.automation_client.run_daily_automation(assigned_to="b3c1f0a2-0000-0000-0000-000000000001")

        mock_post.assert_called_once_with(
            "https://plantops.example.com/api/v1/management/automation/daily-task-automation/",
            headers={
                "Authorization": "Bearer automation-secret",
                "Content-Type": "application/json",
            },
            json={"assignedToTeamId": "b3c1f0a2-0000-0000-0000-000000000001"},
            timeout=15,
        )

    @patch("core.common.includes.automation_client.requests.post")
    def test_success(self, mock_post):
        mock_post.return_value = mock_response(payload={
            "tasksCreated": 3,
            "overdueTasksFound": 5,
            "errors": ["Duplicate check failed for asset AST-9"],
            "results": [{"asset_id": "AST-1"}],
        })

        result = self.automation_client.run_daily_automation()

        self.assertTrue(result.ok)
        self.assertEqual(result.tasks_created, 3)
        self.assertEqual(result.overdue_tasks_found, 5)
        self.assertEqual(result.errors, ["Duplicate check failed for asset AST-9"])
        self.assertEqual(result.results, [{"asset_id": "AST-1"}])
        self.assertEqual(mock_post.call_args.kwargs["json"], {"assignedToTeamId": None})

    @patch("core.common.includes.automation_client.requests.post")
    def test_missing_counts_default_to_zero(self, mock_post):
        mock_post.return_value = mock_response(payload={})

        result = self.automation_client.run_daily_automation()

        self.assertTrue(result.ok)
        self.assertEqual(result.tasks_created, 0)
        self.assertEqual(result.overdue_tasks_found, 0)
        self.assertEqual(result.errors, [])

    @patch("core.common.includes.automation_client.requests.post")
    def test_http_error_uses_response_message(self, mock_post):
        mock_post.return_value = mock_response(
            status_code=401, payload={"error": "AUTHENTICATION_ERROR", "message": "Invalid token"}
        )

        with self.assertLogs("plantops", level="ERROR"):
            result = self.automation_client.run_daily_automation()

        self.assertTrue(result.failed)
        self.assertEqual(result.tasks_created, 0)
        self.assertEqual(result.errors, ["Invalid token"])

    @patch("core.common.includes.automation_client.requests.post")
    def test_http_error_without_body(self, mock_post):
        mock_post.return_value = mock_response(status_code=500, json_error=ValueError("no json"))

        with self.assertLogs("plantops", level="ERROR"):
            result = self.automation_client.run_daily_automation()

        self.assertTrue(result.failed)
        self.assertEqual(result.errors, ["Failed to run automation"])

    @patch("core.common.includes.automation_client.requests.post")
    def test_network_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("connection refused")

        with self.assertLogs("plantops", level="ERROR"):
            result = self.automation_client.run_daily_automation()

        self.assertTrue(result.failed)
        self.assertEqual(result.tasks_created, 0)
        self.assertEqual(result.overdue_tasks_found, 0)
        self.assertEqual(result.errors, ["Network error: connection refused"])

    def test_explicit_configuration_overrides_settings(self):
        client = AutomationClient(base_url="http://other/api/", api_key="k", timeout=5)

        self.assertEqual(client.base_url, "http://other/api")
        self.assertEqual(client.api_key, "k")
        self.assertEqual(client.timeout, 5)
