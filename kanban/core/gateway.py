"""
FILE: kanban/core/gateway.py
PURPOSE: HTTP client for the remote task-list API
EXPORTS:
  - TaskGateway (list/create/update/delete task records)
DEPENDENCIES:
  - httpx (HTTP client)
  - urllib.parse (path quoting)
  - kanban.core.exceptions (GatewayError)
NOTES:
  - Every request carries a bounded timeout
  - Any transport failure or non-2xx status becomes a GatewayError
  - isEditing is stripped from outbound records (UI-only field)
  - The API has no concept of columns; records carry no status
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .constants import DEFAULT_API_URL, DEFAULT_TASKS_PATH, DEFAULT_TIMEOUT
from .exceptions import GatewayError

logger = logging.getLogger(__name__)

# Never sent to or trusted from the remote store
_UI_ONLY_FIELDS = ("isEditing", "is_editing")


def _outbound(record: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in record.items() if k not in _UI_ONLY_FIELDS}


class TaskGateway:
    """Client for the remote task store."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        tasks_path: str = DEFAULT_TASKS_PATH,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.tasks_path = "/" + tasks_path.strip("/")
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def __enter__(self) -> "TaskGateway":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def _task_path(self, task_id: str) -> str:
        return f"{self.tasks_path}/{quote(str(task_id), safe='')}"

    def _request(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        """Send a request, translating every failure into GatewayError."""
        try:
            response = self._client.request(method, path, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GatewayError(
                operation, e.response.reason_phrase or "HTTP error", e.response.status_code
            ) from e
        except httpx.TimeoutException as e:
            raise GatewayError(operation, f"timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise GatewayError(operation, str(e) or type(e).__name__) from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    def list_tasks(self) -> List[Dict[str, Any]]:
        """
        Fetch every task record.

        Returns:
            List of task records as returned by the API

        Raises:
            GatewayError: On transport failure, non-2xx status, or a body
                that is not a JSON list
        """
        response = self._request("list tasks", "GET", self.tasks_path)
        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError("list tasks", "response is not valid JSON") from e

        if not isinstance(data, list):
            raise GatewayError("list tasks", f"expected a list, got {type(data).__name__}")
        return data

    def create_task(self, record: Dict[str, Any]) -> None:
        """POST a new task record. Response body is not inspected."""
        self._request("create task", "POST", self.tasks_path, json=_outbound(record))

    def update_task(self, task_id: str, record: Dict[str, Any]) -> None:
        """PUT the full record, replacing the remote copy of task_id."""
        self._request("update task", "PUT", self._task_path(task_id), json=_outbound(record))

    def delete_task(self, task_id: str) -> None:
        """DELETE the remote record for task_id."""
        self._request("delete task", "DELETE", self._task_path(task_id))
