"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kanban.config import reset_config
from kanban.core.board import BoardStore
from kanban.core.exceptions import GatewayError
from kanban.core.sync import RemoteSync


class InMemoryGateway:
    """
    Stand-in for TaskGateway that keeps records in a dict.

    Every call is appended to `calls` as (operation, payload). Operations
    named in `fail_on` raise GatewayError instead of touching the records.
    """

    base_url = "http://tasks.test"

    def __init__(self, records=None):
        self.records = {str(r["id"]): dict(r) for r in (records or [])}
        self.calls = []
        self.fail_on = set()
        self.closed = False

    def _maybe_fail(self, operation):
        if operation in self.fail_on:
            raise GatewayError(operation, "Internal Server Error", 500)

    def list_tasks(self):
        self.calls.append(("list tasks", None))
        self._maybe_fail("list tasks")
        return [dict(r) for r in self.records.values()]

    def create_task(self, record):
        self.calls.append(("create task", dict(record)))
        self._maybe_fail("create task")
        self.records[record["id"]] = dict(record)

    def update_task(self, task_id, record):
        self.calls.append(("update task", (task_id, dict(record))))
        self._maybe_fail("update task")
        self.records[task_id] = dict(record)

    def delete_task(self, task_id):
        self.calls.append(("delete task", task_id))
        self._maybe_fail("delete task")
        self.records.pop(task_id, None)

    def close(self):
        self.closed = True

    def operations(self):
        """Names of the calls made so far, excluding loads."""
        return [op for op, _ in self.calls if op != "list tasks"]


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now=None):
        self.now = now or datetime(2024, 6, 10, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, seconds=1):
        self.now = self.now + timedelta(seconds=seconds)


def sample_records():
    return [
        {
            "id": "todo-1",
            "title": "Buy milk",
            "description": "2 litres",
            "createdAt": "2024-06-01 08:00:00",
            "updatedAt": "2024-06-01 08:00:00",
        },
        {
            "id": "todo-2",
            "title": "Write report",
            "description": "",
            "createdAt": "2024-06-02 10:30:00",
            "updatedAt": "2024-06-03 11:00:00",
        },
    ]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep every test away from ~/.kanban and real environment overrides."""
    monkeypatch.setenv("KANBAN_CONFIG", str(tmp_path / "config.yml"))
    monkeypatch.setenv("KANBAN_LOG_FILE", str(tmp_path / "kanban.log"))
    for name in ("KANBAN_API_URL", "KANBAN_TIMEOUT", "KANBAN_LOG_LEVEL", "KANBAN_USER"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def store(gateway, clock):
    """Empty board wired to the in-memory gateway, syncing inline."""
    return BoardStore(gateway, sync=RemoteSync(background=False), clock=clock)


@pytest.fixture
def loaded_store(gateway, clock):
    """Board loaded with the two sample tasks in To Do."""
    gateway.records = {r["id"]: r for r in sample_records()}
    board = BoardStore(gateway, sync=RemoteSync(background=False), clock=clock)
    board.load()
    gateway.calls.clear()
    return board


@pytest.fixture
def records():
    return sample_records()
