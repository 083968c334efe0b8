"""
Tests for the remote task API client.

Uses httpx.MockTransport so no server is needed.
"""

import json

import httpx
import pytest

# Path setup handled by conftest.py
from kanban.core.exceptions import GatewayError
from kanban.core.gateway import TaskGateway


def make_gateway(handler, **kwargs):
    """Gateway whose HTTP client routes every request to handler."""
    client = httpx.Client(base_url="http://tasks.test", transport=httpx.MockTransport(handler))
    return TaskGateway(base_url="http://tasks.test", client=client, **kwargs)


class Recorder:
    """MockTransport handler that records requests and replies with a fixed response."""

    def __init__(self, status=200, body=None):
        self.status = status
        self.body = body
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status)
        return httpx.Response(self.status, json=self.body)

    def sent_json(self, index=-1):
        return json.loads(self.requests[index].content)


def test_list_tasks(records):
    """Test GET /tasks returns the records as-is."""
    recorder = Recorder(body=records)
    gateway = make_gateway(recorder)

    assert gateway.list_tasks() == records

    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/tasks"
    print("✓ list_tasks fetches /tasks")


def test_create_task_posts_record(records):
    recorder = Recorder(status=201, body={"ok": True})
    gateway = make_gateway(recorder)

    gateway.create_task(records[0])

    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/tasks"
    assert recorder.sent_json() == records[0]


def test_update_task_puts_full_record(records):
    recorder = Recorder()
    gateway = make_gateway(recorder)

    gateway.update_task("todo-1", records[0])

    request = recorder.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/tasks/todo-1"
    assert recorder.sent_json() == records[0]


def test_delete_task():
    recorder = Recorder(status=204)
    gateway = make_gateway(recorder)

    gateway.delete_task("todo-1")

    request = recorder.requests[0]
    assert request.method == "DELETE"
    assert request.url.path == "/tasks/todo-1"


def test_task_ids_are_path_quoted():
    recorder = Recorder()
    gateway = make_gateway(recorder)

    gateway.delete_task("a/b c")

    assert recorder.requests[0].url.raw_path == b"/tasks/a%2Fb%20c"


def test_editing_flag_never_sent(records):
    """Test that isEditing is stripped from outbound records."""
    recorder = Recorder()
    gateway = make_gateway(recorder)

    record = dict(records[0], isEditing=True)
    gateway.create_task(record)
    gateway.update_task("todo-1", record)

    assert "isEditing" not in recorder.sent_json(0)
    assert "isEditing" not in recorder.sent_json(1)
    print("✓ isEditing is never sent")


def test_custom_tasks_path():
    recorder = Recorder(body=[])
    gateway = make_gateway(recorder, tasks_path="api/v1/tasks/")

    gateway.list_tasks()
    gateway.update_task("x", {"id": "x"})

    assert recorder.requests[0].url.path == "/api/v1/tasks"
    assert recorder.requests[1].url.path == "/api/v1/tasks/x"


@pytest.mark.parametrize(
    "call",
    [
        lambda g: g.list_tasks(),
        lambda g: g.create_task({"id": "x"}),
        lambda g: g.update_task("x", {"id": "x"}),
        lambda g: g.delete_task("x"),
    ],
)
def test_status_errors_raise_gateway_error(call):
    """Any non-2xx status becomes a GatewayError with the status code."""
    gateway = make_gateway(Recorder(status=500))

    with pytest.raises(GatewayError) as exc_info:
        call(gateway)

    assert exc_info.value.status_code == 500
    assert "Internal Server Error" in str(exc_info.value)


def test_not_found_message():
    gateway = make_gateway(Recorder(status=404))

    with pytest.raises(GatewayError) as exc_info:
        gateway.update_task("todo-9", {"id": "todo-9"})

    assert str(exc_info.value) == "update task failed (404): Not Found"
    assert exc_info.value.operation == "update task"


def test_timeout_raises_gateway_error():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    gateway = make_gateway(handler, timeout=2.5)

    with pytest.raises(GatewayError) as exc_info:
        gateway.list_tasks()

    assert str(exc_info.value) == "list tasks failed: timed out after 2.5s"
    assert exc_info.value.status_code is None


def test_connection_error_raises_gateway_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = make_gateway(handler)

    with pytest.raises(GatewayError) as exc_info:
        gateway.create_task({"id": "x"})

    assert "connection refused" in str(exc_info.value)


def test_list_tasks_rejects_non_list_body():
    gateway = make_gateway(Recorder(body={"tasks": []}))

    with pytest.raises(GatewayError) as exc_info:
        gateway.list_tasks()

    assert "expected a list" in str(exc_info.value)


def test_list_tasks_rejects_invalid_json():
    gateway = make_gateway(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(GatewayError) as exc_info:
        gateway.list_tasks()

    assert "not valid JSON" in str(exc_info.value)


def test_gateway_context_manager_closes_client():
    client = httpx.Client(transport=httpx.MockTransport(Recorder()))

    with TaskGateway(client=client):
        pass

    assert client.is_closed


def test_base_url_trailing_slash_stripped():
    gateway = TaskGateway(base_url="http://tasks.test/")
    try:
        assert gateway.base_url == "http://tasks.test"
        assert gateway.tasks_path == "/tasks"
    finally:
        gateway.close()
