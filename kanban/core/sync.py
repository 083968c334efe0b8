"""
FILE: kanban/core/sync.py
PURPOSE: Fire-and-forget dispatch of remote task calls
EXPORTS:
  - SyncFailure (dataclass)
  - RemoteSync (dispatcher with pending tracking and failure notices)
DEPENDENCIES:
  - concurrent.futures (single background worker)
  - threading (lock for bookkeeping shared with the worker)
  - kanban.core.exceptions (GatewayError)
NOTES:
  - Callers never wait on, or see the result of, a remote call
  - Background mode: one worker thread, so remote calls run in submission
    order relative to each other but unordered relative to local state
  - Inline mode runs the call immediately (one-shot CLI, tests)
  - Failures are logged and kept until drain_failures() is called
  - In-flight calls are never cancelled; close() waits for them to finish
"""

import logging
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional

from .constants import TIMESTAMP_FORMAT
from .exceptions import GatewayError

logger = logging.getLogger(__name__)


@dataclass
class SyncFailure:
    """A remote call that did not complete."""

    operation: str
    task_id: str
    message: str
    occurred_at: str


class RemoteSync:
    """Runs gateway calls without blocking local state updates."""

    def __init__(self, background: bool = True):
        self.background = background
        self._lock = threading.Lock()
        self._pending: Counter = Counter()
        self._failures: List[SyncFailure] = []
        self._executor: Optional[ThreadPoolExecutor] = None
        if background:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="kanban-sync")

    def submit(self, operation: str, task_id: str, call: Callable[..., Any], *args: Any) -> None:
        """
        Dispatch call(*args) for task_id.

        Args:
            operation: Short name for notices and logs ("create", "update", ...)
            task_id: Task the call concerns (drives the pending indicator)
            call: Gateway method to run
            *args: Arguments for call
        """
        with self._lock:
            self._pending[task_id] += 1

        if self._executor is None:
            self._run(operation, task_id, call, args)
        else:
            self._executor.submit(self._run, operation, task_id, call, args)

    def _run(self, operation: str, task_id: str, call: Callable[..., Any], args: tuple) -> None:
        try:
            call(*args)
            logger.debug(f"{operation} {task_id}: synced")
        except GatewayError as e:
            logger.warning(f"{operation} {task_id} not synced: {e}")
            self._record_failure(operation, task_id, str(e))
        except Exception as e:
            logger.exception(f"{operation} {task_id}: unexpected error during sync")
            self._record_failure(operation, task_id, f"unexpected error: {e}")
        finally:
            with self._lock:
                self._pending[task_id] -= 1
                if self._pending[task_id] <= 0:
                    del self._pending[task_id]

    def _record_failure(self, operation: str, task_id: str, message: str) -> None:
        failure = SyncFailure(
            operation=operation,
            task_id=task_id,
            message=message,
            occurred_at=datetime.now().strftime(TIMESTAMP_FORMAT),
        )
        with self._lock:
            self._failures.append(failure)

    def is_pending(self, task_id: str) -> bool:
        """True while a remote call for task_id is queued or running."""
        with self._lock:
            return self._pending.get(task_id, 0) > 0

    def pending_count(self) -> int:
        """Number of remote calls not yet finished."""
        with self._lock:
            return sum(self._pending.values())

    def drain_failures(self) -> List[SyncFailure]:
        """Return and forget the failures collected so far."""
        with self._lock:
            failures, self._failures = self._failures, []
        return failures

    def close(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for queued calls."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
