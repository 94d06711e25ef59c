"""Detached per-connection handler threads with a concurrency ceiling."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

ClientAddress = tuple[str, int]
ClientHandler = Callable[[object, ClientAddress], None]


class TaskSpawner:
    """Starts one daemon thread per accepted connection.

    Threads are never joined and no handle is kept; only a count of running
    tasks is tracked so the ceiling can be enforced and callers can wait for
    in-flight work to finish.

    There is no wait queue. Once ``max_tasks`` handlers are running, spawn()
    refuses new connections immediately and the caller closes them without a
    response, so a burst larger than the ceiling drops the excess clients.
    """

    def __init__(self, max_tasks: int, handler: ClientHandler) -> None:
        if max_tasks <= 0:
            raise ValueError("max_tasks must be positive")

        self._handler = handler
        self._max_tasks = max_tasks
        self._active_tasks = 0
        self._spawned_total = 0
        self._active_lock = threading.Lock()
        self._drain_condition = threading.Condition(self._active_lock)
        self._stopped = False

    @property
    def max_tasks(self) -> int:
        return self._max_tasks

    @property
    def active_tasks(self) -> int:
        with self._active_lock:
            return self._active_tasks

    def spawn(self, client_socket: object, address: ClientAddress) -> bool:
        """Start a handler task; False means the caller still owns the socket."""
        with self._drain_condition:
            if self._stopped or self._active_tasks >= self._max_tasks:
                return False
            self._active_tasks += 1
            self._spawned_total += 1
            task_number = self._spawned_total

        worker = threading.Thread(
            target=self._run,
            args=(client_socket, address),
            name=f"http-handler-{task_number}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError:
            logger.exception("Could not start handler thread")
            self._release()
            return False
        return True

    def wait_for_drain(self, timeout: float | None = None) -> bool:
        with self._drain_condition:
            if timeout is None:
                while self._active_tasks:
                    self._drain_condition.wait(timeout=0.1)
                return True

            deadline = time.monotonic() + timeout
            while self._active_tasks:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._drain_condition.wait(timeout=min(remaining, 0.1))
            return True

    def shutdown(self) -> None:
        """Refuse new tasks; running tasks finish on their own."""
        with self._drain_condition:
            self._stopped = True

    def _release(self) -> None:
        with self._drain_condition:
            self._active_tasks = max(0, self._active_tasks - 1)
            self._drain_condition.notify_all()

    def _run(self, client_socket: object, address: ClientAddress) -> None:
        try:
            self._handler(client_socket, address)
        except Exception:
            logger.exception("Unhandled error in connection handler")
        finally:
            self._release()
