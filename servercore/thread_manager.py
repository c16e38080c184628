"""Threads, tasks and a worker pool fed from a shared task queue."""

from __future__ import annotations

import logging
import os
import threading
from collections import deque
from enum import Enum
from typing import Callable, Optional

from .thread_local import _reset_thread_id, assign_thread_id

logger = logging.getLogger(__name__)


class TaskStatus(Enum):
    CREATED = "created"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELED = "canceled"


class Task:
    """A named callable that can be cancelled before it runs."""

    def __init__(self, func: Optional[Callable[[], object]], name: str = "") -> None:
        self._name = name
        self._func = func
        self._status = TaskStatus.CREATED
        self._cancel_requested = threading.Event()

    def execute(self) -> None:
        """Run the callable unless cancellation was requested first."""
        if self._cancel_requested.is_set():
            self._status = TaskStatus.CANCELED
            return
        self._status = TaskStatus.RUNNING
        if self._func is not None:
            self._func()
            self._status = TaskStatus.COMPLETED

    def cancel(self) -> bool:
        self._cancel_requested.set()
        return True

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> TaskStatus:
        return self._status

    @property
    def is_done(self) -> bool:
        return self._status in (TaskStatus.COMPLETED, TaskStatus.CANCELED)

    def __repr__(self) -> str:
        return f"Task({self._name!r}, {self._status.name})"


class TaskQueue:
    """A blocking FIFO of tasks that can be shut down."""

    def __init__(self) -> None:
        self._cv = threading.Condition()
        self._tasks: deque[Task] = deque()
        self._shutdown = False

    def push(self, task: Task) -> None:
        """Queue ``task``; ignored once the queue is shut down."""
        with self._cv:
            if self._shutdown:
                return
            self._tasks.append(task)
            self._cv.notify()

    def pop(self) -> Optional[Task]:
        """Wait for a task; returns None once the queue is shut down."""
        with self._cv:
            self._cv.wait_for(lambda: self._shutdown or bool(self._tasks))
            if self._shutdown or not self._tasks:
                return None
            return self._tasks.popleft()

    def is_empty(self) -> bool:
        with self._cv:
            return not self._tasks

    def clear(self) -> None:
        with self._cv:
            self._tasks.clear()

    def notify_one(self) -> None:
        with self._cv:
            self._cv.notify()

    def notify_all(self) -> None:
        with self._cv:
            self._cv.notify_all()

    def shutdown(self) -> None:
        with self._cv:
            self._shutdown = True
            self._cv.notify_all()

    def __len__(self) -> int:
        with self._cv:
            return len(self._tasks)


class ThreadManager:
    """Starts one-off threads and runs a pool of workers over a task queue."""

    def __init__(self, thread_count: int = 0) -> None:
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._stopped = threading.Event()
        self._thread_pool: list[threading.Thread] = []
        self._task_queue = TaskQueue()
        self._pool_running = False

        self.initialize_thread_local()
        if thread_count > 0:
            self.initialize_thread_pool(thread_count)

    def launch(self, callback: Callable[[], object], thread_name: str = "") -> None:
        """Run ``callback`` on a new thread; does nothing after close()."""
        if self._stopped.is_set():
            return

        def run() -> None:
            self.initialize_thread_local()
            try:
                if not self._stopped.is_set():
                    callback()
            finally:
                self.destroy_thread_local()

        with self._lock:
            thread = threading.Thread(target=run, name=thread_name or None)
            self._threads.append(thread)
            thread.start()

    def join(self) -> None:
        """Wait for every launched thread to finish."""
        with self._lock:
            threads, self._threads = self._threads, []
        for thread in threads:
            thread.join()

    def close(self) -> None:
        self._stopped.set()
        self._task_queue.notify_all()

    def initialize_thread_pool(self, thread_count: int = 0) -> None:
        """Start worker threads; a count of 0 or less uses one per CPU."""
        if self._pool_running:
            return
        if thread_count <= 0:
            thread_count = os.cpu_count() or 1
        self._pool_running = True
        for index in range(thread_count):
            worker = threading.Thread(target=self._worker_thread, name=f"worker-{index}")
            self._thread_pool.append(worker)
            worker.start()

    def shutdown_thread_pool(self) -> None:
        """Stop the workers and wait for them; queued tasks are not run."""
        self._pool_running = False
        self._task_queue.shutdown()
        for worker in self._thread_pool:
            worker.join()
        self._thread_pool.clear()

    def push_task(self, func: Callable[[], object], name: str = "") -> Task:
        """Queue ``func`` for the worker pool and return its task."""
        task = Task(func, name)
        self._task_queue.push(task)
        return task

    @staticmethod
    def initialize_thread_local() -> None:
        assign_thread_id()

    @staticmethod
    def destroy_thread_local() -> None:
        _reset_thread_id()

    def shutdown(self) -> None:
        """Close, join launched threads and stop the worker pool."""
        self.close()
        self.join()
        self.shutdown_thread_pool()

    def __enter__(self) -> ThreadManager:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _worker_thread(self) -> None:
        self.initialize_thread_local()
        try:
            while self._pool_running:
                task = self._task_queue.pop()
                if task is None:
                    continue
                try:
                    task.execute()
                except Exception:
                    logger.exception("task %r failed", task.name)
        finally:
            self.destroy_thread_local()