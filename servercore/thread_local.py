"""Per-thread numeric identifiers."""

from __future__ import annotations

import itertools
import threading

EMPTY_THREAD_ID = 0

_local = threading.local()
_next_id = itertools.count(1)
_id_lock = threading.Lock()


def current_thread_id() -> int:
    """The identifier assigned to the calling thread, or 0 if none was assigned."""
    return getattr(_local, "thread_id", EMPTY_THREAD_ID)


def assign_thread_id() -> int:
    """Give the calling thread a fresh, process-unique identifier and return it."""
    with _id_lock:
        thread_id = next(_next_id)
    _local.thread_id = thread_id
    return thread_id


def _reset_thread_id() -> None:
    _local.__dict__.pop("thread_id", None)