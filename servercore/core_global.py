"""Process-wide setup and teardown of the core services."""

from __future__ import annotations

from typing import Optional

from .thread_manager import ThreadManager

_thread_manager: Optional[ThreadManager] = None


def get_thread_manager() -> ThreadManager:
    """The thread manager of the live CoreGlobal; raises if there is none."""
    if _thread_manager is None:
        raise RuntimeError("core services are not initialized")
    return _thread_manager


class CoreGlobal:
    """Owns the global thread manager from creation until close()."""

    def __init__(self) -> None:
        global _thread_manager
        self._thread_manager: Optional[ThreadManager] = ThreadManager()
        _thread_manager = self._thread_manager

    @property
    def thread_manager(self) -> Optional[ThreadManager]:
        return self._thread_manager

    def close(self) -> None:
        """Shut the thread manager down; safe to call more than once."""
        global _thread_manager
        manager, self._thread_manager = self._thread_manager, None
        if manager is None:
            return
        if _thread_manager is manager:
            _thread_manager = None
        manager.shutdown()

    def __enter__(self) -> CoreGlobal:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()