import threading

import pytest

from servercore.core_global import CoreGlobal, get_thread_manager


def test_global_manager_follows_lifetime():
    with CoreGlobal() as core:
        assert get_thread_manager() is core.thread_manager
    assert core.thread_manager is None
    with pytest.raises(RuntimeError):
        get_thread_manager()


def test_close_is_idempotent():
    core = CoreGlobal()
    core.close()
    core.close()
    assert core.thread_manager is None
    with pytest.raises(RuntimeError):
        get_thread_manager()


def test_manager_launches_threads():
    ran = threading.Event()
    with CoreGlobal():
        manager = get_thread_manager()
        manager.launch(ran.set)
        manager.join()
    assert ran.is_set()


def test_newer_instance_replaces_global():
    first = CoreGlobal()
    second = CoreGlobal()
    try:
        assert get_thread_manager() is second.thread_manager
        first.close()
        assert get_thread_manager() is second.thread_manager
    finally:
        second.close()
    with pytest.raises(RuntimeError):
        get_thread_manager()