import threading

from servercore.thread_local import assign_thread_id, current_thread_id


def _in_thread(func):
    result = []
    t = threading.Thread(target=lambda: result.append(func()))
    t.start()
    t.join()
    return result[0]


def test_assign_sets_current():
    thread_id = assign_thread_id()
    assert current_thread_id() == thread_id


def test_new_thread_starts_without_id():
    main_id = assign_thread_id()
    seen = _in_thread(current_thread_id)
    assert seen == 0
    assert current_thread_id() == main_id


def test_ids_increase():
    first = assign_thread_id()
    second = assign_thread_id()
    assert second > first
    assert current_thread_id() == second


def test_ids_are_unique_across_threads():
    ids = []
    lock = threading.Lock()

    def work():
        thread_id = assign_thread_id()
        with lock:
            ids.append((thread_id, current_thread_id()))

    main_id = assign_thread_id()
    threads = [threading.Thread(target=work) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assigned_ids = {assigned for assigned, _ in ids}
    assert len(assigned_ids) == 16
    assert main_id not in assigned_ids
    assert all(assigned == seen for assigned, seen in ids)
    assert current_thread_id() == main_id


def test_assignment_does_not_leak_to_other_threads():
    main_id = assign_thread_id()
    other = _in_thread(assign_thread_id)
    assert other != main_id
    assert current_thread_id() == main_id