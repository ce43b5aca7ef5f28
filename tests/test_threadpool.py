import threading
import time

import pytest

from voxelcore.threadpool import Threadpool


@pytest.fixture
def pool():
    threadpool = Threadpool()
    yield threadpool
    threadpool.shutdown()


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_priority_task_runs(pool):
    pool.launch(2)
    done = threading.Event()
    assert pool.add_priority(done.set) is None
    assert done.wait(5)


def test_first_and_second_queue_tasks_run(pool):
    pool.launch(2)
    first = threading.Event()
    second = threading.Event()
    assert pool.add_to_first(first.set) is None
    assert pool.add_to_second(second.set) is None
    assert first.wait(5)
    assert second.wait(5)


def test_many_tasks_all_run(pool):
    pool.launch(3)
    lock = threading.Lock()
    count = [0]

    def task():
        with lock:
            count[0] += 1

    adders = [pool.add_priority, pool.add_to_first, pool.add_to_second]
    for i in range(60):
        assert adders[i % 3](task) is None
    _wait_for(lambda: count[0] == 60)
    assert count[0] == 60


def test_tasks_wait_without_workers():
    pool = Threadpool()
    for _ in range(3):
        pool.add_priority(lambda: None)
    assert len(pool.priority_queue) == 3


def test_full_priority_queue_returns_task():
    pool = Threadpool()
    pool.priority_limit = 0

    def task():
        return None

    assert pool.add_priority(task) is task
    assert len(pool.priority_queue) == 0


def test_full_normal_queues_return_task():
    pool = Threadpool()
    pool.task_limit = 1

    def task():
        return None

    assert pool.add_to_first(task) is None
    assert pool.add_to_first(task) is task
    assert pool.add_to_second(task) is None
    assert pool.add_to_second(task) is task


def test_priority_is_full_compares_length_with_limit():
    pool = Threadpool()
    assert pool.priority_is_full() is True
    pool.priority_limit = 1
    pool.add_priority(lambda: None)
    assert pool.priority_is_full() is True
    pool.priority_limit = 0
    assert pool.priority_is_full() is False


def test_idle_workers_go_to_sleep(pool):
    pool.launch(2)
    _wait_for(lambda: pool.sleeping == 2)
    assert pool.sleeping == 2
    assert len(pool.workers) == 2


def test_shutdown_stops_workers():
    pool = Threadpool()
    pool.launch(1)
    _wait_for(lambda: pool.sleeping == 1)
    assert pool.sleeping == 1
    pool.shutdown()
    assert len(pool.workers) == 1
    assert not any(worker.is_alive() for worker in pool.workers)


def test_update_within_a_second_changes_nothing():
    pool = Threadpool()
    pool.update()
    assert pool.workers == []