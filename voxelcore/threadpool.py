"""Worker threads fed from a priority queue and two ordinary queues."""

from __future__ import annotations

import os
import queue
import threading
import time
from collections import deque
from collections.abc import Callable

Task = Callable[[], None]

DEFAULT_PRIORITY_LIMIT = 10_000
DEFAULT_TASK_LIMIT = 10_000
_SHUTDOWN_SEND_TIMEOUT = 0.0003


def _half_the_cpus() -> int:
    return (os.cpu_count() or 1) // 2


def _pop(tasks: deque) -> Task | None:
    try:
        return tasks.popleft()
    except IndexError:
        return None


class Threadpool:
    """Runs priority tasks first, then the first and second queues in turn.

    Idle workers go to sleep and are woken when a task is added.
    """

    def __init__(self) -> None:
        self.workers: list[threading.Thread] = []
        self._sleeping = 0
        self._sleeping_lock = threading.Lock()
        self._last_update = time.monotonic()

        self.priority_queue: deque[Task] = deque()
        self.priority_limit = DEFAULT_PRIORITY_LIMIT
        self._normal_queues: tuple[deque[Task], deque[Task]] = (deque(), deque())
        self.task_limit = DEFAULT_TASK_LIMIT
        self._wake: queue.Queue[bool] = queue.Queue(maxsize=1)

    @property
    def sleeping(self) -> int:
        """Number of workers currently waiting to be woken."""
        with self._sleeping_lock:
            return self._sleeping

    def _change_sleeping(self, delta: int) -> None:
        with self._sleeping_lock:
            self._sleeping += delta

    def _work(self) -> None:
        first, second = self._normal_queues
        counter = 0
        poll = 0
        while True:
            while (task := _pop(self.priority_queue)) is not None:
                task()

            while True:
                if counter < 3:
                    task = _pop(first)
                    if task is None:
                        counter = 0
                        task = _pop(second)
                else:
                    task = _pop(second)
                    if task is not None:
                        counter = 0
                    else:
                        task = _pop(first)
                if task is None:
                    break
                task()
                counter += 1

            if poll < 2:
                poll += 1
                continue
            poll = 0
            self._change_sleeping(1)
            if not self._wake.get():
                break
            self._change_sleeping(-1)
        self._change_sleeping(-1)

    def launch(self, num_threads: int | None = None) -> None:
        """Start workers; by default one for every two CPUs."""
        count = _half_the_cpus() if num_threads is None else num_threads
        for i in range(count):
            worker = threading.Thread(target=self._work, name=str(i), daemon=True)
            try:
                worker.start()
            except RuntimeError:
                print("thread couldnt been spawned")
                continue
            self.workers.append(worker)

    def update(self) -> None:
        """Once a second, start or stop workers to match the idle count."""
        if time.monotonic() - self._last_update < 1.0:
            return
        available = _half_the_cpus() - self.sleeping
        if available > 0:
            self.launch(available)
        elif available < 0:
            for _ in range(min(len(self.workers), -available)):
                self._wake.put(False)
        self._last_update = time.monotonic()

    def priority_is_full(self) -> bool:
        return len(self.priority_queue) <= self.priority_limit

    def _submit(self, tasks: deque, limit: int, task: Task) -> Task | None:
        if len(tasks) >= limit:
            return task
        tasks.append(task)
        try:
            self._wake.put_nowait(True)
        except queue.Full:
            pass
        return None

    def add_priority(self, task: Task) -> Task | None:
        """Queue a priority task; hand it back if the queue is full."""
        return self._submit(self.priority_queue, self.priority_limit, task)

    def add_to_first(self, task: Task) -> Task | None:
        """Queue an ordinary task; hand it back if the queue is full."""
        return self._submit(self._normal_queues[0], self.task_limit, task)

    def add_to_second(self, task: Task) -> Task | None:
        """Queue a task to run when time allows; hand it back if full."""
        return self._submit(self._normal_queues[1], self.task_limit, task)

    def shutdown(self) -> None:
        """Tell every worker to stop and wait for them to finish."""
        for _ in self.workers:
            try:
                self._wake.put(False, timeout=_SHUTDOWN_SEND_TIMEOUT)
            except queue.Full:
                return
        for worker in self.workers:
            worker.join()