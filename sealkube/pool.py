"""A wait group that also bounds how many tasks run at once."""

from __future__ import annotations

import threading


class Pool:
    """Counts outstanding tasks and admits at most ``size`` of them at a time."""

    def __init__(self, size: int = 2) -> None:
        self.size = max(size, 1)
        self._slots = threading.Semaphore(self.size)
        self._cond = threading.Condition()
        self._pending = 0

    def add(self, delta: int = 1) -> None:
        """Reserve ``delta`` slots, blocking while the pool is full; negative frees slots."""
        with self._cond:
            if self._pending + delta < 0:
                raise ValueError("negative pool counter")
        for _ in range(delta):
            self._slots.acquire()
        for _ in range(-delta):
            self._slots.release()
        with self._cond:
            self._pending += delta
            if self._pending == 0:
                self._cond.notify_all()

    def done(self) -> None:
        """Mark one task finished and free its slot."""
        with self._cond:
            if self._pending <= 0:
                raise ValueError("negative pool counter")
            self._pending -= 1
            self._slots.release()
            if self._pending == 0:
                self._cond.notify_all()

    def wait(self) -> None:
        """Block until every added task is done."""
        with self._cond:
            self._cond.wait_for(lambda: self._pending == 0)