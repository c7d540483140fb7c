"""A counting semaphore that bounds concurrency."""

from __future__ import annotations

import threading

DEFAULT_CONCURRENCY = 500
MAX_CONCURRENCY = 65535


class Semaphore:
    """Hands out a fixed number of tickets; at most 65535."""

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        if concurrency < 0:
            raise ValueError(f"concurrency must not be negative: {concurrency}")
        self._capacity = min(concurrency, MAX_CONCURRENCY)
        self._available = self._capacity
        self._cond = threading.Condition()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def available(self) -> int:
        with self._cond:
            return self._available

    def acquire(self) -> None:
        """Take a ticket, waiting until one is free."""
        with self._cond:
            self._cond.wait_for(lambda: self._available > 0)
            self._available -= 1
            self._cond.notify_all()

    def try_acquire(self) -> bool:
        """Take a ticket if one is free right now."""
        with self._cond:
            if self._available == 0:
                return False
            self._available -= 1
            self._cond.notify_all()
            return True

    def release(self) -> None:
        """Give a ticket back, waiting while all tickets are already in."""
        with self._cond:
            self._cond.wait_for(lambda: self._available < self._capacity)
            self._available += 1
            self._cond.notify_all()

    def __enter__(self) -> Semaphore:
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()