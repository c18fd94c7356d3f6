import functools
import logging
import os
import threading
import time
from collections import deque
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

logger = logging.getLogger("userbench.gate")


def available_processors() -> int:
    """Logical processors this process may run on (at least 1)."""
    try:
        return max(1, len(os.sched_getaffinity(0)))
    except AttributeError:
        return os.cpu_count() or 1


class PermitGate:
    """
    Thread-safe weighted counting semaphore.
    capacity: total permits; defaults to the number of available processors.
    Waiters are admitted in arrival order, so a large request at the head of
    the queue holds back smaller ones behind it.
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is None:
            capacity = available_processors()
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError(f"gate capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._in_use = 0
        self._peak = 0
        self._waiters: deque = deque()
        self._cond = threading.Condition(threading.Lock())

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        with self._cond:
            return self._in_use

    @property
    def peak(self) -> int:
        with self._cond:
            return self._peak

    @property
    def waiting(self) -> int:
        with self._cond:
            return len(self._waiters)

    def _check_weight(self, weight: int) -> None:
        if weight < 1:
            raise ValueError(f"permit weight must be >= 1, got {weight}")
        if weight > self._capacity:
            raise ValueError(f"permit weight {weight} exceeds gate capacity {self._capacity}")

    def _take(self, weight: int) -> None:
        self._in_use += weight
        if self._in_use > self._peak:
            self._peak = self._in_use

    def acquire(self, weight: int = 1, timeout: Optional[float] = None) -> bool:
        """
        Block until `weight` permits are free. With timeout=None the wait is
        unbounded; otherwise returns False once the timeout expires.
        """
        self._check_weight(weight)
        with self._cond:
            if not self._waiters and self._in_use + weight <= self._capacity:
                self._take(weight)
                return True

            ticket = object()
            self._waiters.append(ticket)
            logger.debug("Waiting for %d permit(s), %d queued", weight, len(self._waiters))
            deadline = None if timeout is None else time.monotonic() + timeout
            try:
                while self._waiters[0] is not ticket or self._in_use + weight > self._capacity:
                    if deadline is None:
                        self._cond.wait()
                        continue
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        logger.debug("Gave up waiting for %d permit(s) after %.2fs", weight, timeout)
                        return False
                    self._cond.wait(remaining)
                self._take(weight)
                return True
            finally:
                self._waiters.remove(ticket)
                # The next waiter may now be at the head of the queue
                self._cond.notify_all()

    def release(self, weight: int = 1) -> None:
        with self._cond:
            if weight < 1 or weight > self._in_use:
                raise ValueError(f"cannot release {weight} permit(s), {self._in_use} held")
            self._in_use -= weight
            self._cond.notify_all()

    @contextmanager
    def permit(self, weight: int = 1) -> Iterator["PermitGate"]:
        self.acquire(weight)
        try:
            yield self
        finally:
            self.release(weight)

    def limit(self, view: Callable) -> Callable:
        """Decorator running `view` while holding one permit."""

        @functools.wraps(view)
        def wrapper(*args, **kwargs):
            with self.permit():
                return view(*args, **kwargs)

        return wrapper

    def __repr__(self) -> str:
        return f"<PermitGate capacity={self._capacity} in_use={self._in_use}>"
