"""Keyed lock registry used to serialize writes per council."""

import threading
import time
from collections.abc import Hashable, Iterator
from contextlib import contextmanager

from app.errors import OperationCancelledError


class KeyedLocks:
    """One lock per key, created on first use.

    Locks are never evicted; there is one per council ever written to.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    @contextmanager
    def hold(self, key: Hashable, deadline: float | None, operation: str) -> Iterator[None]:
        """Hold the lock for key. deadline is a time.monotonic() value, None waits forever."""
        lock = self._lock_for(key)
        if deadline is None:
            acquired = lock.acquire()
        else:
            acquired = lock.acquire(timeout=max(0.0, deadline - time.monotonic()))
        if not acquired:
            raise OperationCancelledError(operation)
        try:
            yield
        finally:
            lock.release()


def deadline_after(timeout: float | None) -> float | None:
    """Convert a timeout in seconds to a monotonic deadline."""
    return None if timeout is None else time.monotonic() + timeout


def check_deadline(deadline: float | None, operation: str) -> None:
    """Raise OperationCancelledError if the deadline has passed."""
    if deadline is not None and time.monotonic() >= deadline:
        raise OperationCancelledError(operation)


# Process-wide registry: council id -> lock for seat writes, ACTIVATION_KEY for term activation.
council_locks = KeyedLocks()
ACTIVATION_KEY = ("term-activation",)
