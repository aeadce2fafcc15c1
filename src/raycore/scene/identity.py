"""Identity allocation for scene primitives.

Each ``Scene`` owns an ``IdentityAllocator`` and hands its identities to the
primitives it creates. Identities are dense integers starting at zero, are
never reused, and can be allocated from several threads at once during scene
setup.
"""

from __future__ import annotations

import itertools
import threading


class IdentityAllocator:
    """Thread-safe monotonically increasing identity source."""

    def __init__(self, start: int = 0) -> None:
        self._start = start
        self._counter = itertools.count(start)
        self._lock = threading.Lock()
        self._allocated = 0

    def allocate(self) -> int:
        """Return a fresh identity that has never been handed out before."""
        with self._lock:
            self._allocated += 1
            return next(self._counter)

    @property
    def allocated(self) -> int:
        """Number of identities handed out so far."""
        return self._allocated

    def __repr__(self) -> str:
        return f"IdentityAllocator(start={self._start}, allocated={self._allocated})"
