"""Per-project mutual exclusion.

Submissions for the same project are serialized; submissions for different
projects never wait on each other.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from packaging.utils import canonicalize_name


class ProjectLocks:
    """Hands out one lock per project, keyed by canonical project id."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, project_id: str) -> threading.Lock:
        key = canonicalize_name(project_id)
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    @contextmanager
    def hold(self, project_id: str) -> Iterator[None]:
        """Hold the lock for project_id for the duration of the block."""
        with self.lock_for(project_id):
            yield
