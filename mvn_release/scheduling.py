"""In-process build collaborators.

Stand-ins for the build server pieces a release submission talks to: a
scheduler that queues at most one build per project, an allow-list
permission check, and the build wrapper that switches a build into
release mode.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from packaging.utils import canonicalize_name

from .models import Actor, AdmissionResult, BuildCause, ReleaseRequest

logger = logging.getLogger(__name__)

ANY_USER = "*"


class SingleSlotScheduler:
    """Queues at most one pending build per project.

    A second schedule() for a project whose build has not completed yet is
    rejected, the same way a build server refuses to queue a duplicate.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, tuple[BuildCause, ReleaseRequest]] = {}

    def schedule(
        self,
        target: str,
        cause: BuildCause,
        request: ReleaseRequest,
        *,
        delay: int = 0,
    ) -> AdmissionResult:
        key = canonicalize_name(target)
        with self._lock:
            if key in self._pending:
                logger.info("Build for %s already pending", target)
                return AdmissionResult.REJECTED
            self._pending[key] = (cause, request)
        logger.info(
            "Scheduled %s (%s, delay %ss)", target, cause.short_description, delay
        )
        return AdmissionResult.ACCEPTED

    def pending(self, target: str) -> tuple[BuildCause, ReleaseRequest] | None:
        with self._lock:
            return self._pending.get(canonicalize_name(target))

    def complete(self, target: str) -> None:
        """Mark the pending build for target as finished, freeing the slot."""
        with self._lock:
            self._pending.pop(canonicalize_name(target), None)


class AllowListPermissions:
    """Grants the release permission to a fixed set of user names."""

    def __init__(self, users: Iterable[str]) -> None:
        self._users = frozenset(users)

    def check_permission(self, actor: Actor, target: str) -> bool:
        return ANY_USER in self._users or actor.name in self._users


class ReleaseBuildWrapper:
    """Tracks which projects have their next build switched to release mode."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled: set[str] = set()

    def enable_release(self, target: str) -> None:
        with self._lock:
            self._enabled.add(canonicalize_name(target))

    def release_enabled(self, target: str) -> bool:
        with self._lock:
            return canonicalize_name(target) in self._enabled
