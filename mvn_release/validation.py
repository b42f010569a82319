"""Release request validation."""

from __future__ import annotations

from .errors import InvalidVersion
from .models import ReleaseRequest
from .versions import is_snapshot


def validate_development_version(version: str) -> None:
    """Require the next development version to be a snapshot.

    Raises:
        InvalidVersion: If version does not end with "-SNAPSHOT".
    """
    if not is_snapshot(version):
        raise InvalidVersion(version)


def validate_request(request: ReleaseRequest) -> None:
    """Run every check a request must pass before it may be scheduled."""
    validate_development_version(request.development_version)
