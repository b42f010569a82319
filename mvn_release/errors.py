"""Errors raised while handling a release submission.

Every error here aborts the submission before anything is scheduled or
recorded. A scheduler refusing the build is not an error; see
models.AdmissionResult.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base class for all mvn-release errors."""


class PermissionDenied(ReleaseError):
    """The actor may not release the target project."""

    def __init__(self, actor: str, project_id: str) -> None:
        self.actor = actor
        self.project_id = project_id
        super().__init__(f"{actor} is missing the release permission for {project_id}")


class MalformedRequest(ReleaseError):
    """A submitted parameter is missing, empty, or not a single line."""

    def __init__(self, key: str, reason: str = "Missing value") -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"{reason} for parameter {key!r}")


class InvalidVersion(ReleaseError):
    """The development version is not a snapshot version."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f'Developer Version ({version}) is not a valid version '
            f'(it must end with "-SNAPSHOT")'
        )


class ConfigError(ReleaseError):
    """The release configuration file is missing or incomplete."""
