"""Maven style release submissions: validate, derive versions, schedule once."""

from .action import ReleaseAction
from .errors import (
    ConfigError,
    InvalidVersion,
    MalformedRequest,
    PermissionDenied,
    ReleaseError,
)
from .models import Actor, AdmissionResult, ReleaseRequest, SubmissionOutcome
from .state import ReleaseState

__all__ = [
    "Actor",
    "AdmissionResult",
    "ConfigError",
    "InvalidVersion",
    "MalformedRequest",
    "PermissionDenied",
    "ReleaseAction",
    "ReleaseError",
    "ReleaseRequest",
    "ReleaseState",
    "SubmissionOutcome",
]
