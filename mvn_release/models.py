"""Data models for mvn-release.

These Pydantic models represent the values that flow through a release
submission: who asked, what they asked for, and what the scheduler said.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Actor(BaseModel):
    """The authenticated user submitting a release."""

    model_config = ConfigDict(frozen=True)

    name: str


class ModuleInfo(BaseModel):
    """Metadata for a releasable module, as read from the module registry.

    Attributes:
        name: Human readable module name, used in the repository description.
        artifact_id: Artifact identifier, used in the default SCM tag.
        version: Current (usually snapshot) version of the module.
        group_id: Optional group/organisation identifier.
        submodules: Child modules released together with this one.
    """

    name: str
    artifact_id: str
    version: str
    group_id: str | None = None
    submodules: list[ModuleInfo] = Field(default_factory=list)


class ReleaseRequest(BaseModel):
    """A parsed release submission.

    Optional string fields are None when the submission did not specify
    them, which is distinct from an empty string.
    """

    model_config = ConfigDict(frozen=True)

    release_version: str
    development_version: str
    append_build_number: bool = False
    repo_description: str | None = None
    close_staging_repo: bool = False
    scm_username: str | None = None
    scm_password: str | None = Field(default=None, repr=False)
    scm_comment_prefix: str | None = None
    append_username_to_comment: bool = False
    scm_tag: str | None = None
    requested_by: str = ""


class ReleaseSnapshot(BaseModel):
    """The last accepted release request, as seen by readers.

    Instances are immutable; a new one replaces the old on every accepted
    submission. The default instance is the initial, empty state.
    """

    model_config = ConfigDict(frozen=True)

    is_release_build: bool = False
    release_version: str | None = None
    development_version: str | None = None
    append_build_number: bool = False
    repo_description: str | None = None
    close_staging_repo: bool = False
    scm_username: str | None = None
    scm_password: str | None = Field(default=None, repr=False)
    scm_comment_prefix: str | None = None
    append_username_to_comment: bool = False
    scm_tag: str | None = None
    requested_by: str | None = None

    @classmethod
    def accepted(cls, request: ReleaseRequest) -> ReleaseSnapshot:
        return cls(is_release_build=True, **request.model_dump())


class BuildCause(BaseModel):
    """Why a build was scheduled. Release builds are always user initiated."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    user_id: str

    @property
    def short_description(self) -> str:
        return f"Started by user {self.user_id}"


class AdmissionResult(str, Enum):
    """Whether the scheduler took the build."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class SubmissionOutcome(BaseModel):
    """Terminal result of a submission that passed all input checks.

    Attributes:
        result: What the scheduler said.
        redirect_url: Where the caller should send the user next: the
            project page when accepted, the failure page when rejected.
    """

    model_config = ConfigDict(frozen=True)

    result: AdmissionResult
    redirect_url: str

    @property
    def accepted(self) -> bool:
        return self.result is AdmissionResult.ACCEPTED
