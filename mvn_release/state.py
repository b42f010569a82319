"""Release state: the most recent accepted release request for a project.

Readers get an immutable ReleaseSnapshot. An accepted submission builds a
new snapshot and swaps it in with a single assignment, so a reader sees
either the previous snapshot or the new one, never a mix of both.
"""

from __future__ import annotations

from .models import ReleaseRequest, ReleaseSnapshot


def _flag(value: bool) -> str:
    return "true" if value else "false"


class ReleaseState:
    """Holds the last accepted release request for one project.

    Only ReleaseAction calls commit(), and only while holding the
    project's lock. Everything else is a read of the current snapshot.
    """

    def __init__(self) -> None:
        self._snapshot = ReleaseSnapshot()

    @property
    def snapshot(self) -> ReleaseSnapshot:
        return self._snapshot

    @property
    def is_release_build(self) -> bool:
        return self._snapshot.is_release_build

    @property
    def release_version(self) -> str | None:
        return self._snapshot.release_version

    @property
    def development_version(self) -> str | None:
        return self._snapshot.development_version

    @property
    def scm_tag(self) -> str | None:
        return self._snapshot.scm_tag

    @property
    def requested_by(self) -> str | None:
        return self._snapshot.requested_by

    def commit(self, request: ReleaseRequest) -> ReleaseSnapshot:
        """Record request as the latest accepted release."""
        snapshot = ReleaseSnapshot.accepted(request)
        self._snapshot = snapshot
        return snapshot

    def build_parameters(self, *, include_secrets: bool = True) -> dict[str, str]:
        """Flatten the accepted request into build parameters.

        Optional values the user did not specify are left out. Returns an
        empty dict until a release has been accepted.

        Args:
            include_secrets: If False, scmPassword is never emitted.
        """
        snap = self._snapshot
        if not snap.is_release_build:
            return {}

        params = {
            "releaseVersion": snap.release_version or "",
            "developmentVersion": snap.development_version or "",
            "appendBuildNumber": _flag(snap.append_build_number),
            "closeStagingRepo": _flag(snap.close_staging_repo),
            "appendUsernameToComment": _flag(snap.append_username_to_comment),
            "requestedBy": snap.requested_by or "",
        }
        optional = {
            "repoDescription": snap.repo_description,
            "scmUsername": snap.scm_username,
            "scmCommentPrefix": snap.scm_comment_prefix,
            "scmTag": snap.scm_tag,
        }
        if include_secrets:
            optional["scmPassword"] = snap.scm_password
        params.update({k: v for k, v in optional.items() if v is not None})
        return params
