"""Release request parsing.

Form submissions arrive as a multi-valued mapping where every value is a
list, even for single-valued fields. Checkboxes are presence flags: the key
being in the mapping means true, whatever its value. Optional text fields
are gated by a flag and only read when that flag is present.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from .errors import MalformedRequest
from .models import ReleaseRequest

# Wire names of the submission form
RELEASE_VERSION = "releaseVersion"
DEVELOPMENT_VERSION = "developmentVersion"
APPEND_BUILD_NUMBER = "appendHudsonBuildNumber"
CLOSE_STAGING_REPO = "closeNexusStage"
REPO_DESCRIPTION = "repoDescription"
SPECIFY_SCM_CREDENTIALS = "specifyScmCredentials"
SCM_USERNAME = "scmUsername"
SCM_PASSWORD = "scmPassword"
SPECIFY_SCM_COMMENT_PREFIX = "specifyScmCommentPrefix"
SCM_COMMENT_PREFIX = "scmCommentPrefix"
APPEND_USERNAME = "appendHudsonUserName"
SPECIFY_SCM_TAG = "specifyScmTag"
SCM_TAG = "scmTag"

Params = Mapping[str, Sequence[str]]


def first_value(params: Params, key: str) -> str:
    """Return the first submitted value for key.

    A plain string is treated as a single submitted value.

    Raises:
        MalformedRequest: If key is absent or has no values, or the value
            spans more than one line.
    """
    values = params.get(key)
    if isinstance(values, str):
        values = [values]
    if not values:
        raise MalformedRequest(key)
    value = values[0]
    # Values are exported downstream as name=value lines
    if "\n" in value or "\r" in value:
        raise MalformedRequest(key, "Line break in value")
    return value


def required_value(params: Params, key: str) -> str:
    """Return the first value for key, which must not be empty."""
    value = first_value(params, key)
    if not value.strip():
        raise MalformedRequest(key, "Empty value")
    return value


def gated_value(params: Params, flag: str, key: str) -> str | None:
    """Return the first value of key if flag was submitted, else None."""
    if flag not in params:
        return None
    return first_value(params, key)


def parse_request(params: Params, *, requested_by: str) -> ReleaseRequest:
    """Extract a ReleaseRequest from submitted form parameters.

    Args:
        params: Multi-valued mapping of form key to submitted values.
        requested_by: Name of the submitting user, recorded verbatim.

    Raises:
        MalformedRequest: If releaseVersion or developmentVersion is missing
            or empty, a gate flag is present without its value, or a value
            contains a line break.
    """
    specify_comment_prefix = SPECIFY_SCM_COMMENT_PREFIX in params
    return ReleaseRequest(
        release_version=required_value(params, RELEASE_VERSION),
        development_version=required_value(params, DEVELOPMENT_VERSION),
        append_build_number=APPEND_BUILD_NUMBER in params,
        close_staging_repo=CLOSE_STAGING_REPO in params,
        repo_description=gated_value(params, CLOSE_STAGING_REPO, REPO_DESCRIPTION),
        scm_username=gated_value(params, SPECIFY_SCM_CREDENTIALS, SCM_USERNAME),
        scm_password=gated_value(params, SPECIFY_SCM_CREDENTIALS, SCM_PASSWORD),
        scm_comment_prefix=gated_value(
            params, SPECIFY_SCM_COMMENT_PREFIX, SCM_COMMENT_PREFIX
        ),
        # Only meaningful alongside a custom comment prefix
        append_username_to_comment=specify_comment_prefix and APPEND_USERNAME in params,
        scm_tag=gated_value(params, SPECIFY_SCM_TAG, SCM_TAG),
        requested_by=requested_by,
    )


def parse_form_pairs(pairs: Iterable[str]) -> dict[str, list[str]]:
    """Turn "key=value" strings into a multi-valued mapping.

    A bare "key" becomes a presence flag with a single empty value.
    Repeated keys accumulate values in order.

    Examples:
        ["releaseVersion=2.0.0", "specifyScmTag"]
        → {"releaseVersion": ["2.0.0"], "specifyScmTag": [""]}
    """
    params: dict[str, list[str]] = {}
    for pair in pairs:
        key, _, value = pair.partition("=")
        key = key.strip()
        if not key:
            raise MalformedRequest(pair)
        params.setdefault(key, []).append(value)
    return params
