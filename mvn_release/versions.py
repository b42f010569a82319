"""Version parsing and derivation utilities.

A development version looks like "1.2.3-SNAPSHOT" or "1.2.3-rc1-SNAPSHOT".
Releasing it drops only the snapshot marker ("1.2.3", "1.2.3-rc1"). The next
development cycle bumps the annotation revision if there is one ("rc1" →
"rc2"), otherwise the last numeric component, and re-appends the marker.

Versions that cannot be parsed never abort the caller: the release version
falls back to a plain text replacement and the next development version to
UNKNOWN_NEXT_VERSION.
"""

from __future__ import annotations

import logging
import re

from packaging.version import Version
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

SNAPSHOT_QUALIFIER = "SNAPSHOT"
SNAPSHOT_SUFFIX = f"-{SNAPSHOT_QUALIFIER}"
UNKNOWN_NEXT_VERSION = f"NaN{SNAPSHOT_SUFFIX}"

# digits[-annotation[-revision]][-SNAPSHOT], e.g. "1.0-beta-2-SNAPSHOT"
_VERSION_RE = re.compile(
    r"(?P<number>[0-9]+(?:\.[0-9]+)*)"
    r"(?:(?!-SNAPSHOT\Z)(?P<separator>[-_]?)(?P<annotation>[A-Za-z]+)"
    r"(?:(?P<revision_separator>[-_]?)(?P<revision>[0-9]+))?)?"
    r"(?P<snapshot>-SNAPSHOT)?"
)


class VersionParseError(ValueError):
    """Raised when a string does not look like N(.N)*[-ANNOTATION[N]][-SNAPSHOT]."""


class ParsedVersion(BaseModel):
    """A version split into its parts.

    Attributes:
        number: Numeric components, any count (e.g. (1, 2, 3, 4)).
        number_text: The numeric part exactly as written.
        annotation: Annotation with its leading separator (e.g. "-rc"), or "".
        revision_separator: Separator between annotation and revision.
        revision: Annotation revision (e.g. 1 in "rc1"), or None.
        snapshot: Whether the version ends with "-SNAPSHOT".
    """

    model_config = ConfigDict(frozen=True)

    number: tuple[int, ...]
    number_text: str
    annotation: str = ""
    revision_separator: str = ""
    revision: int | None = None
    snapshot: bool = False

    def _qualifier(self, revision: int | None) -> str:
        if revision is None:
            return self.annotation
        return f"{self.annotation}{self.revision_separator}{revision}"

    def release(self) -> str:
        return self.number_text + self._qualifier(self.revision)

    def next_development(self) -> str:
        if self.revision is not None:
            qualifier = self._qualifier(self.revision + 1)
            return self.number_text + qualifier + SNAPSHOT_SUFFIX
        bumped = (*self.number[:-1], self.number[-1] + 1)
        number = ".".join(str(n) for n in bumped)
        return number + self._qualifier(None) + SNAPSHOT_SUFFIX


def parse_version(version_str: str) -> ParsedVersion:
    """Parse a version string into a ParsedVersion.

    Examples:
        "1.2.3-SNAPSHOT" → number (1, 2, 3), snapshot
        "1.0-beta-2" → number (1, 0), annotation "-beta", revision 2
        "1.2.3.4" → number (1, 2, 3, 4)

    Raises:
        VersionParseError: If the string does not match the grammar.
    """
    match = _VERSION_RE.fullmatch(version_str)
    if match is None:
        raise VersionParseError(f"Unparseable version: {version_str!r}")

    annotation = match.group("annotation") or ""
    revision = match.group("revision")
    return ParsedVersion(
        number=Version(match.group("number")).release,
        number_text=match.group("number"),
        annotation=(match.group("separator") or "") + annotation,
        revision_separator=match.group("revision_separator") or "",
        revision=int(revision) if revision is not None else None,
        snapshot=match.group("snapshot") is not None,
    )


def release_version(version_str: str) -> str:
    """Strip the snapshot marker from a version, keeping any annotation.

    Examples:
        "1.2.3-SNAPSHOT" → "1.2.3"
        "1.2.3-rc1-SNAPSHOT" → "1.2.3-rc1"
        "foo-SNAPSHOT" → "foo" (unparseable, plain text replacement)
    """
    try:
        parsed = parse_version(version_str)
    except VersionParseError:
        logger.warning("Failed to compute release version.", exc_info=True)
        return version_str.replace(SNAPSHOT_SUFFIX, "")
    return parsed.release()


def next_development_version(version_str: str) -> str:
    """Bump the version and re-append the snapshot marker.

    Examples:
        "1.2.3-SNAPSHOT" → "1.2.4-SNAPSHOT"
        "1.2.3-rc1-SNAPSHOT" → "1.2.3-rc2-SNAPSHOT"
        "1.0-SNAPSHOT" → "1.1-SNAPSHOT"
        "3" → "4-SNAPSHOT"
        "foo" → "NaN-SNAPSHOT" (unparseable)
    """
    try:
        parsed = parse_version(version_str)
    except VersionParseError:
        logger.warning("Failed to compute next version.", exc_info=True)
        return UNKNOWN_NEXT_VERSION
    return parsed.next_development()


def is_snapshot(version_str: str) -> bool:
    return version_str.endswith(SNAPSHOT_SUFFIX)


class ModuleVersionInfo(BaseModel):
    """The current version of a module and the versions derived from it.

    Built fresh from the module's live version for each query; never cached.
    """

    model_config = ConfigDict(frozen=True)

    raw_version: str

    def release_version(self) -> str:
        return release_version(self.raw_version)

    def next_development_version(self) -> str:
        return next_development_version(self.raw_version)
