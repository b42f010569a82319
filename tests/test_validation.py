"""Tests for mvn_release.validation."""

from __future__ import annotations

import pytest

from mvn_release.errors import InvalidVersion
from mvn_release.models import ReleaseRequest
from mvn_release.validation import validate_development_version, validate_request


class TestValidateDevelopmentVersion:
    @pytest.mark.parametrize("version", ["1.0.1-SNAPSHOT", "2-SNAPSHOT", "trunk-SNAPSHOT"])
    def test_accepts_snapshots(self, version: str) -> None:
        validate_development_version(version)

    @pytest.mark.parametrize("version", ["2.0.1", "1.0-snapshot", "1.0SNAPSHOT", ""])
    def test_rejects_non_snapshots(self, version: str) -> None:
        with pytest.raises(InvalidVersion) as excinfo:
            validate_development_version(version)
        assert excinfo.value.version == version

    def test_message_names_version(self) -> None:
        with pytest.raises(InvalidVersion, match=r"Developer Version \(2\.0\.1\)"):
            validate_development_version("2.0.1")


class TestValidateRequest:
    def test_checks_development_version(self) -> None:
        request = ReleaseRequest(release_version="2.0.0", development_version="2.0.1")

        with pytest.raises(InvalidVersion):
            validate_request(request)
