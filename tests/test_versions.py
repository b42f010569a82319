"""Tests for mvn_release.versions."""

from __future__ import annotations

import logging

import pytest

from mvn_release.versions import (
    UNKNOWN_NEXT_VERSION,
    ModuleVersionInfo,
    VersionParseError,
    is_snapshot,
    next_development_version,
    parse_version,
    release_version,
)


class TestParseVersion:
    def test_full_version_with_snapshot(self) -> None:
        v = parse_version("1.2.3-SNAPSHOT")
        assert v.number == (1, 2, 3)
        assert v.annotation == ""
        assert v.revision is None
        assert v.snapshot is True

    def test_two_part_version(self) -> None:
        v = parse_version("1.2")
        assert v.number == (1, 2)
        assert v.snapshot is False

    def test_many_components(self) -> None:
        assert parse_version("1.2.3.4-SNAPSHOT").number == (1, 2, 3, 4)

    def test_annotation_with_revision(self) -> None:
        v = parse_version("1.2.3-rc1-SNAPSHOT")
        assert v.annotation == "-rc"
        assert v.revision == 1
        assert v.snapshot is True

    def test_annotation_with_separated_revision(self) -> None:
        v = parse_version("1.0-beta-2")
        assert v.annotation == "-beta"
        assert v.revision_separator == "-"
        assert v.revision == 2

    def test_annotation_without_revision(self) -> None:
        v = parse_version("1.0-alpha-SNAPSHOT")
        assert v.annotation == "-alpha"
        assert v.revision is None
        assert v.snapshot is True

    @pytest.mark.parametrize(
        "version", ["", "abc", "1.x.3", "v1.2.3", "1.2.3-", "1.0.0-beta.1", "1..2"]
    )
    def test_rejects_unparseable(self, version: str) -> None:
        with pytest.raises(VersionParseError):
            parse_version(version)

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_version("nope")


class TestReleaseVersion:
    def test_strips_snapshot(self) -> None:
        assert release_version("1.2.3-SNAPSHOT") == "1.2.3"

    def test_keeps_annotation(self) -> None:
        assert release_version("1.2.3-rc1-SNAPSHOT") == "1.2.3-rc1"

    def test_keeps_annotation_without_revision(self) -> None:
        assert release_version("1.0-alpha-SNAPSHOT") == "1.0-alpha"

    def test_keeps_component_count(self) -> None:
        assert release_version("1.0-SNAPSHOT") == "1.0"

    def test_many_components(self) -> None:
        assert release_version("1.2.3.4-SNAPSHOT") == "1.2.3.4"

    def test_already_released(self) -> None:
        assert release_version("2.0.0") == "2.0.0"

    def test_unparseable_falls_back_to_text_replacement(self) -> None:
        assert release_version("trunk-SNAPSHOT") == "trunk"

    def test_unparseable_without_snapshot_is_unchanged(self) -> None:
        assert release_version("1.x.3") == "1.x.3"

    def test_unparseable_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mvn_release.versions"):
            release_version("trunk-SNAPSHOT")
        assert "Failed to compute release version." in caplog.text


class TestNextDevelopmentVersion:
    def test_bumps_patch(self) -> None:
        assert next_development_version("1.2.3-SNAPSHOT") == "1.2.4-SNAPSHOT"

    def test_bumps_minor_for_two_parts(self) -> None:
        assert next_development_version("1.0-SNAPSHOT") == "1.1-SNAPSHOT"

    def test_bumps_major_for_one_part(self) -> None:
        assert next_development_version("3") == "4-SNAPSHOT"

    def test_bumps_last_of_many_components(self) -> None:
        assert next_development_version("1.2.3.4-SNAPSHOT") == "1.2.3.5-SNAPSHOT"

    def test_bumps_annotation_revision(self) -> None:
        assert next_development_version("1.2.3-rc1-SNAPSHOT") == "1.2.3-rc2-SNAPSHOT"

    def test_bumps_separated_annotation_revision(self) -> None:
        assert next_development_version("1.0-beta-1") == "1.0-beta-2-SNAPSHOT"

    def test_keeps_annotation_without_revision(self) -> None:
        assert next_development_version("1.0-alpha-SNAPSHOT") == "1.1-alpha-SNAPSHOT"

    def test_from_release_version(self) -> None:
        assert next_development_version("2.0.0") == "2.0.1-SNAPSHOT"

    def test_high_patch(self) -> None:
        assert next_development_version("1.0.99-SNAPSHOT") == "1.0.100-SNAPSHOT"

    @pytest.mark.parametrize("version", ["trunk-SNAPSHOT", "1.x", "", "v1.2"])
    def test_unparseable_returns_sentinel(self, version: str) -> None:
        assert next_development_version(version) == UNKNOWN_NEXT_VERSION

    def test_sentinel_value(self) -> None:
        assert UNKNOWN_NEXT_VERSION == "NaN-SNAPSHOT"

    def test_unparseable_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mvn_release.versions"):
            next_development_version("trunk")
        assert "Failed to compute next version." in caplog.text


class TestIsSnapshot:
    def test_snapshot(self) -> None:
        assert is_snapshot("1.0-SNAPSHOT")

    def test_release(self) -> None:
        assert not is_snapshot("1.0")

    def test_marker_without_dash(self) -> None:
        assert not is_snapshot("1.0SNAPSHOT")


class TestModuleVersionInfo:
    def test_derives_both_versions(self) -> None:
        info = ModuleVersionInfo(raw_version="1.2.3-SNAPSHOT")
        assert info.release_version() == "1.2.3"
        assert info.next_development_version() == "1.2.4-SNAPSHOT"

    def test_is_immutable(self) -> None:
        info = ModuleVersionInfo(raw_version="1.0")
        with pytest.raises(ValueError):
            info.raw_version = "2.0"  # type: ignore[misc]
