"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from mvn_release.action import ReleaseAction
from mvn_release.locks import ProjectLocks
from mvn_release.models import Actor, ModuleInfo
from mvn_release.scheduling import (
    AllowListPermissions,
    ReleaseBuildWrapper,
    SingleSlotScheduler,
)


class StaticRegistry:
    """Module registry holding a fixed, mutable set of modules."""

    def __init__(self, modules: dict[str, ModuleInfo]) -> None:
        self.modules = modules

    def module(self, project_id: str) -> ModuleInfo:
        return self.modules[project_id]


@pytest.fixture
def release_toml(tmp_path: Path) -> Path:
    """Create a temporary release.toml file."""
    content = """\
[release]
base-url = "http://ci.example.com/"
select-custom-scm-comment-prefix = true
release-users = ["alice"]

[modules.my-app]
name = "My App"
group-id = "com.example"
artifact-id = "my-app"
version = "2.0.0-SNAPSHOT"

[[modules.my-app.submodules]]
name = "My App Core"
artifact-id = "my-app-core"
version = "2.0.0-SNAPSHOT"

[modules.Other_Lib]
version = "0.9"
"""
    path = tmp_path / "release.toml"
    path.write_text(content)
    return path


@pytest.fixture
def registry() -> StaticRegistry:
    return StaticRegistry(
        {
            "my-app": ModuleInfo(
                name="My App", artifact_id="my-app", version="2.0.0-SNAPSHOT"
            )
        }
    )


@pytest.fixture
def scheduler() -> SingleSlotScheduler:
    return SingleSlotScheduler()


@pytest.fixture
def wrapper() -> ReleaseBuildWrapper:
    return ReleaseBuildWrapper()


@pytest.fixture
def alice() -> Actor:
    return Actor(name="alice")


@pytest.fixture
def action(
    registry: StaticRegistry,
    scheduler: SingleSlotScheduler,
    wrapper: ReleaseBuildWrapper,
) -> ReleaseAction:
    """A ReleaseAction for my-app that only alice may release."""
    return ReleaseAction(
        "my-app",
        registry=registry,
        permissions=AllowListPermissions(["alice"]),
        scheduler=scheduler,
        wrapper=wrapper,
        locks=ProjectLocks(),
        base_url="http://ci.example.com",
    )


@pytest.fixture
def release_params() -> dict[str, list[str]]:
    """A valid submission that specifies a custom SCM tag."""
    return {
        "releaseVersion": ["2.0.0"],
        "developmentVersion": ["2.0.1-SNAPSHOT"],
        "specifyScmTag": ["on"],
        "scmTag": ["my-tag-2.0.0"],
    }
