"""TOML configuration and module registry.

The release configuration lives in a release.toml file:

    [release]
    base-url = "http://ci.example.com"
    release-users = ["alice"]

    [modules.my-app]
    name = "My App"
    artifact-id = "my-app"
    version = "1.2.3-SNAPSHOT"

Module ids are normalized per PEP 503 (lowercase, hyphens instead of
underscores) so "My_App" and "my-app" name the same module.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from packaging.utils import canonicalize_name
from pydantic import BaseModel, Field, ValidationError
from tomlkit.exceptions import ParseError

from .errors import ConfigError
from .models import ModuleInfo

CONFIG_ENV_VAR = "MVN_RELEASE_CONFIG"
DEFAULT_CONFIG_NAME = "release.toml"


class ReleaseConfig(BaseModel):
    """Settings from the [release] table plus every configured module."""

    base_url: str = ""
    select_custom_scm_comment_prefix: bool = False
    select_append_username: bool = False
    release_users: list[str] = Field(default_factory=list)
    modules: dict[str, ModuleInfo] = Field(default_factory=dict)


def default_config_path() -> Path:
    """Config path from $MVN_RELEASE_CONFIG, else ./release.toml."""
    return Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_NAME)


def load_document(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a TOML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        return tomlkit.parse(path.read_text())
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except ParseError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _require_table(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{where} must be a table")
    return value


def get_release_settings(doc: tomlkit.TOMLDocument) -> dict[str, Any]:
    """Extract [release] settings with hyphenated keys mapped to field names."""
    table = _require_table(doc.unwrap().get("release", {}), "[release]")
    return {key.replace("-", "_"): value for key, value in table.items()}


def module_from_table(module_id: str, table: Mapping[str, Any]) -> ModuleInfo:
    """Build a ModuleInfo from a [modules.<id>] table.

    name and artifact-id fall back to the module id; version is required.

    Raises:
        ConfigError: If version is missing or a value has the wrong type.
    """
    table = _require_table(table, f"[modules.{module_id}]")
    version = table.get("version")
    if not version:
        raise ConfigError(f"Module {module_id!r} has no version")
    submodules = table.get("submodules", [])
    if not isinstance(submodules, list):
        raise ConfigError(f"Module {module_id!r}: submodules must be an array")
    children: list[ModuleInfo] = []
    for sub in submodules:
        sub = _require_table(sub, f"Submodule of {module_id!r}")
        children.append(module_from_table(sub.get("artifact-id", module_id), sub))
    try:
        return ModuleInfo(
            name=table.get("name", module_id),
            artifact_id=table.get("artifact-id", module_id),
            version=version,
            group_id=table.get("group-id"),
            submodules=children,
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid module {module_id!r}: {exc}") from exc


def get_modules(doc: tomlkit.TOMLDocument) -> dict[str, ModuleInfo]:
    """Extract all [modules.*] tables, keyed by canonical module id.

    Raises:
        ConfigError: If no modules are defined.
    """
    modules = doc.unwrap().get("modules")
    if not modules:
        raise ConfigError("No [modules] defined in release configuration")
    modules = _require_table(modules, "[modules]")
    return {
        canonicalize_name(module_id): module_from_table(module_id, table)
        for module_id, table in modules.items()
    }


def load_config(path: Path) -> ReleaseConfig:
    """Load release settings and modules from path.

    Raises:
        ConfigError: If the file is unreadable or holds values of the wrong type.
    """
    doc = load_document(path)
    try:
        return ReleaseConfig(**get_release_settings(doc), modules=get_modules(doc))
    except ValidationError as exc:
        raise ConfigError(f"Invalid [release] settings in {path}: {exc}") from exc


class TomlModuleRegistry:
    """Read-only module lookup backed by a release.toml file.

    The file is re-read on every lookup so versions bumped by a previous
    release are picked up without restarting.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def module(self, project_id: str) -> ModuleInfo:
        """Return the current metadata for project_id.

        Raises:
            ConfigError: If the module is not configured.
        """
        modules = get_modules(load_document(self.path))
        try:
            return modules[canonicalize_name(project_id)]
        except KeyError:
            raise ConfigError(f"Unknown module: {project_id}") from None
