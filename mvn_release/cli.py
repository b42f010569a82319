"""CLI entry point for mvn-release."""

from __future__ import annotations

import argparse
import uuid
from importlib.metadata import version as pkg_version
from pathlib import Path

from mvn_release.action import ReleaseAction
from mvn_release.errors import ReleaseError
from mvn_release.locks import ProjectLocks
from mvn_release.models import Actor
from mvn_release.parser import parse_form_pairs
from mvn_release.scheduling import (
    AllowListPermissions,
    ReleaseBuildWrapper,
    SingleSlotScheduler,
)
from mvn_release.shell import configure_logging, fatal, step
from mvn_release.toml import TomlModuleRegistry, default_config_path, load_config

__version__ = pkg_version("mvn-release")


def build_action(config_path: Path, module: str) -> ReleaseAction:
    """Wire a ReleaseAction to in-process collaborators from release.toml."""
    config = load_config(config_path)
    registry = TomlModuleRegistry(config_path)
    # Fail early on an unknown module id
    registry.module(module)
    return ReleaseAction(
        module,
        registry=registry,
        permissions=AllowListPermissions(config.release_users),
        scheduler=SingleSlotScheduler(),
        wrapper=ReleaseBuildWrapper(),
        locks=ProjectLocks(),
        select_custom_scm_comment_prefix=config.select_custom_scm_comment_prefix,
        select_append_username=config.select_append_username,
        base_url=config.base_url,
    )


def _write_output(output_path: str, params: dict[str, str]) -> None:
    """Append params as GitHub step outputs.

    Multi-line values use the name<<DELIMITER form so they cannot smuggle in
    extra name=value lines.
    """
    with open(output_path, "a") as fh:
        for name, value in params.items():
            if "\n" in value or "\r" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                fh.write(f"{name}={value}\n")


def cmd_show(args: argparse.Namespace) -> None:
    """Print the module's current version and the release defaults."""
    try:
        action = build_action(args.config, args.module)
        root = action.root_module()
        step(f"{root.name} ({root.artifact_id})")
        print(f"  Current version:          {root.version}")
        print(f"  Release version:          {action.compute_release_version()}")
        print(f"  Next development version: {action.compute_next_version()}")
        print(f"  Repository description:   {action.compute_repo_description()}")
        print(f"  SCM tag:                  {action.compute_scm_tag()}")
        for sub in root.submodules:
            print(f"  └ {sub.name} ({sub.artifact_id}) {sub.version}")
    except ReleaseError as exc:
        fatal(str(exc))


def cmd_submit(args: argparse.Namespace) -> None:
    """Submit a release request and report the outcome."""
    try:
        action = build_action(args.config, args.module)
        params = parse_form_pairs(args.param or [])
        step(f"Submitting release of {args.module} as {args.user}")
        outcome = action.submit(Actor(name=args.user), params)
    except ReleaseError as exc:
        fatal(str(exc))
        return

    if not outcome.accepted:
        fatal(f"Build could not be scheduled, see {outcome.redirect_url}")
        return

    build_params = action.state.build_parameters(include_secrets=False)
    for name, value in build_params.items():
        print(f"  {name}: {value}")
    if args.github_output:
        _write_output(args.github_output, build_params)
    print(f"✓ Release scheduled: {outcome.redirect_url}")


def cli(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mvn-release",
        description="Validate a release request and schedule exactly one release build.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Release configuration file. (default: $MVN_RELEASE_CONFIG or release.toml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show info log messages."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # show subcommand
    show_parser = subparsers.add_parser(
        "show", help="Show computed release defaults for a module."
    )
    show_parser.add_argument("-m", "--module", required=True, help="Module id.")
    show_parser.set_defaults(func=cmd_show)

    # submit subcommand
    submit_parser = subparsers.add_parser(
        "submit", help="Submit a release request for a module."
    )
    submit_parser.add_argument("-m", "--module", required=True, help="Module id.")
    submit_parser.add_argument(
        "-u", "--user", required=True, help="Name of the user requesting the release."
    )
    submit_parser.add_argument(
        "-p",
        "--param",
        action="append",
        metavar="KEY[=VALUE]",
        help="Form parameter (repeatable). A bare KEY sets a checkbox flag.",
    )
    submit_parser.add_argument(
        "--github-output",
        default=None,
        help="Append accepted build parameters to this file as name=value lines.",
    )
    submit_parser.set_defaults(func=cmd_submit)

    args = parser.parse_args(argv)
    if args.config is None:
        args.config = default_config_path()
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    cli()
