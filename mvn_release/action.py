"""Release action: the entry point users hit to start a release.

Handles a release submission end to end:
1. Check the actor may release the project
2. Parse the submitted form parameters
3. Validate the next development version
4. Under the project's lock, schedule one build and record the request

Steps 1-3 raise on failure and leave everything untouched. Step 4 either
schedules the build and commits the request to the ReleaseState, or is
refused by the scheduler and changes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol

from .errors import PermissionDenied
from .locks import ProjectLocks
from .models import (
    Actor,
    AdmissionResult,
    BuildCause,
    ModuleInfo,
    ReleaseRequest,
    SubmissionOutcome,
)
from .parser import parse_request
from .state import ReleaseState
from .validation import validate_request
from .versions import ModuleVersionInfo

logger = logging.getLogger(__name__)

DISPLAY_NAME = "Perform Maven Release"
URL_NAME = "mvnrelease"
ICON_FILE_NAME = "installer.gif"
LAST_RELEASE_PERMALINK = "lastRelease"
PERMALINKS = (LAST_RELEASE_PERMALINK,)


class ModuleRegistry(Protocol):
    def module(self, project_id: str) -> ModuleInfo: ...


class PermissionCheck(Protocol):
    def check_permission(self, actor: Actor, target: str) -> bool: ...


class BuildScheduler(Protocol):
    def schedule(
        self,
        target: str,
        cause: BuildCause,
        request: ReleaseRequest,
        *,
        delay: int = 0,
    ) -> AdmissionResult: ...


class BuildWrapper(Protocol):
    def enable_release(self, target: str) -> None: ...


class ReleaseAction:
    """Release submission handling and release defaults for one project.

    Attributes:
        project_id: Registry id of the project being released.
        state: Last accepted release request. Mutated only by submit().
        select_custom_scm_comment_prefix: Form default for the comment
            prefix checkbox.
        select_append_username: Form default for the append-username
            checkbox.
    """

    display_name = DISPLAY_NAME
    url_name = URL_NAME
    permalinks = PERMALINKS

    def __init__(
        self,
        project_id: str,
        *,
        registry: ModuleRegistry,
        permissions: PermissionCheck,
        scheduler: BuildScheduler,
        wrapper: BuildWrapper,
        locks: ProjectLocks,
        select_custom_scm_comment_prefix: bool = False,
        select_append_username: bool = False,
        base_url: str = "",
    ) -> None:
        self.project_id = project_id
        self.state = ReleaseState()
        self.select_custom_scm_comment_prefix = select_custom_scm_comment_prefix
        self.select_append_username = select_append_username
        self._registry = registry
        self._permissions = permissions
        self._scheduler = scheduler
        self._wrapper = wrapper
        self._locks = locks
        self._base_url = base_url.rstrip("/")

    @property
    def is_release_build(self) -> bool:
        return self.state.is_release_build

    @property
    def nexus_support_enabled(self) -> bool:
        return False

    @property
    def project_url(self) -> str:
        return f"{self._base_url}/job/{self.project_id}"

    @property
    def failed_url(self) -> str:
        return f"{self.project_url}/{self.url_name}/failed"

    def has_permission(self, actor: Actor) -> bool:
        return self._permissions.check_permission(actor, self.project_id)

    def icon_file_name(self, actor: Actor) -> str | None:
        """Sidebar icon, or None to hide the link from users who can't release."""
        return ICON_FILE_NAME if self.has_permission(actor) else None

    def root_module(self) -> ModuleInfo:
        return self._registry.module(self.project_id)

    def modules(self) -> list[ModuleInfo]:
        root = self.root_module()
        return [root, *root.submodules]

    def _version_info(self) -> ModuleVersionInfo:
        # Always the live version: a finished release bumps it
        return ModuleVersionInfo(raw_version=self.root_module().version)

    def compute_release_version(self) -> str:
        return self._version_info().release_version()

    def compute_next_version(self) -> str:
        return self._version_info().next_development_version()

    def compute_repo_description(self) -> str:
        """Default staging repository description: "<name>:<release version>"."""
        return f"{self.root_module().name}:{self.compute_release_version()}"

    def compute_scm_tag(self) -> str:
        """Default SCM tag, Maven style: "<artifactId>-<release version>"."""
        return f"{self.root_module().artifact_id}-{self.compute_release_version()}"

    def submit(
        self, actor: Actor, params: Mapping[str, Sequence[str]]
    ) -> SubmissionOutcome:
        """Handle a release form submission.

        Args:
            actor: The authenticated user submitting the form.
            params: Multi-valued form parameters (see parser).

        Returns:
            Accepted outcome redirecting to the project page, or a rejected
            outcome redirecting to the failure page if the scheduler refused
            the build (e.g. one is already queued).

        Raises:
            PermissionDenied: If actor may not release this project.
            MalformedRequest: If a required parameter is missing.
            InvalidVersion: If the development version is not a snapshot.

        If the build wrapper fails after the scheduler accepted, the request
        is still recorded before the wrapper error propagates.
        """
        if not self.has_permission(actor):
            logger.warning("%s denied release of %s", actor.name, self.project_id)
            raise PermissionDenied(actor.name, self.project_id)

        request = parse_request(params, requested_by=actor.name)
        validate_request(request)

        cause = BuildCause(user_id=actor.name)
        with self._locks.hold(self.project_id):
            result = self._scheduler.schedule(self.project_id, cause, request, delay=0)
            if result is AdmissionResult.ACCEPTED:
                try:
                    self._wrapper.enable_release(self.project_id)
                finally:
                    # The build is queued either way and reads this request
                    self.state.commit(request)

        if result is AdmissionResult.ACCEPTED:
            logger.info(
                "Release %s of %s scheduled by %s",
                request.release_version,
                self.project_id,
                actor.name,
            )
            return SubmissionOutcome(result=result, redirect_url=self.project_url)

        logger.info("Release of %s rejected by scheduler", self.project_id)
        return SubmissionOutcome(result=result, redirect_url=self.failed_url)
