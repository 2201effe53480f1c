"""Project creation workflow."""

from __future__ import annotations

import logging
import os
import tarfile
import tempfile
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, ContextManager

import httpx

from .config import ProjectRequest, Settings
from .download import BARE_HINT, download_and_extract
from .environment import Environment, SubprocessEnvironment
from .errors import PackageManagerError, ProjectRootError, TemplateDownloadError, VcsError
from .package_manager import PackageManager, can_use_npm, choose_package_manager, install_dependencies
from .template import TemplateRenderer
from .validation import ensure_valid_package_name
from .vcs import initialize_git_repository

__all__ = [
    "BARE_TEMPLATE_DIR",
    "CreationReport",
    "ProjectCreator",
    "validate_project_root",
]

LOGGER = logging.getLogger(__name__)

BARE_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates" / "project"
BARE_RENAMES = {"gitignore": ".gitignore"}
PROJECT_DESCRIPTOR = "package.json"
GETTING_STARTED_URL = "https://beta.diez.org/getting-started"

StatusFactory = Callable[[str], ContextManager[Any]]


def _no_status(message: str) -> ContextManager[Any]:
    LOGGER.info(message)
    return nullcontext()


def validate_project_root(root: Path, manager: PackageManager, environment: Environment) -> None:
    """Make sure ``root`` can receive a new project, creating it if needed."""

    if root.exists() and not root.is_dir():
        raise ProjectRootError(f"Found a non-directory at {root}.")

    root.mkdir(parents=True, exist_ok=True)
    if (root / PROJECT_DESCRIPTOR).exists():
        raise ProjectRootError(
            f"A Node.js project already exists at {root}.",
            hint="Choose another project name or remove the existing project.",
        )

    if manager is PackageManager.YARN:
        return

    if not can_use_npm(environment, root):
        raise PackageManagerError(f"Unable to start an NPM process in {root}.")


def _single_child_directory(directory: Path) -> Path:
    entries = list(directory.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return directory


@dataclass(frozen=True, slots=True)
class CreationReport:
    """Outcome of a successful :meth:`ProjectCreator.create` call."""

    root: Path
    package_manager: PackageManager
    bare: bool
    dependencies_installed: bool
    repository_initialized: bool

    def instructions(self, cwd: str | Path | None = None) -> list[str]:
        """Human readable next steps, one paragraph per entry."""

        base = Path.cwd() if cwd is None else Path(cwd)
        relative_root = os.path.relpath(self.root, base)
        runner = self.package_manager.script_runner
        lines = [
            f"Success! A new Diez (DS) has been created at {self.root}.",
            "In that directory, the diez command line utility can be invoked using:\n"
            f"  {runner} diez",
        ]
        if not self.dependencies_installed:
            lines.append(
                "Dependencies were not installed. Run "
                f"`{' '.join(self.package_manager.install_command)}` in {relative_root} first."
            )
        if self.bare:
            lines.append(
                "To see a list of available commands, you can run:\n"
                f"  cd {relative_root}\n  {runner} diez --help"
            )
        else:
            lines.append(f"To get started, we suggest running:\n  cd {relative_root}\n  {runner} demo")
            lines.append(f"Check out {GETTING_STARTED_URL} to learn more.")
        return lines


@dataclass(slots=True)
class ProjectCreator:
    """Create a new design system project from a :class:`ProjectRequest`."""

    environment: Environment
    settings: Settings
    renderer: TemplateRenderer
    http_client: httpx.Client | None
    status: StatusFactory

    def __init__(
        self,
        environment: Environment | None = None,
        settings: Settings | None = None,
        *,
        renderer: TemplateRenderer | None = None,
        http_client: httpx.Client | None = None,
        status: StatusFactory | None = None,
    ) -> None:
        self.environment = environment or SubprocessEnvironment()
        self.settings = settings or Settings()
        self.renderer = renderer or TemplateRenderer()
        self.http_client = http_client
        self.status = status or _no_status

    def create(self, request: ProjectRequest) -> CreationReport:
        """Run the whole workflow and return what was done.

        Validation, probing, root and template failures raise a
        :class:`~createproject.errors.CreateProjectError` (or a
        :class:`tarfile.TarError` for corrupt archives). Dependency installation
        and repository initialisation never raise.
        """

        ensure_valid_package_name(request.package_name)

        manager = choose_package_manager(self.environment)
        root = request.root
        validate_project_root(root, manager, self.environment)

        if request.bare:
            self._create_bare(request, root)
        else:
            try:
                self._create_from_archive(request, root)
            except (TemplateDownloadError, tarfile.TarError):
                LOGGER.warning("Unable to download template project. Are you connected to the internet?")
                LOGGER.warning(BARE_HINT)
                raise

        with self.status("Installing dependencies. This might take a couple of minutes."):
            installed = install_dependencies(self.environment, manager, root)

        initialized = False
        try:
            initialize_git_repository(self.environment, root)
        except VcsError as exc:
            LOGGER.debug("Skipped git initialisation: %s", exc)
        else:
            initialized = True
            LOGGER.info("Initialized a Git repository at %s", root)

        return CreationReport(
            root=root,
            package_manager=manager,
            bare=request.bare,
            dependencies_installed=installed,
            repository_initialized=initialized,
        )

    def _create_bare(self, request: ProjectRequest, root: Path) -> None:
        tokens = request.bare_tokens(self.settings)
        self.renderer.render_directory(BARE_TEMPLATE_DIR, root, tokens, strict=True, rename=BARE_RENAMES)

    def _create_from_archive(self, request: ProjectRequest, root: Path) -> None:
        with tempfile.TemporaryDirectory(prefix="createproject-") as scratch:
            extracted = download_and_extract(
                self.settings.archive_url,
                Path(scratch) / "examples",
                client=self.http_client,
                timeout=self.settings.download_timeout,
            )
            template_root = _single_child_directory(extracted)
            self.renderer.render_directory(template_root, root, request.remote_tokens())
