"""Custom exception types raised while creating a project."""

from __future__ import annotations

from typing import Sequence

__all__ = [
    "CommandError",
    "CreateProjectError",
    "InvalidPackageNameError",
    "PackageManagerError",
    "ProjectRootError",
    "TemplateDownloadError",
    "UnknownTargetError",
    "VcsError",
]


class CreateProjectError(RuntimeError):
    """Base class for failures that abort project creation.

    ``hint`` carries an optional remediation the CLI shows below the message.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class InvalidPackageNameError(CreateProjectError):
    """Raised when a name is not usable for a new package."""

    def __init__(self, name: str, problems: Sequence[str]) -> None:
        super().__init__(f"Unable to create project with name {name}.")
        self.name = name
        self.problems = tuple(problems)


class PackageManagerError(CreateProjectError):
    """Raised when no package manager can be trusted to target the project root."""


class ProjectRootError(CreateProjectError):
    """Raised when the destination directory cannot host a new project."""


class TemplateDownloadError(CreateProjectError):
    """Raised when the remote template archive cannot be fetched."""


class CommandError(CreateProjectError):
    """Raised when an external command exits unsuccessfully."""

    def __init__(self, args: Sequence[str], returncode: int, output: str = "") -> None:
        command = " ".join(args)
        super().__init__(f"'{command}' exited with status {returncode}")
        self.args_list = tuple(args)
        self.returncode = returncode
        self.output = output


class VcsError(CreateProjectError):
    """Raised when a repository cannot be initialised."""


class UnknownTargetError(CreateProjectError):
    """Raised when no compiler target handler is registered for a name."""
