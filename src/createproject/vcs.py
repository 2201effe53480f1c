"""Best effort git repository initialisation for new projects."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .environment import Environment
from .errors import CommandError, VcsError

__all__ = ["INITIAL_COMMIT_MESSAGE", "initialize_git_repository"]

LOGGER = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit from Diez"


def _inside_existing_repository(environment: Environment, root: Path) -> bool:
    return environment.can_run(
        ["git", "rev-parse", "--is-inside-work-tree"], cwd=root
    ) or environment.can_run(["hg", "--cwd", ".", "root"], cwd=root)


def initialize_git_repository(environment: Environment, root: Path) -> None:
    """Create a repository in ``root`` holding the generated files as one commit.

    Raises :class:`VcsError` when git is missing, when ``root`` already lives
    in a git or Mercurial work tree, or when a git command fails. A half
    initialised ``.git`` directory is removed before raising.
    """

    if not environment.can_run(["git", "--version"]):
        raise VcsError("git is not available")

    if _inside_existing_repository(environment, root):
        raise VcsError(f"{root} is already inside a repository")

    try:
        environment.run(["git", "init"], cwd=root)
    except CommandError as exc:
        raise VcsError(f"git init failed in {root}") from exc

    try:
        environment.run(["git", "add", "-A"], cwd=root)
        environment.run(["git", "commit", "-m", INITIAL_COMMIT_MESSAGE], cwd=root)
    except CommandError as exc:
        shutil.rmtree(root / ".git", ignore_errors=True)
        raise VcsError(f"unable to create the initial commit in {root}") from exc
