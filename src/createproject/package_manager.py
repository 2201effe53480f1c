"""Package manager detection and dependency installation."""

from __future__ import annotations

import logging
import os
import re
from enum import Enum
from pathlib import Path

from .environment import Environment
from .errors import CommandError

__all__ = [
    "PackageManager",
    "can_use_npm",
    "choose_package_manager",
    "install_dependencies",
]

LOGGER = logging.getLogger(__name__)

# `npm config list` prints "; cwd = /path/to/dir" (unquoted).
_NPM_CWD_LINE = re.compile(r"^; cwd = (.*)$", re.MULTILINE)


class PackageManager(str, Enum):
    """Supported dependency managers, in order of preference."""

    YARN = "yarn"
    NPM = "npm"

    @property
    def install_command(self) -> tuple[str, ...]:
        return (self.value, "install")

    @property
    def script_runner(self) -> str:
        """Prefix used to invoke a package script, e.g. ``npm run``."""

        return "yarn" if self is PackageManager.YARN else "npm run"


def choose_package_manager(environment: Environment) -> PackageManager:
    """Prefer yarn when ``yarnpkg`` is invocable, otherwise fall back to npm."""

    if environment.can_run(["yarnpkg", "--version"]):
        LOGGER.debug("Using yarn for package management")
        return PackageManager.YARN
    LOGGER.debug("yarn is unavailable, falling back to npm")
    return PackageManager.NPM


def can_use_npm(environment: Environment, root: Path) -> bool:
    """Return ``False`` only when npm reports a working directory other than ``root``.

    The check fails open: if npm cannot be spawned or its configuration dump
    no longer includes the ``cwd`` line there is nothing to compare against.
    """

    output = environment.capture(["npm", "config", "list"], cwd=root)
    if output is None:
        return True

    match = _NPM_CWD_LINE.search(output)
    if match is None:
        return True

    reported = match.group(1).strip()
    return os.path.normcase(os.path.realpath(reported)) == os.path.normcase(os.path.realpath(root))


def install_dependencies(environment: Environment, manager: PackageManager, root: Path) -> bool:
    """Install dependencies in ``root``; failures are reported, never raised."""

    try:
        environment.run(manager.install_command, cwd=root)
    except CommandError as exc:
        LOGGER.debug("Dependency installation failed: %s\n%s", exc, exc.output)
        LOGGER.warning("Unable to install dependencies. Are you connected to the Internet?")
        LOGGER.warning(
            "You may need to run `%s` before `diez` commands will work.",
            " ".join(manager.install_command),
        )
        return False
    return True
