"""Access to external commands.

Everything the creator learns about the host (which tools exist, where they
run, whether they succeed) goes through an :class:`Environment`, so tests can
swap in a scripted implementation.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from .errors import CommandError

__all__ = ["Environment", "SubprocessEnvironment"]

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class Environment(Protocol):
    """Capability used to probe and drive external tools."""

    def can_run(self, args: Sequence[str], *, cwd: Path | None = None) -> bool:
        """Return ``True`` when ``args`` starts and exits with status zero."""

    def capture(self, args: Sequence[str], *, cwd: Path | None = None) -> str | None:
        """Return the combined output of ``args`` or ``None`` if it cannot be spawned."""

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> None:
        """Run ``args`` to completion, raising :class:`CommandError` on failure."""


class SubprocessEnvironment:
    """:class:`Environment` backed by :mod:`subprocess`."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def can_run(self, args: Sequence[str], *, cwd: Path | None = None) -> bool:
        try:
            completed = subprocess.run(
                list(args),
                cwd=cwd,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            LOGGER.debug("Unable to run %s: %s", " ".join(args), exc)
            return False
        return completed.returncode == 0

    def capture(self, args: Sequence[str], *, cwd: Path | None = None) -> str | None:
        try:
            completed = subprocess.run(
                list(args),
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            LOGGER.debug("Unable to run %s: %s", " ".join(args), exc)
            return None
        return (completed.stdout or "") + (completed.stderr or "")

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> None:
        LOGGER.debug("Running %s in %s", " ".join(args), cwd or Path.cwd())
        try:
            completed = subprocess.run(
                list(args),
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CommandError(args, 127, str(exc)) from exc
        except PermissionError as exc:
            raise CommandError(args, 126, str(exc)) from exc
        except OSError as exc:
            raise CommandError(args, -1, str(exc)) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandError(args, -1, f"timed out after {exc.timeout}s") from exc
        if completed.returncode != 0:
            raise CommandError(args, completed.returncode, completed.stderr or completed.stdout or "")
