"""Compiler target handler interface.

Only the signature lives here; real target compilation is provided elsewhere.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from .errors import UnknownTargetError

__all__ = ["TARGET_HANDLERS", "TargetHandler", "android_handler", "get_target_handler"]

LOGGER = logging.getLogger(__name__)

TargetHandler = Callable[[Path, Path, Sequence[str], Mapping[str, Any]], None]


def android_handler(
    project_root: Path,
    destination: Path,
    component_names: Sequence[str],
    component_map: Mapping[str, Any],
) -> None:
    """Placeholder Android target: records its arguments and does nothing else."""

    LOGGER.info(
        "android target: root=%s destination=%s components=%s map=%s",
        project_root,
        destination,
        list(component_names),
        dict(component_map),
    )


TARGET_HANDLERS: Mapping[str, TargetHandler] = {
    "android": android_handler,
}


def get_target_handler(name: str) -> TargetHandler:
    try:
        return TARGET_HANDLERS[name]
    except KeyError as exc:
        known = ", ".join(sorted(TARGET_HANDLERS))
        raise UnknownTargetError(f"unknown target '{name}'", hint=f"Known targets: {known}.") from exc
