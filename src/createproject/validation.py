"""npm package name validation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from urllib.parse import quote

from .errors import InvalidPackageNameError

__all__ = [
    "BLACKLISTED_NAMES",
    "NODE_BUILTIN_MODULES",
    "NameValidation",
    "ensure_valid_package_name",
    "validate_package_name",
]

LOGGER = logging.getLogger(__name__)

MAX_NAME_LENGTH = 214

BLACKLISTED_NAMES = frozenset({"node_modules", "favicon.ico"})

NODE_BUILTIN_MODULES = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "worker_threads",
        "zlib",
    }
)

_SCOPED_NAME = re.compile(r"^(?:@([^/]+?)/)?([^/]+?)$")
_SPECIAL_CHARACTERS = re.compile(r"[~'!()*]")
# Characters left untouched by JavaScript's encodeURIComponent.
_URL_SAFE = "-_.!~*'()"


def _is_url_safe(value: str) -> bool:
    return quote(value, safe=_URL_SAFE) == value


@dataclass(frozen=True, slots=True)
class NameValidation:
    """Outcome of validating a package name."""

    name: str
    errors: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def valid_for_old_packages(self) -> bool:
        return not self.errors

    @property
    def valid_for_new_packages(self) -> bool:
        return not self.errors and not self.warnings

    @property
    def problems(self) -> tuple[str, ...]:
        return self.errors + self.warnings


def validate_package_name(name: str) -> NameValidation:
    """Check ``name`` against the npm registry naming rules.

    Errors make a name unusable for any package. Warnings describe rules that
    only apply to newly published packages, such as the ban on capital
    letters.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not name:
        errors.append("name length must be greater than zero")

    if name.startswith("."):
        errors.append("name cannot start with a period")

    if name.startswith("_"):
        errors.append("name cannot start with an underscore")

    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")

    if name.lower() in BLACKLISTED_NAMES:
        errors.append(f"{name} is a blacklisted name")

    if name in NODE_BUILTIN_MODULES:
        warnings.append(f"{name} is a core module name")

    if len(name) > MAX_NAME_LENGTH:
        warnings.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")

    if name.lower() != name:
        warnings.append("name can no longer contain capital letters")

    if _SPECIAL_CHARACTERS.search(name.split("/")[-1]):
        warnings.append("name can no longer contain special characters (\"~'!()*\")")

    if name and not _is_url_safe(name):
        match = _SCOPED_NAME.match(name)
        scoped_ok = (
            match is not None
            and match.group(1) is not None
            and _is_url_safe(match.group(1))
            and _is_url_safe(match.group(2))
        )
        if not scoped_ok:
            errors.append("name can only contain URL-friendly characters")

    return NameValidation(name=name, errors=tuple(errors), warnings=tuple(warnings))


def ensure_valid_package_name(name: str) -> NameValidation:
    """Validate ``name`` for a new package or raise :class:`InvalidPackageNameError`."""

    result = validate_package_name(name)
    if result.valid_for_new_packages:
        return result

    if result.problems:
        LOGGER.warning("Project name validation failed:")
        for problem in result.problems:
            LOGGER.warning(" - %s", problem)

    raise InvalidPackageNameError(name, result.problems)
