"""Configuration shared by the project creator and the CLI."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CreateProjectError
from .naming import (
    camel_case,
    constant_case,
    dot_case,
    header_case,
    kebab_case,
    lower_case,
    no_case,
    pascal_case,
    snake_case,
    title_case,
)
from .template import TokenSet

__all__ = ["ProjectRequest", "Settings", "DEFAULT_EXAMPLES_URL"]


DEFAULT_EXAMPLES_URL = "https://examples.diez.org"
ARCHIVE_PATH = "createproject/project.tgz"
ENVIRONMENT_VARIABLES = {
    "examples_url": "CREATEPROJECT_EXAMPLES_URL",
    "diez_version": "CREATEPROJECT_DIEZ_VERSION",
    "typescript_version": "CREATEPROJECT_TYPESCRIPT_VERSION",
    "download_timeout": "CREATEPROJECT_DOWNLOAD_TIMEOUT",
}


def _describe_error(error: Mapping[str, Any]) -> str:
    field = str(error["loc"][0]) if error["loc"] else ""
    return f"{ENVIRONMENT_VARIABLES.get(field, field)}: {error['msg']}"


class Settings(BaseModel):
    """Tunable values for project creation.

    Every field can be overridden through a ``CREATEPROJECT_*`` environment
    variable, see :meth:`from_env`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    examples_url: str = Field(default=DEFAULT_EXAMPLES_URL, description="Base URL hosting template archives.")
    diez_version: str = Field(default="10.6.0", description="Version pinned into generated projects.")
    typescript_version: str = Field(default="^3.4.5", description="TypeScript range pinned into bare projects.")
    download_timeout: float = Field(default=60.0, gt=0, description="Network timeout in seconds.")

    @property
    def archive_url(self) -> str:
        """Version pinned location of the remote template archive."""

        return f"{self.examples_url.rstrip('/')}/{self.diez_version}/{ARCHIVE_PATH}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build :class:`Settings` from environment variables.

        Recognised variables (all optional): ``CREATEPROJECT_EXAMPLES_URL``,
        ``CREATEPROJECT_DIEZ_VERSION``, ``CREATEPROJECT_TYPESCRIPT_VERSION``
        and ``CREATEPROJECT_DOWNLOAD_TIMEOUT``.
        """

        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {
            field: env[variable] for field, variable in ENVIRONMENT_VARIABLES.items() if env.get(variable)
        }
        try:
            return cls(**overrides)
        except ValidationError as exc:
            problems = "; ".join(_describe_error(error) for error in exc.errors())
            raise CreateProjectError(
                f"Invalid configuration: {problems}.",
                hint="Check the CREATEPROJECT_* environment variables.",
            ) from exc


@dataclass(frozen=True, slots=True)
class ProjectRequest:
    """A single request to create a project.

    Attributes
    ----------
    package_name:
        The npm package name chosen by the user. Scoped names such as
        ``@acme/tokens`` are allowed; the project directory uses the part after
        the scope.
    bare:
        When ``True`` the small bundled template is used instead of the
        downloadable example project.
    working_directory:
        Directory the project root is created in.
    """

    package_name: str
    bare: bool
    working_directory: Path

    @classmethod
    def create(
        cls,
        package_name: str,
        *,
        bare: bool = False,
        working_directory: str | Path | None = None,
    ) -> "ProjectRequest":
        directory = Path.cwd() if working_directory is None else Path(working_directory)
        return cls(
            package_name=package_name,
            bare=bare,
            working_directory=directory.expanduser().resolve(),
        )

    @property
    def directory_name(self) -> str:
        return posixpath.basename(self.package_name)

    @property
    def root(self) -> Path:
        """Directory the new project is materialised in."""

        return self.working_directory / self.directory_name

    def bare_tokens(self, settings: Settings) -> TokenSet:
        """Tokens understood by the bundled bare template."""

        return TokenSet(
            {
                "packageName": self.package_name,
                "diezVersion": settings.diez_version,
                "typescriptVersion": settings.typescript_version,
                "componentName": pascal_case(self.directory_name),
            }
        )

    def remote_tokens(self) -> TokenSet:
        """Case converted variants of the package name used by example projects."""

        name = self.package_name
        pascal = pascal_case(name)
        return TokenSet(
            {
                "namePascalCase": pascal,
                "nameLowerCase": lower_case(pascal),
                "nameKebabCase": kebab_case(name),
                "nameCamelCase": camel_case(name),
                "nameTitleCase": title_case(name),
                "nameNoCase": no_case(name),
                "nameSnakeCase": snake_case(name),
                "nameConstantCase": constant_case(name),
                "nameHeaderCase": header_case(name),
                "nameDotCase": dot_case(name),
            }
        )
