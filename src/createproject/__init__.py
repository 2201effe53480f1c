"""Create new Diez design system projects.

The package validates npm package names, picks a package manager, materialises
either the bundled bare template or the downloadable example project with the
project name substituted in every casing, then installs dependencies and
initialises a git repository. It can be used programmatically through
:class:`ProjectCreator` or via the ``createproject`` command.
"""

from __future__ import annotations

from .config import ProjectRequest, Settings
from .errors import CreateProjectError
from .naming import CASE_CONVERTERS, split_words
from .package_manager import PackageManager
from .scaffold import CreationReport, ProjectCreator
from .template import TemplateRenderer, TemplateRenderingError, TokenSet
from .validation import validate_package_name

__all__ = [
    "CASE_CONVERTERS",
    "CreateProjectError",
    "CreationReport",
    "PackageManager",
    "ProjectCreator",
    "ProjectRequest",
    "Settings",
    "TemplateRenderer",
    "TemplateRenderingError",
    "TokenSet",
    "split_words",
    "validate_package_name",
]

__version__ = "0.1.0"
