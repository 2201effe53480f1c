from __future__ import annotations

from pathlib import Path
import tomllib

import createproject

REPO_ROOT = Path(__file__).resolve().parents[2]
README_PATH = REPO_ROOT / "README.md"
PYPROJECT_PATH = REPO_ROOT / "pyproject.toml"
TEMPLATE_DIR = REPO_ROOT / "src" / "createproject" / "templates" / "project"


def load_pyproject() -> dict:
    with PYPROJECT_PATH.open("rb") as handle:
        return tomllib.load(handle)


def test_readme_and_pyproject_descriptions_are_in_sync() -> None:
    pyproject = load_pyproject()
    description = pyproject["project"]["description"]
    readme_text = README_PATH.read_text(encoding="utf-8")

    assert description in readme_text, "README must include the project description from pyproject.toml"


def test_package_version_matches_pyproject() -> None:
    assert load_pyproject()["project"]["version"] == createproject.__version__


def test_readme_documents_every_setting() -> None:
    readme_text = README_PATH.read_text(encoding="utf-8")
    for variable in (
        "CREATEPROJECT_EXAMPLES_URL",
        "CREATEPROJECT_DIEZ_VERSION",
        "CREATEPROJECT_TYPESCRIPT_VERSION",
        "CREATEPROJECT_DOWNLOAD_TIMEOUT",
    ):
        assert variable in readme_text


def test_bare_template_ships_a_project_descriptor() -> None:
    assert (TEMPLATE_DIR / "package.json").is_file()
    assert (TEMPLATE_DIR / "gitignore").is_file()


def test_python_floor_supports_tar_extraction_filters() -> None:
    # TarFile.extractall(filter=...) is available from 3.11.4 onwards.
    assert load_pyproject()["project"]["requires-python"] == ">=3.11.4"
