from __future__ import annotations

import io
import sys
import tarfile
from pathlib import Path
from typing import Callable, Mapping

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tests.fixtures.fake_environment import FakeEnvironment  # noqa: E402


@pytest.fixture()
def yarn_environment() -> FakeEnvironment:
    """Environment where yarn, git and every install succeed."""

    return FakeEnvironment(available={("yarnpkg",), ("git", "--version")})


@pytest.fixture()
def make_archive() -> Callable[[Mapping[str, str]], bytes]:
    """Build an in-memory ``.tgz`` from ``{relative path: text}``."""

    def _build(files: Mapping[str, str]) -> bytes:
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
            for name, text in files.items():
                data = text.encode("utf-8")
                info = tarfile.TarInfo(name)
                info.size = len(data)
                info.mode = 0o644
                archive.addfile(info, io.BytesIO(data))
        return buffer.getvalue()

    return _build
