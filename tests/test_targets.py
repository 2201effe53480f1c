from __future__ import annotations

import logging
from pathlib import Path

import pytest

from createproject.errors import UnknownTargetError
from createproject.targets import android_handler, get_target_handler


def test_android_handler_is_registered():
    assert get_target_handler("android") is android_handler


def test_android_handler_only_logs(tmp_path: Path, caplog):
    with caplog.at_level(logging.INFO, logger="createproject.targets"):
        result = android_handler(tmp_path, tmp_path / "build", ["Palette"], {"Palette": {"primary": "#fff"}})
    assert result is None
    assert "components=['Palette']" in caplog.text
    assert not (tmp_path / "build").exists()


def test_unknown_target():
    with pytest.raises(UnknownTargetError) as excinfo:
        get_target_handler("ios")
    assert "android" in excinfo.value.hint
