from __future__ import annotations

from pathlib import Path

import pytest

from etchcard.core.font_resolver import clear_font_cache
from etchcard.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolate_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # config.yaml 探索と出力先を tmp_path に閉じ込める。
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    clear_font_cache()
    yield
    set_config_path(None)
    clear_font_cache()
