"""フォント解決（`etchcard.core.font_resolver`）のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from etchcard.core.font_resolver import resolve_font_path
from etchcard.core.runtime_config import set_config_path


def _use_font_dir(tmp_path: Path, font_dir: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f'paths:\n  output_dir: "out"\n  font_dirs:\n    - "{font_dir}"\n', encoding="utf-8")
    set_config_path(cfg)


def test_direct_path_is_returned(tmp_path: Path) -> None:
    font = tmp_path / "MyFont.ttf"
    font.write_bytes(b"")
    assert resolve_font_path(str(font)) == font.resolve()


def test_filename_in_font_dir_is_found(tmp_path: Path) -> None:
    font_dir = tmp_path / "fonts"
    font_dir.mkdir()
    font = font_dir / "Arial-Bold.ttf"
    font.write_bytes(b"")
    _use_font_dir(tmp_path, font_dir)

    assert resolve_font_path("Arial-Bold.ttf") == font.resolve()


def test_partial_name_ignores_spaces_hyphens_and_case(tmp_path: Path) -> None:
    font_dir = tmp_path / "fonts"
    (font_dir / "nested").mkdir(parents=True)
    font = font_dir / "nested" / "Arial-Bold.otf"
    font.write_bytes(b"")
    _use_font_dir(tmp_path, font_dir)

    assert resolve_font_path("arial bold") == font.resolve()


def test_unknown_font_raises(tmp_path: Path) -> None:
    font_dir = tmp_path / "fonts"
    font_dir.mkdir()
    _use_font_dir(tmp_path, font_dir)

    with pytest.raises(FileNotFoundError):
        resolve_font_path("Definitely Not A Font 12345")
    with pytest.raises(FileNotFoundError):
        resolve_font_path("  ")
