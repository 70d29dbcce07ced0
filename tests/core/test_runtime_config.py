"""実行時設定（`etchcard.core.runtime_config`）のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from etchcard.core.runtime_config import output_root_dir, runtime_config, set_config_path


def test_output_root_dir_uses_packaged_defaults() -> None:
    assert output_root_dir() == Path("data") / "output"
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.output_dir == Path("data") / "output"
    assert cfg.font_dirs == (Path("data") / "input" / "font",)
    assert cfg.asset_dir is None
    assert cfg.window_pos == (25, 25)
    assert cfg.png_scale == 2.0
    assert cfg.frame_count == 200


def test_discovered_config_overrides_packaged_defaults(tmp_path: Path) -> None:
    discovered = tmp_path / ".etchcard" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text(
        'paths:\n  output_dir: "./out_discovered"\n  font_dirs:\n    - "./fonts_discovered"\n'
        '  asset_dir: "./assets"\n',
        encoding="utf-8",
    )

    assert output_root_dir() == Path("out_discovered")
    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.font_dirs == (Path("fonts_discovered"),)
    assert cfg.asset_dir == Path("assets")
    # 上書きしていない最上位キーは同梱既定のまま。
    assert cfg.png_scale == 2.0


def test_home_config_is_discovered(tmp_path: Path) -> None:
    home_cfg = tmp_path / ".config" / "etchcard" / "config.yaml"
    home_cfg.parent.mkdir(parents=True, exist_ok=True)
    home_cfg.write_text("export:\n  png:\n    scale: 3\n  frames:\n    count: 10\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == home_cfg
    assert cfg.png_scale == 3.0
    assert cfg.frame_count == 10


def test_explicit_config_wins_over_discovered(tmp_path: Path) -> None:
    discovered = tmp_path / ".etchcard" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text('paths:\n  output_dir: "./out_discovered"\n', encoding="utf-8")

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text('paths:\n  output_dir: "./out_explicit"\n', encoding="utf-8")
    set_config_path(explicit)

    assert output_root_dir() == Path("out_explicit")
    assert runtime_config().config_path == explicit


def test_runtime_config_is_cached_until_reset(tmp_path: Path) -> None:
    first = runtime_config()
    assert runtime_config() is first
    set_config_path(None)
    assert runtime_config() is not first


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


def test_invalid_values_are_rejected(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("export:\n  png:\n    scale: 0\n  frames:\n    count: 10\n", encoding="utf-8")
    set_config_path(bad)
    with pytest.raises(ValueError):
        runtime_config()

    bad.write_text("version: 2\n", encoding="utf-8")
    set_config_path(bad)
    with pytest.raises(RuntimeError):
        runtime_config()

    bad.write_text("- just\n- a list\n", encoding="utf-8")
    set_config_path(bad)
    with pytest.raises(RuntimeError):
        runtime_config()
