"""出力パス（`etchcard.core.output_paths`）のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from etchcard.core.output_paths import frames_dir_for_seed, output_path_for_seed, sanitize_stem


def test_sanitize_stem_replaces_unsafe_characters() -> None:
    assert sanitize_stem("Penn Engineering") == "Penn_Engineering"
    assert sanitize_stem("  a/b\\c  ") == "a_b_c"
    assert sanitize_stem("***") == ""


def test_output_path_for_seed_groups_by_kind() -> None:
    path = output_path_for_seed(kind="svg", ext=".svg", seed="Penn Engineering")
    assert path == Path("data") / "output" / "svg" / "Penn_Engineering.svg"


def test_output_path_for_seed_falls_back_to_card_stem() -> None:
    assert output_path_for_seed(kind="png", ext="png", seed="!!!").name == "card.png"
    with pytest.raises(ValueError):
        output_path_for_seed(kind="png", ext=".", seed="x")


def test_frames_dir_for_seed() -> None:
    assert frames_dir_for_seed("Penn Engineering") == Path("data") / "output" / "frames" / "Penn_Engineering"
