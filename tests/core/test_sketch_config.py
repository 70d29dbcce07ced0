"""カード構成（`etchcard.core.sketch_config`）のロードと検証のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from etchcard.core.bead import BeadPolicy, ExclusionRect
from etchcard.core.errors import ConfigError
from etchcard.core.row_packer import DEFAULT_PALETTE, BeadColorMode
from etchcard.core.sketch_config import load_sketch_config, sketch_config_from_mapping


def _minimal_payload() -> dict:
    return {
        "seed": "mini",
        "canvas": {"size": [100, 80]},
        "rows": [
            {"x0": 5, "stop_x": 95, "y0": 10, "length": 50, "width": 2, "line_color": "black"}
        ],
        "background": {"stops": [[0.0, "white"]]},
    }


def test_packaged_default_reproduces_the_card() -> None:
    cfg = load_sketch_config()

    assert cfg.seed == "Penn Engineering"
    assert cfg.canvas_size == (1200, 1050)
    assert cfg.total_steps == 200
    assert cfg.kink_count == 2
    assert cfg.bead_policy is BeadPolicy.DRIP
    assert cfg.motion_blur_samples == 0
    assert cfg.sample_step == pytest.approx(0.005)

    assert [r.name for r in cfg.rows] == ["top", "middle", "bottom"]
    assert [r.beads for r in cfg.rows] == [False, True, False]
    assert cfg.rows[1].line_color == (112, 128, 144, 255)
    assert all(r.x0 == 55.0 and r.stop_x == 1150.0 for r in cfg.rows)

    assert cfg.bead_radii == (6.0, 9.0)
    assert cfg.bead_glow is not None
    assert cfg.bead_glow.radius == 30.0
    assert cfg.bead_glow.color == (255, 255, 255, 255)
    assert cfg.bead_palette == DEFAULT_PALETTE
    assert cfg.exclusion_zones == (ExclusionRect(400.0, 475.0, 765.0, 615.0),)

    assert len(cfg.background) == 5
    assert cfg.background[0].color == (192, 192, 192, 255)
    assert [t.text for t in cfg.texts][2] == "2024"
    assert cfg.texts[2].color == (255, 255, 255, 160)
    assert cfg.logo is not None and cfg.logo.position == (100.0, 910.0)
    assert not cfg.guides.enabled


def test_user_file_overrides_top_level_keys(tmp_path: Path) -> None:
    p = tmp_path / "card.yaml"
    p.write_text(
        'seed: "abc"\nvariant:\n  kink_count: 1\n  bead_policy: exclusion_zone\n',
        encoding="utf-8",
    )
    cfg = load_sketch_config(p)
    assert cfg.seed == "abc"
    assert cfg.kink_count == 1
    assert cfg.bead_policy is BeadPolicy.EXCLUSION_ZONE
    # 上書きしていないキーは同梱既定のまま。
    assert len(cfg.rows) == 3


def test_missing_sketch_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_sketch_config(tmp_path / "nope.yaml")


def test_minimal_mapping_uses_defaults() -> None:
    cfg = sketch_config_from_mapping(_minimal_payload())
    assert cfg.bead_palette == DEFAULT_PALETTE
    assert cfg.bead_color_mode is BeadColorMode.PALETTE
    assert cfg.bead_glow is None
    assert cfg.total_steps == 200
    assert cfg.texts == ()
    assert cfg.logo is None


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p["rows"][0].update(width=0),
        lambda p: p["rows"][0].update(line_color="nope"),
        lambda p: p.update(variant={"kink_count": 3}),
        lambda p: p.update(variant={"bead_policy": "sideways"}),
        lambda p: p.update(variant={"sample_step": 0}),
        lambda p: p.update(timing={"total_steps": 0}),
        lambda p: p.update(canvas={"size": [0, 10]}),
        lambda p: p.update(rows=[]),
        lambda p: p.update(background={"stops": [[0.5, "white"], [0.2, "black"]]}),
        lambda p: p.update(bead={"palette": []}),
        lambda p: p.update(bead={"exclusion_zones": [[10, 10, 0, 0]]}),
        lambda p: p.update(texts=[{"text": 3, "position": [0, 0]}]),
        lambda p: p.update(seed=""),
    ],
)
def test_invalid_values_raise_config_error(mutate) -> None:
    payload = _minimal_payload()
    mutate(payload)
    with pytest.raises(ConfigError):
        sketch_config_from_mapping(payload)


def test_replace_returns_validated_snapshot() -> None:
    cfg = sketch_config_from_mapping(_minimal_payload())
    other = cfg.replace(kink_count=1)
    assert other.kink_count == 1
    assert cfg.kink_count == 2
    with pytest.raises(ConfigError):
        cfg.replace(total_steps=0)


def test_pack_options_carry_variant_settings() -> None:
    payload = _minimal_payload()
    payload["variant"] = {"kink_count": 1, "bead_policy": "exclusion_zone", "sample_step": 0.01}
    payload["bead"] = {"exclusion_zones": [[0, 0, 10, 10]], "color_mode": "binary"}
    options = sketch_config_from_mapping(payload).pack_options()
    assert options.kink_count == 1
    assert options.sample_step == pytest.approx(0.01)
    assert options.bead_color_mode is BeadColorMode.BINARY
    assert options.bead is not None
    assert options.bead.policy is BeadPolicy.EXCLUSION_ZONE
    assert options.bead.exclusion.contains(5.0, 5.0)
