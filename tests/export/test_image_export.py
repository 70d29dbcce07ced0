"""画像保存（`etchcard.export.image`）のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from etchcard.core.runtime_config import runtime_config
from etchcard.core.sketch_config import sketch_config_from_mapping
from etchcard.export import image


def _config():
    return sketch_config_from_mapping(
        {
            "seed": "png",
            "canvas": {"size": [40, 30]},
            "variant": {"sample_step": 0.1},
            "rows": [{"x0": 2, "stop_x": 38, "y0": 2, "length": 20, "width": 1, "beads": True}],
            "background": {"stops": [[0.0, "black"]]},
        }
    )


def test_default_png_output_path_uses_data_dir_and_seed() -> None:
    path = image.default_png_output_path(_config())
    assert path == Path("data") / "output" / "png" / "png.png"


def test_export_image_png_uses_png_scale(tmp_path: Path) -> None:
    out = tmp_path / "out" / "card.png"
    path = image.export_image(_config(), out)
    assert path == out
    with Image.open(out) as img:
        scale = float(runtime_config().png_scale)
        assert img.size == (round(40 * scale), round(30 * scale))
        assert img.mode == "RGBA"


def test_export_image_svg_dispatches_on_suffix(tmp_path: Path) -> None:
    out = tmp_path / "card.svg"
    image.export_image(_config(), out)
    assert out.read_text(encoding="utf-8").startswith("<?xml")


def test_export_image_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        image.export_image(_config(), tmp_path / "card.gif")
