"""
どこで: `src/etchcard/export/image.py`。
何を: カード 1 フレームを画像（PNG / SVG）として保存する関数を提供する。
なぜ: 拡張子だけで出力形式を切り替え、PNG は `export.png.scale` 倍の高解像度で得られるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from etchcard.core.assets import AssetBundle
from etchcard.core.output_paths import output_path_for_seed
from etchcard.core.runtime_config import runtime_config
from etchcard.core.sketch_config import SketchConfig
from etchcard.export.svg import export_svg
from etchcard.render.frame_renderer import render_frame


def export_image(
    config: SketchConfig,
    path: str | Path,
    *,
    frame_index: int = 0,
    assets: AssetBundle | None = None,
    scale: float | None = None,
) -> Path:
    """カードの frame_index 番目のフレームを画像として保存する。

    Notes
    -----
    `.svg` は SvgSurface、`.png` は Pillow のラスタ描画で保存する。
    scale 未指定の PNG は `runtime_config().png_scale` 倍で描く。
    """
    _path = Path(path)
    suffix = _path.suffix.lower()

    if suffix == ".svg":
        return export_svg(config, _path, frame_index=frame_index, assets=assets)

    if suffix == ".png":
        _scale = float(runtime_config().png_scale) if scale is None else float(scale)
        image = render_frame(config, frame_index, assets=assets, scale=_scale)
        return save_png(image, _path)

    raise ValueError(f"未対応の画像フォーマット: {suffix!r}")


def save_png(image: Image.Image, path: str | Path) -> Path:
    """画像を PNG として保存し、保存先パスを返す。"""

    _path = Path(path)
    _path.parent.mkdir(parents=True, exist_ok=True)
    image.save(_path, format="PNG")
    return _path


def default_png_output_path(config: SketchConfig) -> Path:
    """カードの PNG の既定保存パス `{output_root}/png/{seed}.png` を返す。"""

    return output_path_for_seed(kind="png", ext="png", seed=config.seed)


__all__ = ["default_png_output_path", "export_image", "save_png"]
