# どこで: `src/etchcard/render/frame_renderer.py`。
# 何を: SketchConfig とフレーム番号から 1 枚の RGBA 画像を作る（モーションブラー込み）。
# なぜ: プレビュー/PNG/連番書き出しの 3 経路が同じ関数を通るようにし、出力差をなくすため。

from __future__ import annotations

import numpy as np
from PIL import Image

from etchcard.core.assets import AssetBundle
from etchcard.core.scene import CardResult, draw_card
from etchcard.core.sketch_config import SketchConfig
from etchcard.core.timing import subframe_progresses
from etchcard.render.raster import RasterSurface


def render_card(
    config: SketchConfig,
    *,
    t: float,
    assets: AssetBundle | None = None,
    scale: float = 1.0,
) -> tuple[Image.Image, CardResult]:
    """進行度 t のカードを 1 回だけ描いて (画像, 描画結果) を返す。"""

    surface = RasterSurface(
        config.canvas_size,
        scale=scale,
        font_paths=assets.font_paths if assets is not None else None,
    )
    result = draw_card(surface, config, t=t, assets=assets)
    return surface.image, result


def render_frame(
    config: SketchConfig,
    frame_index: int,
    *,
    assets: AssetBundle | None = None,
    scale: float = 1.0,
) -> Image.Image:
    """フレーム番号 frame_index の画像を返す。

    Notes
    -----
    `motion_blur_samples >= 2` のとき、フレーム区間を等分した進行度で描いた画像を平均する。
    各サブフレームは同じシードで描くため、線は一致しビーズだけが流れる。
    """

    ts = subframe_progresses(frame_index, config.total_steps, config.motion_blur_samples)
    if len(ts) == 1:
        image, _ = render_card(config, t=ts[0], assets=assets, scale=scale)
        return image

    acc: np.ndarray | None = None
    for t in ts:
        image, _ = render_card(config, t=t, assets=assets, scale=scale)
        arr = np.asarray(image, dtype=np.float64)
        acc = arr if acc is None else acc + arr
    assert acc is not None
    mean = np.clip(np.rint(acc / float(len(ts))), 0, 255).astype(np.uint8)
    return Image.fromarray(mean)


__all__ = ["render_card", "render_frame"]
