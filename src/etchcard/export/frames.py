# どこで: `src/etchcard/export/frames.py`。
# 何を: カードのアニメーション 1 周期ぶんを連番 PNG（frame000.png, ...）として書き出す。
# なぜ: 周期ループのアニメーションを、後段の動画化ツールへそのまま渡せる形で残すため。

from __future__ import annotations

import logging
from pathlib import Path

from etchcard.core.assets import AssetBundle
from etchcard.core.output_paths import frames_dir_for_seed
from etchcard.core.runtime_config import runtime_config
from etchcard.core.sketch_config import SketchConfig
from etchcard.export.image import save_png
from etchcard.render.frame_renderer import render_frame

_logger = logging.getLogger(__name__)


def default_frame_filename(frame_index: int, *, ext: str = "png") -> str:
    """`frame000.png` 形式のファイル名を返す（3 桁未満はゼロ埋め）。"""

    index = int(frame_index)
    if index < 0:
        raise ValueError(f"frame_index は 0 以上である必要がある: got={frame_index!r}")
    suffix = str(ext).lstrip(".") or "png"
    return f"frame{index:03d}.{suffix}"


def export_frames(
    config: SketchConfig,
    out_dir: str | Path | None = None,
    *,
    count: int | None = None,
    start: int = 0,
    assets: AssetBundle | None = None,
    scale: float = 1.0,
) -> list[Path]:
    """フレーム start..start+count-1 を PNG で保存し、保存先パス列を返す。

    Parameters
    ----------
    config : SketchConfig
        カード構成。
    out_dir : str or Path or None
        出力ディレクトリ。None なら `{output_root}/frames/{seed}/`。
    count : int or None
        書き出す枚数。None なら `export.frames.count`。
    start : int
        最初のフレーム番号。
    assets : AssetBundle or None
        読み込み済みのロゴ等。
    scale : float
        ピクセル倍率。
    """

    n = int(runtime_config().frame_count if count is None else count)
    if n <= 0:
        raise ValueError(f"count は正の整数である必要がある: got={count!r}")

    directory = frames_dir_for_seed(config.seed) if out_dir is None else Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)

    paths: list[Path] = []
    for frame_index in range(int(start), int(start) + n):
        image = render_frame(config, frame_index, assets=assets, scale=scale)
        path = save_png(image, directory / default_frame_filename(frame_index))
        _logger.debug("Saved frame %d: %s", frame_index, path)
        paths.append(path)
    return paths


__all__ = ["default_frame_filename", "export_frames"]
