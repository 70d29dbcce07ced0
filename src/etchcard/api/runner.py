"""
どこで: `src/etchcard/api/runner.py`。公開 API のランナー実装。
何を: pyglet ウィンドウでカードのアニメーションをリアルタイムにプレビューするランナーを提供する。
なぜ: `etchcard preview` / `etchcard.run()` から同じ経路でプレビューできるようにするため。
"""

from __future__ import annotations

from pathlib import Path

import pyglet

from etchcard.core.assets import AssetBundle
from etchcard.core.runtime_config import set_config_path
from etchcard.core.sketch_config import SketchConfig, load_sketch_config
from etchcard.interactive.runtime.preview_window_system import PreviewWindowSystem
from etchcard.interactive.runtime.window_loop import WindowLoop


def run(
    config: SketchConfig | None = None,
    *,
    sketch_path: str | Path | None = None,
    config_path: str | Path | None = None,
    fps: float = 60.0,
    start_frame: int = 0,
) -> None:
    """pyglet ウィンドウを生成しカードをリアルタイム描画する。

    Parameters
    ----------
    config : SketchConfig | None
        カード構成。None の場合は sketch_path（未指定なら同梱既定）から読み込む。
    sketch_path : str | Path | None
        sketch YAML のパス。config が与えられた場合は無視する。
    config_path : str | Path | None
        実行時設定（config.yaml）の明示パス。
    fps : float
        目標フレームレート。1 tick ごとにフレームカウンタが 1 進む。
    start_frame : int
        最初に表示するフレーム番号。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)

    _config = config if config is not None else load_sketch_config(sketch_path)

    # pyglet の Window 作成前にオプションを設定する。
    pyglet.options["vsync"] = True

    # アセットは最初のフレームより前に読み込み終える（準備完了ゲート）。
    assets = AssetBundle.load(_config)

    preview = PreviewWindowSystem(_config, assets=assets)
    for _ in range(int(start_frame)):
        preview.advance()

    loop = WindowLoop(preview.window, preview.draw_frame, fps=float(fps), on_frame_end=preview.advance)
    try:
        loop.run()
    finally:
        preview.close()
