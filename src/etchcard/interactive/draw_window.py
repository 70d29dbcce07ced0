# どこで: `src/etchcard/interactive/draw_window.py`。
# 何を: プレビュー用の pyglet ウィンドウ生成を行う。
# なぜ: pyglet 依存をこの層に閉じ込め、core/export/render をヘッドレスに保つため。

from __future__ import annotations

import pyglet
from pyglet.window import Window


def create_preview_window(
    canvas_size: tuple[int, int],
    *,
    position: tuple[int, int] | None = None,
    caption: str = "etchcard",
) -> Window:
    """キャンバス寸法ちょうどのプレビューウィンドウを生成する。"""
    canvas_w, canvas_h = canvas_size
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=int(canvas_w),
        height=int(canvas_h),
        resizable=False,
        caption=caption,
    )
    if position is not None:
        window.set_location(*position)
    return window
