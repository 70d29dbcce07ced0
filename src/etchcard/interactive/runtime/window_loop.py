# どこで: `src/etchcard/interactive/runtime/window_loop.py`。
# 何を: プレビューウィンドウを pyglet の app loop（`pyglet.app.run()`）で一定間隔に回す最小ランナー。
# なぜ: OS 依存のイベント配送を pyglet に任せ、フレームの進行を clock の schedule に一本化するため。

from __future__ import annotations

from typing import Any, Callable

import pyglet


class WindowLoop:
    """1 つのウィンドウを「フレーム開始 → Window.draw（on_draw → flip）」の順で回す。"""

    def __init__(
        self,
        window: Any,
        draw_frame: Callable[[], None],
        *,
        fps: float,
        on_frame_end: Callable[[], None] | None = None,
    ) -> None:
        """ループを初期化する。

        Parameters
        ----------
        window : pyglet.window.Window
            描画先ウィンドウ。
        draw_frame : Callable[[], None]
            back buffer へ描くだけの描画処理。`flip()` は pyglet が行う。
        fps : float
            目標フレームレート。`<=0` の場合はスロットリングしない。
        on_frame_end : Callable[[], None] | None
            各フレームの描画後に呼ぶコールバック。フレームカウンタを進める用途。
        """

        self._window = window
        self._draw_frame = draw_frame
        self._fps = float(fps)
        self._on_frame_end = on_frame_end

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        window = self._window

        def request_exit(*_: object) -> None:
            pyglet.app.exit()

        window.push_handlers(on_close=request_exit, on_draw=self._draw_frame)

        def tick(dt: float) -> None:
            if window not in pyglet.app.windows:
                return
            window.draw(dt)
            on_frame_end = self._on_frame_end
            if on_frame_end is not None:
                on_frame_end()

        if self._fps <= 0:
            pyglet.clock.schedule(tick)
        else:
            pyglet.clock.schedule_interval(tick, 1.0 / float(self._fps))

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(tick)
