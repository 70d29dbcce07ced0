# どこで: `src/etchcard/interactive/runtime/frame_clock.py`。
# 何を: プレビューの各 tick に渡すフレーム番号の生成規則を提供する。
# なぜ: 進行度を実時間ではなくフレームカウンタで定義し、書き出しと同じ絵を再現するため。

from __future__ import annotations

from etchcard.core.timing import progress


class FrameCounterClock:
    """フレームカウンタ方式の時計。

    Notes
    -----
    `progress` は `(frame_index mod total_steps) / total_steps`。
    一時停止中は tick してもフレーム番号を進めない。
    """

    def __init__(self, *, total_steps: int, start_frame: int = 0) -> None:
        steps = int(total_steps)
        if steps <= 0:
            raise ValueError("total_steps は正の整数である必要がある")
        self._total_steps = steps
        self._frame_index = int(start_frame)
        self._paused = False

    @property
    def frame_index(self) -> int:
        """現在のフレーム番号（0-based）を返す。"""

        return int(self._frame_index)

    @property
    def total_steps(self) -> int:
        return int(self._total_steps)

    @property
    def paused(self) -> bool:
        return bool(self._paused)

    def progress(self) -> float:
        """現在の進行度（0..1）を返す。"""

        return progress(self._frame_index, self._total_steps)

    def tick(self) -> None:
        """フレームを 1 つ進める。"""

        if not self._paused:
            self._frame_index += 1

    def toggle_pause(self) -> bool:
        """一時停止を切り替え、切り替え後の状態を返す。"""

        self._paused = not self._paused
        return self._paused
