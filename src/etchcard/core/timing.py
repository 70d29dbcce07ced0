# どこで: `src/etchcard/core/timing.py`。
# 何を: フレーム番号からアニメーション進行度を求める純粋関数を提供する。
# なぜ: 時間を実時間ではなくフレームカウンタで定義し、書き出しとプレビューで同じ絵を得るため。

from __future__ import annotations

from etchcard.core.errors import ConfigError


def progress(frame_index: int, total_steps: int) -> float:
    """`(frame_index mod total_steps) / total_steps` を返す。"""

    steps = int(total_steps)
    if steps <= 0:
        raise ConfigError(f"total_steps は正の整数である必要がある: got={total_steps!r}")
    return float(int(frame_index) % steps) / float(steps)


def subframe_progresses(frame_index: int, total_steps: int, samples: int) -> tuple[float, ...]:
    """モーションブラー用に、1 フレーム内を samples 等分した進行度列を返す。

    `samples <= 1` の場合はフレーム自身の進行度 1 個だけを返す。
    """

    base = progress(frame_index, total_steps)
    n = int(samples)
    if n <= 1:
        return (base,)
    span = 1.0 / float(int(total_steps))
    return tuple((base + span * float(k) / float(n)) % 1.0 for k in range(n))


__all__ = ["progress", "subframe_progresses"]
