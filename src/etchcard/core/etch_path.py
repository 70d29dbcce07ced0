"""
どこで: `src/etchcard/core/etch_path.py`。
何を: 1 本の etch（縦に走り、1〜2 箇所で横へ折れる線）のパラメータと、進行度 t → (x, y) の評価関数を提供する。
なぜ: 線の形状を「シード済みパラメータ + 純粋関数」に閉じ込め、描画面やフレームから独立させるため。

モデル
------
y は t に対して線形（`y = y0 + t * length`）。x は y を独立変数として区分線形に決まる。
各 kink は `y0 + kink * length` で横方向への 45° ランプを開始し、`width` だけ進んで平坦部へ移る。
2 つ目の kink の開始が 1 つ目のランプ終端以前にある場合（重なり/逆順）は、
1 つ目の平坦部 `x0 + d1 * width` のまま保持する。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from etchcard.core.color import RGBA
from etchcard.core.errors import ConfigError

BLACK: RGBA = (0, 0, 0, 255)


@dataclass(frozen=True, slots=True)
class LineSpec:
    """1 本の etch を描くための不変パラメータ。

    Attributes
    ----------
    x, y : float
        始点（キャンバス座標）。
    length : float
        主軸（縦）方向の長さ。
    width : float
        各 kink での横方向の振れ幅。ランプの縦方向の長さも同じ値になる。
    kinks : tuple[float, ...]
        横方向への折れを開始する正規化進行度（1 個または 2 個）。
    directions : tuple[int, ...]
        各 kink の折れる向き（-1 / +1）。`kinks` と同じ長さ。
    line_color, line_width
        描画属性。評価関数からは参照しない。
    bead_color : RGBA or None
        ビーズの色。None ならビーズを描かない。
    position : float
        ビーズを置く正規化進行度。
    """

    x: float
    y: float
    length: float
    width: float
    kinks: tuple[float, ...]
    directions: tuple[int, ...]
    line_color: RGBA = BLACK
    line_width: float = 1.0
    bead_color: RGBA | None = None
    position: float = 0.0

    def __post_init__(self) -> None:
        if len(self.kinks) not in (1, 2):
            raise ConfigError(f"kinks は 1 個または 2 個である必要がある: got={self.kinks!r}")
        if len(self.directions) != len(self.kinks):
            raise ConfigError(
                "directions は kinks と同じ個数である必要がある"
                f": kinks={self.kinks!r}, directions={self.directions!r}"
            )
        for d in self.directions:
            if d not in (-1, 1):
                raise ConfigError(f"directions は -1 か +1 である必要がある: got={self.directions!r}")

    @property
    def kink_count(self) -> int:
        return len(self.kinks)


@dataclass(frozen=True, slots=True)
class KinkBounds:
    """kink ごとのランプ開始/終了 y 座標。1 kink の場合 2 つ目は None。"""

    start1: float
    end1: float
    start2: float | None
    end2: float | None

    @property
    def collapsed(self) -> bool:
        """2 つ目の kink が 1 つ目のランプ終端以前に始まる（単一平坦部に潰れる）なら True。"""

        return self.start2 is not None and self.start2 <= self.end1


def kink_bounds(spec: LineSpec) -> KinkBounds:
    """spec の kink 境界（y 座標）を返す。"""

    start1 = spec.y + spec.kinks[0] * spec.length
    end1 = start1 + spec.width
    if spec.kink_count == 1:
        return KinkBounds(start1=start1, end1=end1, start2=None, end2=None)
    start2 = spec.y + spec.kinks[1] * spec.length
    return KinkBounds(start1=start1, end1=end1, start2=start2, end2=start2 + spec.width)


@njit(cache=True)  # type: ignore[misc]
def _evaluate_kernel(
    ts: np.ndarray,
    x0: float,
    y0: float,
    length: float,
    width: float,
    k1: float,
    d1: float,
    k2: float,
    d2: float,
    two_kinks: bool,
    out: np.ndarray,
) -> None:
    """t 列を (x, y) 列へ評価して out に書き込む。"""
    ys1 = y0 + k1 * length
    ye1 = ys1 + width
    ys2 = y0 + k2 * length
    ye2 = ys2 + width
    collapsed = ys2 <= ye1

    for i in range(ts.shape[0]):
        yt = y0 + ts[i] * length
        if yt < ys1:
            xt = x0
        elif yt < ye1:
            xt = x0 + d1 * (yt - ys1)
        elif not two_kinks:
            xt = x0 + d1 * width
        elif yt < ys2 or collapsed:
            xt = x0 + d1 * width
        elif yt < ye2:
            xt = x0 + d1 * width + d2 * (yt - ys2)
        else:
            xt = x0 + d1 * width + d2 * width
        out[i, 0] = xt
        out[i, 1] = yt


def evaluate_many(spec: LineSpec, ts: np.ndarray) -> np.ndarray:
    """進行度列 ts を評価し、shape (N, 2) の float64 座標配列を返す。

    Notes
    -----
    [0, 1] の外側も同じ式で外挿する（エラーにはしない）。
    """

    ts_arr = np.ascontiguousarray(np.asarray(ts, dtype=np.float64).reshape(-1))
    out = np.empty((ts_arr.shape[0], 2), dtype=np.float64)
    two_kinks = spec.kink_count == 2
    _evaluate_kernel(
        ts_arr,
        float(spec.x),
        float(spec.y),
        float(spec.length),
        float(spec.width),
        float(spec.kinks[0]),
        float(spec.directions[0]),
        float(spec.kinks[1]) if two_kinks else 0.0,
        float(spec.directions[1]) if two_kinks else 0.0,
        two_kinks,
        out,
    )
    return out


def evaluate(spec: LineSpec, t: float) -> tuple[float, float]:
    """進行度 t における (x, y) を返す。"""

    xy = evaluate_many(spec, np.array([float(t)], dtype=np.float64))
    return float(xy[0, 0]), float(xy[0, 1])


def sample_ts(sample_step: float, *, include_endpoint: bool = True) -> np.ndarray:
    """0 から 1 まで sample_step 刻みの進行度列を返す。

    `include_endpoint=True` なら t=1（刻みで到達する場合）を含め、False なら t<1 のみ。
    """

    step = float(sample_step)
    if not math.isfinite(step) or step <= 0.0 or step > 1.0:
        raise ConfigError(f"sample_step は (0, 1] の値である必要がある: got={sample_step!r}")

    n = int(math.floor(1.0 / step + 1e-9))
    ts = np.arange(n + 1, dtype=np.float64) * step
    if include_endpoint:
        return ts[ts <= 1.0 + 1e-12]
    return ts[ts < 1.0 - 1e-12]


__all__ = [
    "KinkBounds",
    "LineSpec",
    "evaluate",
    "evaluate_many",
    "kink_bounds",
    "sample_ts",
]
