# どこで: `src/etchcard/core/bead.py`。
# 何を: 線上のビーズ（光る楕円）の配置ポリシー（drip / exclusion_zone）と除外領域を提供する。
# なぜ: ビーズ位置の決め方をスケッチ変種ごとに複製せず、設定 1 つで切り替えられるようにするため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
import shapely
from shapely.geometry import box

from etchcard.core.etch_path import LineSpec, evaluate
from etchcard.core.surface import Glow


class BeadPolicy(str, Enum):
    """ビーズ配置ポリシー。"""

    # サンプリング中に捕まえた近傍サンプル位置へ無条件に置く。
    DRIP = "drip"
    # t=position を厳密に評価し、除外領域内なら置かない。
    EXCLUSION_ZONE = "exclusion_zone"


@dataclass(frozen=True, slots=True)
class ExclusionRect:
    """除外矩形（境界を含む）。"""

    left: float
    top: float
    right: float
    bottom: float


class ExclusionZones:
    """除外矩形の和集合。点が境界上でも「内側」と判定する。"""

    def __init__(self, rects: Sequence[ExclusionRect] = ()) -> None:
        self._rects = tuple(rects)
        if self._rects:
            self._geometry = shapely.union_all(
                [box(r.left, r.top, r.right, r.bottom) for r in self._rects]
            )
        else:
            self._geometry = None

    @property
    def rects(self) -> tuple[ExclusionRect, ...]:
        return self._rects

    def contains(self, x: float, y: float) -> bool:
        geometry = self._geometry
        if geometry is None:
            return False
        return bool(shapely.intersects_xy(geometry, float(x), float(y)))


@dataclass(frozen=True, slots=True)
class BeadSettings:
    """ビーズ描画の設定。色は LineSpec.bead_color 側が持つ。"""

    policy: BeadPolicy = BeadPolicy.DRIP
    radii: tuple[float, float] = (6.0, 9.0)
    glow: Glow | None = None
    exclusion: ExclusionZones = field(default_factory=ExclusionZones)


def capture_index(ts: np.ndarray, position: float, sample_step: float) -> int | None:
    """`position <= t < position + sample_step` を満たす最初のサンプル番号を返す。無ければ None。"""

    hits = np.flatnonzero((ts >= position) & (ts < position + sample_step))
    if hits.size == 0:
        return None
    return int(hits[0])


def place_bead(
    spec: LineSpec,
    *,
    ts: np.ndarray,
    points: np.ndarray,
    sample_step: float,
    settings: BeadSettings,
) -> tuple[float, float] | None:
    """ビーズの中心座標を返す。置かない場合は None。

    Notes
    -----
    position が [0, 1) の外なら、どちらのポリシーでも置かない（エラーではない）。
    """

    position = float(spec.position)
    if not 0.0 <= position < 1.0:
        return None

    if settings.policy is BeadPolicy.DRIP:
        i = capture_index(ts, position, sample_step)
        if i is None:
            return None
        return float(points[i, 0]), float(points[i, 1])

    x, y = evaluate(spec, position)
    if settings.exclusion.contains(x, y):
        return None
    return x, y


__all__ = [
    "BeadPolicy",
    "BeadSettings",
    "ExclusionRect",
    "ExclusionZones",
    "capture_index",
    "place_bead",
]
