# どこで: `src/etchcard/core/stroke.py`。
# 何を: LineSpec を一定刻みでサンプリングして polyline として描き、必要ならビーズを置く。
# なぜ: 評価関数（純粋）と描画面への命令発行を 1 箇所で結び付けるため。

from __future__ import annotations

from etchcard.core.bead import BeadSettings, place_bead
from etchcard.core.etch_path import LineSpec, evaluate_many, sample_ts
from etchcard.core.surface import FillStyle, StrokeStyle, Surface

DEFAULT_SAMPLE_STEP = 0.005


def render_stroke(
    surface: Surface,
    spec: LineSpec,
    *,
    sample_step: float = DEFAULT_SAMPLE_STEP,
    include_endpoint: bool = True,
    bead: BeadSettings | None = None,
) -> tuple[float, float] | None:
    """spec の線を描き、ビーズを描いた場合はその中心を返す。

    Parameters
    ----------
    surface : Surface
        描画先。
    spec : LineSpec
        描く線。
    sample_step : float
        t のサンプリング刻み。既定 0.005（200 分割）。
    include_endpoint : bool
        t=1 のサンプルを含めるか。
    bead : BeadSettings or None
        ビーズ設定。None または `spec.bead_color is None` ならビーズは描かない。

    Returns
    -------
    tuple[float, float] or None
        描いたビーズの中心。描かなかった場合は None。
    """

    ts = sample_ts(sample_step, include_endpoint=include_endpoint)
    points = evaluate_many(spec, ts)

    surface.set_stroke_style(
        StrokeStyle(color=spec.line_color, width=float(spec.line_width), cap="round")
    )
    surface.move_to(spec.x, spec.y)
    for x, y in points:
        surface.line_to(float(x), float(y))
    surface.stroke()

    if bead is None or spec.bead_color is None:
        return None

    center = place_bead(
        spec,
        ts=ts,
        points=points,
        sample_step=float(sample_step),
        settings=bead,
    )
    if center is None:
        return None

    rx, ry = bead.radii
    surface.set_fill_style(FillStyle(color=spec.bead_color, glow=bead.glow))
    surface.fill_ellipse(center[0], center[1], float(rx), float(ry))
    return center


__all__ = ["DEFAULT_SAMPLE_STEP", "render_stroke"]
