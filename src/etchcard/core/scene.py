"""
どこで: `src/etchcard/core/scene.py`。
何を: カード 1 フレームぶんの描画命令列（背景 → etch 行 → 文字 → ロゴ → ガイド）を Surface へ発行する。
なぜ: 毎フレーム同じシードでストリームを作り直し、線形状を固定したままビーズだけを動かすため。
"""

from __future__ import annotations

from dataclasses import dataclass

from etchcard.core.assets import AssetBundle
from etchcard.core.row_packer import PackResult, pack_row
from etchcard.core.seeded_stream import SeededStream
from etchcard.core.sketch_config import SketchConfig
from etchcard.core.surface import StrokeStyle, Surface
from etchcard.core.timing import progress


@dataclass(frozen=True, slots=True)
class CardResult:
    """1 フレームの描画結果の要約。"""

    t: float
    rows: tuple[PackResult, ...]
    stream_calls: int

    @property
    def lines(self) -> int:
        return sum(r.lines for r in self.rows)

    @property
    def beads(self) -> int:
        return sum(r.beads for r in self.rows)


def draw_card(
    surface: Surface,
    config: SketchConfig,
    *,
    t: float,
    assets: AssetBundle | None = None,
) -> CardResult:
    """進行度 t のカードを surface へ描く。"""

    surface.fill_background(config.background)

    # ストリームはフレームごとに同じシードで作り直す（線形状をフレーム不変にする）。
    stream = SeededStream(config.seed)
    options = config.pack_options()
    results = tuple(
        pack_row(surface, row, t=t, stream=stream, options=options) for row in config.rows
    )

    for overlay in config.texts:
        x, y = overlay.position
        surface.draw_text(
            overlay.text,
            x,
            y,
            size=overlay.size,
            color=overlay.color,
            font=overlay.font,
        )

    if assets is not None and assets.logo is not None and config.logo is not None:
        x, y = config.logo.position
        surface.draw_image(assets.logo, x, y)

    guides = config.guides
    if guides.enabled:
        w, h = config.canvas_size
        surface.set_stroke_style(StrokeStyle(color=guides.color, width=1.0, cap="butt"))
        for gy in guides.horizontal:
            surface.move_to(0.0, gy)
            surface.line_to(float(w), gy)
        for gx in guides.vertical:
            surface.move_to(gx, 0.0)
            surface.line_to(gx, float(h))
        surface.stroke()

    return CardResult(t=float(t), rows=results, stream_calls=stream.calls)


def draw_frame(
    surface: Surface,
    config: SketchConfig,
    frame_index: int,
    *,
    assets: AssetBundle | None = None,
) -> CardResult:
    """フレーム番号から進行度を求めてカードを描く。"""

    return draw_card(
        surface,
        config,
        t=progress(frame_index, config.total_steps),
        assets=assets,
    )


__all__ = ["CardResult", "draw_card", "draw_frame"]
