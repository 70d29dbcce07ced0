"""
どこで: `src/etchcard/export/svg.py`。
何を: core の描画命令を SVG 要素として書き留める SvgSurface と、カード 1 フレームを SVG で保存する関数を提供する。
なぜ: interactive 依存なしの headless export（SVG）を用意し、ラスタと同じ命令列からベクタも得るため。
"""

from __future__ import annotations

import base64
import io
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from etchcard.core.assets import AssetBundle
from etchcard.core.color import RGBA, rgba_opacity, rgba_to_hex
from etchcard.core.scene import draw_card
from etchcard.core.sketch_config import SketchConfig
from etchcard.core.surface import FillStyle, GradientStop, PathBuffer, StrokeStyle
from etchcard.core.timing import progress

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _paint(attr: str, rgba: RGBA) -> str:
    """`fill="#RRGGBB"`（不透明でなければ `fill-opacity` 付き）を返す。"""
    out = f'{attr}="{rgba_to_hex(rgba)}"'
    if rgba[3] != 255:
        out += f' {attr}-opacity="{_fmt(rgba_opacity(rgba))}"'
    return out


def _polyline_to_d(points: Sequence[tuple[float, float]]) -> str:
    """polyline を SVG path の d 属性へ変換して返す。"""
    x0, y0 = points[0]
    parts = [f"M {_fmt(x0)} {_fmt(y0)}"]
    for x, y in points[1:]:
        parts.append(f"L {_fmt(x)} {_fmt(y)}")
    return " ".join(parts)


class SvgSurface:
    """描画命令を SVG 要素として溜める Surface 実装。"""

    def __init__(self, canvas_size: tuple[int, int]) -> None:
        canvas_w, canvas_h = canvas_size
        if int(canvas_w) <= 0 or int(canvas_h) <= 0:
            raise ValueError("canvas_size は正の値である必要がある")
        self.canvas_size = (int(canvas_w), int(canvas_h))
        self._defs: list[str] = []
        self._body: list[str] = []
        self._filters: dict[str, str] = {}
        self._gradients = 0
        self._path = PathBuffer()
        self._stroke = StrokeStyle(color=(0, 0, 0, 255), width=1.0)
        self._fill = FillStyle(color=(0, 0, 0, 255))

    def fill_background(self, stops: Sequence[GradientStop]) -> None:
        w, h = self.canvas_size
        if len(stops) == 1:
            self._body.append(f'  <rect x="0" y="0" width="{w}" height="{h}" {_paint("fill", stops[0].color)} />')
            return
        self._gradients += 1
        gid = f"background-{self._gradients}"
        self._defs.append(f'    <linearGradient id="{gid}" x1="0" y1="0" x2="0" y2="1">')
        for stop in stops:
            opacity = ""
            if stop.color[3] != 255:
                opacity = f' stop-opacity="{_fmt(rgba_opacity(stop.color))}"'
            self._defs.append(
                f'      <stop offset="{_fmt(stop.offset)}" stop-color="{rgba_to_hex(stop.color)}"{opacity} />'
            )
        self._defs.append("    </linearGradient>")
        self._body.append(f'  <rect x="0" y="0" width="{w}" height="{h}" fill="url(#{gid})" />')

    def set_stroke_style(self, style: StrokeStyle) -> None:
        self._stroke = style

    def move_to(self, x: float, y: float) -> None:
        self._path.move_to(x, y)

    def line_to(self, x: float, y: float) -> None:
        self._path.line_to(x, y)

    def stroke(self) -> None:
        style = self._stroke
        subpaths = [p for p in self._path.take() if p]
        if not subpaths:
            return
        d = " ".join(_polyline_to_d(p) for p in subpaths)
        self._body.append(
            (
                f'  <path d="{d}" fill="none" {_paint("stroke", style.color)} '
                f'stroke-width="{_fmt(style.width)}" stroke-linecap="{style.cap}" '
                f'stroke-linejoin="round" />'
            )
        )

    def set_fill_style(self, style: FillStyle) -> None:
        self._fill = style

    def _glow_filter(self, radius: float) -> str:
        key = _fmt(radius)
        fid = self._filters.get(key)
        if fid is None:
            fid = f"glow-{len(self._filters) + 1}"
            self._filters[key] = fid
            # canvas の shadowBlur は標準偏差の 2 倍に相当する。
            self._defs.append(
                f'    <filter id="{fid}" x="-200%" y="-200%" width="500%" height="500%">'
                f'<feGaussianBlur stdDeviation="{_fmt(radius / 2.0)}" /></filter>'
            )
        return fid

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float) -> None:
        style = self._fill
        geom = f'cx="{_fmt(cx)}" cy="{_fmt(cy)}" rx="{_fmt(rx)}" ry="{_fmt(ry)}"'
        if style.glow is not None and style.glow.radius > 0:
            fid = self._glow_filter(style.glow.radius)
            self._body.append(f'  <ellipse {geom} {_paint("fill", style.glow.color)} filter="url(#{fid})" />')
        self._body.append(f'  <ellipse {geom} {_paint("fill", style.color)} />')

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        size: float,
        color: RGBA,
        font: str,
    ) -> None:
        family = f" font-family={quoteattr(font)}" if font else ""
        self._body.append(
            f'  <text x="{_fmt(x)}" y="{_fmt(y)}" font-size="{_fmt(size)}"{family} '
            f'{_paint("fill", color)}>{escape(text)}</text>'
        )

    def draw_image(self, image: Any, x: float, y: float) -> None:
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        data = base64.b64encode(buf.getvalue()).decode("ascii")
        self._body.append(
            f'  <image x="{_fmt(x)}" y="{_fmt(y)}" width="{int(image.width)}" '
            f'height="{int(image.height)}" href="data:image/png;base64,{data}" />'
        )

    def to_svg(self) -> str:
        """溜めた要素を SVG 文書として返す。"""

        canvas_w, canvas_h = self.canvas_size
        lines: list[str] = []
        lines.append('<?xml version="1.0" encoding="UTF-8"?>')
        lines.append(
            (
                f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {canvas_w} {canvas_h}" '
                f'width="{canvas_w}" height="{canvas_h}">'
            )
        )
        if self._defs:
            lines.append("  <defs>")
            lines.extend(self._defs)
            lines.append("  </defs>")
        lines.extend(self._body)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


def export_svg(
    config: SketchConfig,
    path: str | Path,
    *,
    frame_index: int = 0,
    assets: AssetBundle | None = None,
) -> Path:
    """カードの frame_index 番目のフレームを SVG として保存する。

    Parameters
    ----------
    config : SketchConfig
        カード構成。
    path : str or Path
        出力先パス。
    frame_index : int
        出力するフレーム番号。進行度は `frame_index mod total_steps` で決まる。
    assets : AssetBundle or None
        読み込み済みのロゴ等。None ならロゴを省く。

    Returns
    -------
    Path
        保存先パス。

    Notes
    -----
    モーションブラーは SVG では表現しないため、フレーム冒頭の進行度 1 回分だけを描く。
    """
    _path = Path(path)

    surface = SvgSurface(config.canvas_size)
    draw_card(surface, config, t=progress(frame_index, config.total_steps), assets=assets)

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(surface.to_svg())

    return _path


__all__ = ["SvgSurface", "export_svg"]
