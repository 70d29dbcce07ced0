"""
どこで: `src/etchcard/render/raster.py`。
何を: core の描画命令（Surface）を Pillow の RGBA 画像へラスタライズする RasterSurface を提供する。
なぜ: プレビュー・PNG 保存・連番書き出しで同じピクセルを得るため、描画の実体を 1 箇所に集約する。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from etchcard.core.color import RGBA
from etchcard.core.surface import FillStyle, GradientStop, PathBuffer, StrokeStyle

_logger = logging.getLogger(__name__)

_TRANSPARENT: RGBA = (0, 0, 0, 0)


def gradient_array(stops: Sequence[GradientStop], size: tuple[int, int]) -> np.ndarray:
    """上→下の線形グラデーションを shape (H, W, 4) の uint8 配列で返す。"""

    w, h = int(size[0]), int(size[1])
    if w <= 0 or h <= 0:
        raise ValueError("size は正の (width, height) である必要がある")
    if not stops:
        raise ValueError("stops は 1 個以上必要")

    colors = np.asarray([s.color for s in stops], dtype=np.float64)
    if len(stops) == 1:
        column = np.broadcast_to(colors[0], (h, 4))
    else:
        offsets = np.asarray([float(s.offset) for s in stops], dtype=np.float64)
        # 画素中心で評価する（canvas の createLinearGradient と同じ取り方）。
        ys = (np.arange(h, dtype=np.float64) + 0.5) / float(h)
        column = np.stack([np.interp(ys, offsets, colors[:, c]) for c in range(4)], axis=1)

    column = np.clip(np.rint(column), 0, 255).astype(np.uint8)
    return np.ascontiguousarray(np.broadcast_to(column[:, None, :], (h, w, 4)))


class RasterSurface:
    """Pillow 画像へ描く Surface 実装。

    Parameters
    ----------
    canvas_size : tuple[int, int]
        キャンバス寸法（論理単位）。
    scale : float
        論理単位 → ピクセルの倍率。PNG の高解像度出力に使う。
    font_paths : Mapping[str, Path | None] or None
        font 名 → 解決済みフォントファイル。未解決（None）や未登録は Pillow 既定フォント。
    """

    def __init__(
        self,
        canvas_size: tuple[int, int],
        *,
        scale: float = 1.0,
        font_paths: Mapping[str, Path | None] | None = None,
    ) -> None:
        cw, ch = canvas_size
        if int(cw) <= 0 or int(ch) <= 0:
            raise ValueError("canvas_size は正の (width, height) である必要がある")
        if not float(scale) > 0.0:
            raise ValueError(f"scale は正の値である必要がある: got={scale!r}")

        self.canvas_size = (int(cw), int(ch))
        self.scale = float(scale)
        self.pixel_size = (
            max(1, int(round(self.canvas_size[0] * self.scale))),
            max(1, int(round(self.canvas_size[1] * self.scale))),
        )
        self.image = Image.new("RGBA", self.pixel_size, _TRANSPARENT)
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._path = PathBuffer()
        self._stroke = StrokeStyle(color=(0, 0, 0, 255), width=1.0)
        self._fill = FillStyle(color=(0, 0, 0, 255))
        self._font_paths = dict(font_paths or {})
        self._fonts: dict[tuple[str, int], Any] = {}

    # --- 座標変換 ---

    def _px(self, v: float) -> float:
        return float(v) * self.scale

    # --- Surface ---

    def fill_background(self, stops: Sequence[GradientStop]) -> None:
        arr = gradient_array(stops, self.pixel_size)
        self.image.paste(Image.fromarray(arr), (0, 0))

    def set_stroke_style(self, style: StrokeStyle) -> None:
        self._stroke = style

    def move_to(self, x: float, y: float) -> None:
        self._path.move_to(x, y)

    def line_to(self, x: float, y: float) -> None:
        self._path.line_to(x, y)

    def stroke(self) -> None:
        style = self._stroke
        width_px = max(1, int(round(self._px(style.width))))
        cap_r = self._px(style.width) / 2.0
        for subpath in self._path.take():
            pts = [(self._px(x), self._px(y)) for x, y in subpath]
            if len(pts) >= 2:
                self._draw.line(pts, fill=style.color, width=width_px, joint="curve")
            if style.cap == "round" and cap_r >= 0.5:
                # ImageDraw.line には線端の指定が無いため、端点に円を置いて丸める。
                for px, py in (pts[0], pts[-1]):
                    self._draw.ellipse(
                        (px - cap_r, py - cap_r, px + cap_r, py + cap_r),
                        fill=style.color,
                    )

    def set_fill_style(self, style: FillStyle) -> None:
        self._fill = style

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float) -> None:
        style = self._fill
        px, py = self._px(cx), self._px(cy)
        prx, pry = self._px(rx), self._px(ry)
        if style.glow is not None and style.glow.radius > 0:
            self._glow(px, py, prx, pry, radius=self._px(style.glow.radius), color=style.glow.color)
        self._draw.ellipse((px - prx, py - pry, px + prx, py + pry), fill=style.color)

    def _glow(
        self,
        px: float,
        py: float,
        prx: float,
        pry: float,
        *,
        radius: float,
        color: RGBA,
    ) -> None:
        # shadowBlur 相当。楕円の周囲だけの小さなレイヤーをぼかして合成する。
        sigma = radius / 2.0
        pad = int(math.ceil(3.0 * sigma + max(prx, pry))) + 1
        size = 2 * pad + 1
        layer = Image.new("RGBA", (size, size), color[:3] + (0,))
        ImageDraw.Draw(layer).ellipse(
            (pad - prx, pad - pry, pad + prx, pad + pry),
            fill=color,
        )
        layer = layer.filter(ImageFilter.GaussianBlur(radius=sigma))
        self._composite(layer, int(math.floor(px)) - pad, int(math.floor(py)) - pad)

    def _composite(self, layer: Image.Image, left: int, top: int) -> None:
        """layer を (left, top) に alpha 合成する。はみ出した部分は切り捨てる。"""

        w, h = self.image.size
        if left >= w or top >= h or left + layer.width <= 0 or top + layer.height <= 0:
            return
        src_x = max(0, -left)
        src_y = max(0, -top)
        dest = (max(0, left), max(0, top))
        right = min(layer.width, w - left)
        bottom = min(layer.height, h - top)
        clipped = layer.crop((src_x, src_y, right, bottom))
        self.image.alpha_composite(clipped, dest=dest)

    def _font(self, name: str, size_px: int) -> Any:
        key = (name, size_px)
        cached = self._fonts.get(key)
        if cached is not None:
            return cached
        path = self._font_paths.get(name)
        if path is not None:
            try:
                font = ImageFont.truetype(str(path), size_px)
            except OSError:
                _logger.warning("Failed to load font, using the default font: %s", path)
                font = ImageFont.load_default(size=size_px)
        else:
            font = ImageFont.load_default(size=size_px)
        self._fonts[key] = font
        return font

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
        size_px = max(1, int(round(self._px(size))))
        self._draw.text(
            (self._px(x), self._px(y)),
            text,
            fill=color,
            font=self._font(font, size_px),
            anchor="ls",
        )

    def draw_image(self, image: Any, x: float, y: float) -> None:
        img = image if image.mode == "RGBA" else image.convert("RGBA")
        if self.scale != 1.0:
            img = img.resize(
                (
                    max(1, int(round(img.width * self.scale))),
                    max(1, int(round(img.height * self.scale))),
                ),
                Image.Resampling.LANCZOS,
            )
        self._composite(img, int(round(self._px(x))), int(round(self._px(y))))

    # --- 出力 ---

    def to_array(self) -> np.ndarray:
        """現在の画像を shape (H, W, 4) の uint8 配列で返す。"""

        return np.asarray(self.image, dtype=np.uint8)


__all__ = ["RasterSurface", "gradient_array"]
