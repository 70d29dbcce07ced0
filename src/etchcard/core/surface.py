"""
どこで: `src/etchcard/core/surface.py`。
何を: 描画面（Surface）のプロトコルと、描画命令を記録するだけの RecordingSurface を定義する。
なぜ: core は「polyline を描く」「楕円を塗る」といった原始命令だけを発行し、
    ラスタ（Pillow）/ SVG などの実体を差し替え可能にするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from etchcard.core.color import RGBA


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    """線の描画属性。"""

    color: RGBA
    width: float
    cap: str = "round"


@dataclass(frozen=True, slots=True)
class Glow:
    """塗りの周囲にぼかしで付ける光彩（canvas の shadowBlur 相当）。"""

    radius: float
    color: RGBA


@dataclass(frozen=True, slots=True)
class FillStyle:
    """塗りの描画属性。"""

    color: RGBA
    glow: Glow | None = None


@dataclass(frozen=True, slots=True)
class GradientStop:
    """縦方向グラデーションの色停止点（offset は 0..1）。"""

    offset: float
    color: RGBA


class Surface(Protocol):
    """core が発行する描画命令の受け手。"""

    def fill_background(self, stops: Sequence[GradientStop]) -> None:
        """キャンバス全体を塗る。停止点が 1 個なら単色、2 個以上なら上→下の線形グラデーション。"""
        ...

    def set_stroke_style(self, style: StrokeStyle) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None:
        """move_to/line_to で積んだパスを現在の StrokeStyle で描き、パスを空にする。"""
        ...

    def set_fill_style(self, style: FillStyle) -> None: ...

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float) -> None: ...

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
        """(x, y) を左端ベースラインとして文字列を描く。"""
        ...

    def draw_image(self, image: Any, x: float, y: float) -> None:
        """読み込み済み画像を左上 (x, y) に描く。"""
        ...


class PathBuffer:
    """move_to/line_to を subpath 列として溜める補助。"""

    def __init__(self) -> None:
        self._subpaths: list[list[tuple[float, float]]] = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(float(x), float(y))])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            # canvas と同様、開始点が無い lineTo は moveTo として扱う。
            self._subpaths.append([(float(x), float(y))])
            return
        self._subpaths[-1].append((float(x), float(y)))

    def take(self) -> list[list[tuple[float, float]]]:
        """溜めた subpath 列を返して空にする。"""

        out = self._subpaths
        self._subpaths = []
        return out


@dataclass(frozen=True, slots=True)
class SurfaceCommand:
    """RecordingSurface が記録する 1 命令。"""

    name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


class RecordingSurface:
    """描画命令を順番に記録するだけの Surface。

    ヘッドレスな検証や、描画内容の統計取得に使う。
    """

    def __init__(self) -> None:
        self.commands: list[SurfaceCommand] = []

    def _record(self, name: str, *args: Any, **kwargs: Any) -> None:
        self.commands.append(SurfaceCommand(name=name, args=tuple(args), kwargs=dict(kwargs)))

    def fill_background(self, stops: Sequence[GradientStop]) -> None:
        self._record("fill_background", tuple(stops))

    def set_stroke_style(self, style: StrokeStyle) -> None:
        self._record("set_stroke_style", style)

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", float(x), float(y))

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", float(x), float(y))

    def stroke(self) -> None:
        self._record("stroke")

    def set_fill_style(self, style: FillStyle) -> None:
        self._record("set_fill_style", style)

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float) -> None:
        self._record("fill_ellipse", float(cx), float(cy), float(rx), float(ry))

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
        self._record("draw_text", text, float(x), float(y), size=size, color=color, font=font)

    def draw_image(self, image: Any, x: float, y: float) -> None:
        self._record("draw_image", image, float(x), float(y))

    def count(self, name: str) -> int:
        """指定名の命令数を返す。"""

        return sum(1 for c in self.commands if c.name == name)

    def named(self, name: str) -> list[SurfaceCommand]:
        return [c for c in self.commands if c.name == name]

    def polylines(self) -> list[list[tuple[float, float]]]:
        """stroke 済みの polyline を記録順に復元して返す。"""

        out: list[list[tuple[float, float]]] = []
        buffer = PathBuffer()
        for c in self.commands:
            if c.name == "move_to":
                buffer.move_to(*c.args)
            elif c.name == "line_to":
                buffer.line_to(*c.args)
            elif c.name == "stroke":
                out.extend(buffer.take())
        return out


__all__ = [
    "FillStyle",
    "Glow",
    "GradientStop",
    "PathBuffer",
    "RecordingSurface",
    "StrokeStyle",
    "Surface",
    "SurfaceCommand",
]
