"""
どこで: `src/etchcard/core/color.py`。
何を: CSS 形式の色文字列を RGBA255 へ解決し、SVG 用の表現へ変換するユーティリティを提供する。
なぜ: 設定読み込み時に色を検証し、描画側は解決済みの値だけを扱えるようにするため。
"""

from __future__ import annotations

from PIL import ImageColor

from etchcard.core.errors import ConfigError

RGBA = tuple[int, int, int, int]


def parse_color(value: object, *, key: str = "color") -> RGBA:
    """色指定を RGBA255 タプルに解決して返す。

    Parameters
    ----------
    value : object
        `"slategray"`, `"#FFFFFFA0"`, `"hsl(341, 90%, 35%)"` などの CSS 色文字列、
        または 3/4 要素の整数シーケンス。
    key : str
        エラーメッセージに含める設定キー。

    Raises
    ------
    ConfigError
        解釈できない場合。
    """

    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value.strip())
        except ValueError as exc:
            raise ConfigError(f"{key} の色を解釈できません: got={value!r}") from exc
        if len(rgb) == 3:
            return int(rgb[0]), int(rgb[1]), int(rgb[2]), 255
        return int(rgb[0]), int(rgb[1]), int(rgb[2]), int(rgb[3])

    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        try:
            channels = [int(v) for v in value]
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{key} は整数の RGB(A) である必要があります: got={value!r}") from exc
        if any(c < 0 or c > 255 for c in channels):
            raise ConfigError(f"{key} の各成分は 0..255 である必要があります: got={value!r}")
        if len(channels) == 3:
            channels.append(255)
        return channels[0], channels[1], channels[2], channels[3]

    raise ConfigError(f"{key} は色文字列か RGB(A) 配列である必要があります: got={value!r}")


def rgba_to_hex(rgba: RGBA) -> str:
    """RGBA255 の RGB 部分を `#RRGGBB` に変換して返す。"""

    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


def rgba_opacity(rgba: RGBA) -> float:
    """RGBA255 の alpha を 0..1 の不透明度として返す。"""

    return float(rgba[3]) / 255.0


__all__ = ["RGBA", "parse_color", "rgba_opacity", "rgba_to_hex"]
