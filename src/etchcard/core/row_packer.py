"""
どこで: `src/etchcard/core/row_packer.py`。
何を: 1 行ぶんの etch を左から右へ貪欲に並べる（row pack）。
なぜ: 線ごとの幅と乱数ジッタから次の x を決め、行全体のテクスチャを 1 回のパスで作るため。

乱数の消費順（1 本あたり 10 回、設定によらず固定）
--------------------------------------------------
1. 向き d1, d2
2. 幅の倍率 `width = width0 * (2 + r)`
3. y ジッタ `y0 + 5r` / 長さ `length0 - 10r` / kink1 `0.75r` / kink2 `r`
   / ビーズ位置 `(t + r) mod 1` / ビーズ色
4. 送り量 `min(width, (r + max(d1 + d2, 0.2)) * width)`

順序を変えると同じシードでも全ての線が変わる。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from etchcard.core.bead import BeadSettings
from etchcard.core.color import RGBA
from etchcard.core.errors import ConfigError
from etchcard.core.etch_path import LineSpec
from etchcard.core.seeded_stream import SeededStream
from etchcard.core.stroke import DEFAULT_SAMPLE_STEP, render_stroke
from etchcard.core.surface import Surface

DEFAULT_PALETTE: tuple[RGBA, ...] = (
    (0x40, 0x40, 0x40, 255),
    (0xC0, 0xC0, 0xC0, 255),
    (0xFF, 0xFF, 0xFF, 255),
)


class BeadColorMode(str, Enum):
    """ビーズ色の選び方。"""

    # パレットを乱数で等分割して選ぶ。
    PALETTE = "palette"
    # 乱数が 0.5 を超えたら明（パレット末尾）、それ以外は暗（パレット先頭）。
    BINARY = "binary"


@dataclass(frozen=True, slots=True)
class RowSpec:
    """1 行ぶんの基準パラメータ。"""

    x0: float
    stop_x: float
    y0: float
    length: float
    width: float
    line_color: RGBA
    line_width: float = 2.5
    beads: bool = False
    name: str = ""


@dataclass(frozen=True, slots=True)
class PackOptions:
    """行を詰める際の変種設定。"""

    kink_count: int = 2
    sample_step: float = DEFAULT_SAMPLE_STEP
    include_endpoint: bool = True
    bead: BeadSettings | None = None
    bead_palette: tuple[RGBA, ...] = DEFAULT_PALETTE
    bead_color_mode: BeadColorMode = BeadColorMode.PALETTE


@dataclass(frozen=True, slots=True)
class PackResult:
    """1 回の row pack の結果。"""

    lines: int
    beads: int
    final_x: float


def choose_bead_color(
    r: float,
    *,
    palette: tuple[RGBA, ...],
    mode: BeadColorMode,
) -> RGBA:
    """乱数 r（0..1）からビーズ色を選んで返す。"""

    if mode is BeadColorMode.BINARY:
        return palette[-1] if r > 0.5 else palette[0]
    index = min(int(r * len(palette)), len(palette) - 1)
    return palette[index]


def row_advance(width: float, r: float, d1: int, d2: int) -> float:
    """次の線までの送り量を返す。

    Notes
    -----
    上限は線幅ちょうど。d1, d2 が同じ向きだと上限に張り付き、逆向きだと詰まる。
    """

    return min(width, (r + max(d1 + d2, 0.2)) * width)


def _validate(row: RowSpec, options: PackOptions) -> None:
    for key in ("x0", "stop_x", "y0", "length", "width"):
        value = float(getattr(row, key))
        if not math.isfinite(value):
            raise ConfigError(f"row.{key} は有限値である必要がある: got={value!r}")
    if float(row.width) <= 0.0:
        raise ConfigError(
            f"row.width は正の値である必要がある（0 以下では row pack が終了しない）: got={row.width!r}"
        )
    if options.kink_count not in (1, 2):
        raise ConfigError(f"kink_count は 1 か 2 である必要がある: got={options.kink_count!r}")
    if not options.bead_palette:
        raise ConfigError("bead_palette は 1 色以上必要")


def pack_row(
    surface: Surface,
    row: RowSpec,
    *,
    t: float,
    stream: SeededStream,
    options: PackOptions = PackOptions(),
) -> PackResult:
    """row を x0 から stop_x まで etch で埋め、描いた本数などを返す。

    Parameters
    ----------
    surface : Surface
        描画先。
    row : RowSpec
        行の基準パラメータ。
    t : float
        アニメーション進行度（0..1）。ビーズ位置の位相に加算する。
    stream : SeededStream
        このフレームの乱数ストリーム。呼び出し順に消費する。
    options : PackOptions
        kink 数やビーズ設定。

    Raises
    ------
    ConfigError
        width が 0 以下など、ループが終了しない設定の場合。
    """

    _validate(row, options)

    x = float(row.x0)
    lines = 0
    beads = 0
    while x < row.stop_x:
        d1 = stream.direction()
        d2 = stream.direction()
        width = float(row.width) * (2.0 + stream.next())

        y = float(row.y0) + stream.next() * 5.0
        length = float(row.length) - stream.next() * 10.0
        kink1 = 0.75 * stream.next()
        kink2 = stream.next()
        position = (float(t) + stream.next()) % 1.0
        bead_color = choose_bead_color(
            stream.next(),
            palette=options.bead_palette,
            mode=options.bead_color_mode,
        )

        if options.kink_count == 2:
            kinks: tuple[float, ...] = (kink1, kink2)
            directions: tuple[int, ...] = (d1, d2)
        else:
            kinks = (kink1,)
            directions = (d1,)

        spec = LineSpec(
            x=x,
            y=y,
            length=length,
            width=width,
            kinks=kinks,
            directions=directions,
            line_color=row.line_color,
            line_width=float(row.line_width),
            bead_color=bead_color if row.beads else None,
            position=position,
        )
        center = render_stroke(
            surface,
            spec,
            sample_step=options.sample_step,
            include_endpoint=options.include_endpoint,
            bead=options.bead,
        )
        lines += 1
        if center is not None:
            beads += 1

        step = row_advance(width, stream.next(), d1, d2)
        if not step > 0.0:
            raise ConfigError(f"row pack の送り量が正になりません: step={step!r}, row={row.name!r}")
        x += step

    return PackResult(lines=lines, beads=beads, final_x=x)


__all__ = [
    "BeadColorMode",
    "DEFAULT_PALETTE",
    "PackOptions",
    "PackResult",
    "RowSpec",
    "choose_bead_color",
    "pack_row",
    "row_advance",
]
