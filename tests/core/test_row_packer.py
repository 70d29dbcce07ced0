"""row pack（`etchcard.core.row_packer`）のテスト。"""

from __future__ import annotations

import math

import pytest

from etchcard.core.bead import BeadPolicy, BeadSettings
from etchcard.core.errors import ConfigError
from etchcard.core.row_packer import (
    DEFAULT_PALETTE,
    BeadColorMode,
    PackOptions,
    RowSpec,
    choose_bead_color,
    pack_row,
    row_advance,
)
from etchcard.core.seeded_stream import SeededStream
from etchcard.core.surface import RecordingSurface


class _ScriptedStream:
    """決めた値を繰り返し返すストリーム。"""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)
        self.calls = 0

    def next(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value

    def direction(self) -> int:
        return 1 if self.next() > 0.5 else -1


def _row(**overrides) -> RowSpec:
    params = dict(
        x0=55.0,
        stop_x=1150.0,
        y0=350.0,
        length=400.0,
        width=5.0,
        line_color=(112, 128, 144, 255),
        line_width=2.5,
        beads=True,
        name="middle",
    )
    params.update(overrides)
    return RowSpec(**params)


def test_row_advance_is_capped_at_line_width() -> None:
    assert row_advance(10.0, 0.5, 1, 1) == 10.0
    assert row_advance(10.0, 0.1, -1, 1) == pytest.approx(3.0)
    assert row_advance(10.0, 0.5, -1, -1) == pytest.approx(7.0)
    assert row_advance(10.0, 0.9, 1, -1) == 10.0


def test_choose_bead_color_palette_and_binary() -> None:
    palette = DEFAULT_PALETTE
    assert choose_bead_color(0.0, palette=palette, mode=BeadColorMode.PALETTE) == palette[0]
    assert choose_bead_color(0.5, palette=palette, mode=BeadColorMode.PALETTE) == palette[1]
    assert choose_bead_color(0.9999, palette=palette, mode=BeadColorMode.PALETTE) == palette[2]

    assert choose_bead_color(0.6, palette=palette, mode=BeadColorMode.BINARY) == palette[-1]
    assert choose_bead_color(0.5, palette=palette, mode=BeadColorMode.BINARY) == palette[0]


def test_scripted_stream_controls_every_line_parameter() -> None:
    # d1, d2, 幅, y, 長さ, kink1, kink2, 位置, 色, 送り
    stream = _ScriptedStream([0.9, 0.9, 0.5, 0.2, 0.5, 0.4, 0.8, 0.3, 0.0, 0.5])
    surface = RecordingSurface()
    row = _row(x0=0.0, stop_x=15.0, y0=10.0, length=100.0, width=4.0)

    result = pack_row(
        surface,
        row,
        t=0.0,
        stream=stream,  # type: ignore[arg-type]
        options=PackOptions(bead=BeadSettings()),
    )

    # 幅 = 4 * 2.5 = 10、同じ向きなので送り量は 10（x=0, 10 の 2 本）。
    assert result.lines == 2
    assert result.final_x == pytest.approx(20.0)
    assert stream.calls == 20

    first, second = surface.polylines()[:2]
    assert first[0] == pytest.approx((0.0, 11.0))
    # 長さ 100 - 5 = 95、kink 0.3 / 0.8 は重ならないので終点は +10 +10。
    assert first[-1] == pytest.approx((20.0, 106.0))
    assert second[0] == pytest.approx((10.0, 11.0))

    ellipses = surface.named("fill_ellipse")
    assert len(ellipses) == 2
    fills = surface.named("set_fill_style")
    assert fills[0].args[0].color == DEFAULT_PALETTE[0]


def test_pack_row_terminates_and_consumes_ten_values_per_line() -> None:
    stream = SeededStream("test-seed-1")
    surface = RecordingSurface()
    result = pack_row(surface, _row(), t=0.0, stream=stream)

    assert 0 < result.lines < 1000
    assert result.final_x >= 1150.0
    assert stream.calls == 10 * result.lines
    assert surface.count("stroke") == result.lines


def test_narrow_rows_terminate_for_any_seed() -> None:
    row = _row(x0=0.0, stop_x=100.0, width=8.0, beads=False)
    for i in range(200):
        result = pack_row(RecordingSurface(), row, t=0.0, stream=SeededStream(f"seed-{i}"))
        assert 0 < result.lines < 1000
        assert result.final_x >= 100.0


def test_single_kink_variant_consumes_the_same_values() -> None:
    a = SeededStream("k")
    b = SeededStream("k")
    ra = pack_row(RecordingSurface(), _row(), t=0.0, stream=a, options=PackOptions(kink_count=2))
    rb = pack_row(RecordingSurface(), _row(), t=0.0, stream=b, options=PackOptions(kink_count=1))
    assert a.calls == 10 * ra.lines
    assert b.calls == 10 * rb.lines
    # 送り量は kink 数に依存しないので、同じシードなら本数も一致する。
    assert ra.lines == rb.lines


def test_line_shapes_do_not_depend_on_progress() -> None:
    s0 = RecordingSurface()
    s1 = RecordingSurface()
    pack_row(s0, _row(), t=0.0, stream=SeededStream("frame"))
    pack_row(s1, _row(), t=0.37, stream=SeededStream("frame"))
    assert s0.polylines() == s1.polylines()


def test_rows_without_beads_never_fill_ellipses() -> None:
    surface = RecordingSurface()
    options = PackOptions(bead=BeadSettings(policy=BeadPolicy.DRIP))
    pack_row(surface, _row(beads=False), t=0.5, stream=SeededStream("x"), options=options)
    assert surface.count("fill_ellipse") == 0
    assert surface.count("set_fill_style") == 0


def test_beads_are_drawn_for_bead_rows_with_drip_policy() -> None:
    surface = RecordingSurface()
    options = PackOptions(bead=BeadSettings(policy=BeadPolicy.DRIP))
    result = pack_row(surface, _row(), t=0.0, stream=SeededStream("x"), options=options)
    assert result.beads == surface.count("fill_ellipse")
    assert 0 < result.beads <= result.lines
    for cmd in surface.named("fill_ellipse"):
        assert cmd.args[2:] == (6.0, 9.0)


@pytest.mark.parametrize("width", [0.0, -1.0])
def test_non_positive_width_is_rejected(width: float) -> None:
    with pytest.raises(ConfigError):
        pack_row(RecordingSurface(), _row(width=width), t=0.0, stream=SeededStream("x"))


def test_non_finite_row_values_are_rejected() -> None:
    with pytest.raises(ConfigError):
        pack_row(RecordingSurface(), _row(stop_x=math.inf), t=0.0, stream=SeededStream("x"))
    with pytest.raises(ConfigError):
        pack_row(RecordingSurface(), _row(y0=math.nan), t=0.0, stream=SeededStream("x"))


def test_invalid_kink_count_is_rejected() -> None:
    with pytest.raises(ConfigError):
        pack_row(
            RecordingSurface(),
            _row(),
            t=0.0,
            stream=SeededStream("x"),
            options=PackOptions(kink_count=3),
        )


def test_row_starting_past_stop_draws_nothing() -> None:
    stream = SeededStream("x")
    surface = RecordingSurface()
    result = pack_row(surface, _row(x0=1200.0), t=0.0, stream=stream)
    assert result.lines == 0
    assert stream.calls == 0
    assert surface.commands == []
