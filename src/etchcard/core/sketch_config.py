"""
どこで: `src/etchcard/core/sketch_config.py`。
何を: カード 1 枚ぶんの構成（シード・行・ビーズ・背景・文字・ロゴ）を表す不変設定と、その YAML ローダを提供する。
なぜ: 変種ごとに散っていた可変オブジェクトを「フレーム冒頭に渡す読み取り専用スナップショット」へ置き換え、
    不正値は読み込み時に ConfigError として弾くため。
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from etchcard.core.bead import BeadPolicy, BeadSettings, ExclusionRect, ExclusionZones
from etchcard.core.color import RGBA, parse_color
from etchcard.core.errors import ConfigError
from etchcard.core.row_packer import DEFAULT_PALETTE, BeadColorMode, PackOptions, RowSpec
from etchcard.core.runtime_config import load_yaml_text, read_packaged_resource
from etchcard.core.surface import Glow, GradientStop


@dataclass(frozen=True, slots=True)
class TextOverlay:
    """固定位置に描く文字列。position は左端ベースライン。"""

    text: str
    position: tuple[float, float]
    size: float
    color: RGBA
    font: str = ""


@dataclass(frozen=True, slots=True)
class LogoOverlay:
    """固定位置に描く画像。position は左上。"""

    path: str
    position: tuple[float, float]


@dataclass(frozen=True, slots=True)
class DebugGuides:
    """レイアウト確認用のガイド線。"""

    enabled: bool = False
    color: RGBA = (0, 128, 0, 255)
    horizontal: tuple[float, ...] = ()
    vertical: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class SketchConfig:
    """1 フレームの描画に必要な設定の読み取り専用スナップショット。"""

    seed: str
    canvas_size: tuple[int, int]
    total_steps: int
    rows: tuple[RowSpec, ...]
    background: tuple[GradientStop, ...]
    kink_count: int = 2
    bead_policy: BeadPolicy = BeadPolicy.DRIP
    motion_blur_samples: int = 0
    sample_step: float = 0.005
    include_endpoint: bool = True
    bead_radii: tuple[float, float] = (6.0, 9.0)
    bead_glow: Glow | None = None
    bead_color_mode: BeadColorMode = BeadColorMode.PALETTE
    bead_palette: tuple[RGBA, ...] = DEFAULT_PALETTE
    exclusion_zones: tuple[ExclusionRect, ...] = ()
    texts: tuple[TextOverlay, ...] = ()
    logo: LogoOverlay | None = None
    guides: DebugGuides = field(default_factory=DebugGuides)

    def __post_init__(self) -> None:
        validate_sketch_config(self)

    def replace(self, **changes: Any) -> SketchConfig:
        """一部を差し替えた新しいスナップショットを返す（検証込み）。"""

        return dataclasses.replace(self, **changes)

    def bead_settings(self) -> BeadSettings:
        return BeadSettings(
            policy=self.bead_policy,
            radii=self.bead_radii,
            glow=self.bead_glow,
            exclusion=ExclusionZones(self.exclusion_zones),
        )

    def pack_options(self) -> PackOptions:
        return PackOptions(
            kink_count=self.kink_count,
            sample_step=self.sample_step,
            include_endpoint=self.include_endpoint,
            bead=self.bead_settings(),
            bead_palette=self.bead_palette,
            bead_color_mode=self.bead_color_mode,
        )


def validate_sketch_config(cfg: SketchConfig) -> None:
    """SketchConfig の整合性を検証する。不正なら ConfigError。"""

    w, h = cfg.canvas_size
    if int(w) <= 0 or int(h) <= 0:
        raise ConfigError(f"canvas.size は正の (width, height) である必要がある: got={cfg.canvas_size!r}")
    if int(cfg.total_steps) <= 0:
        raise ConfigError(f"timing.total_steps は正の整数である必要がある: got={cfg.total_steps!r}")
    if cfg.kink_count not in (1, 2):
        raise ConfigError(f"variant.kink_count は 1 か 2 である必要がある: got={cfg.kink_count!r}")
    if not isinstance(cfg.bead_policy, BeadPolicy):
        raise ConfigError(f"variant.bead_policy が不正です: got={cfg.bead_policy!r}")
    if int(cfg.motion_blur_samples) < 0:
        raise ConfigError(
            f"variant.motion_blur_samples は 0 以上である必要がある: got={cfg.motion_blur_samples!r}"
        )
    step = float(cfg.sample_step)
    if not math.isfinite(step) or step <= 0.0 or step > 1.0:
        raise ConfigError(f"variant.sample_step は (0, 1] の値である必要がある: got={cfg.sample_step!r}")
    rx, ry = cfg.bead_radii
    if float(rx) <= 0.0 or float(ry) <= 0.0:
        raise ConfigError(f"bead.radii は正の値である必要がある: got={cfg.bead_radii!r}")
    if cfg.bead_glow is not None and float(cfg.bead_glow.radius) < 0.0:
        raise ConfigError(f"bead.glow_radius は 0 以上である必要がある: got={cfg.bead_glow.radius!r}")
    if not cfg.bead_palette:
        raise ConfigError("bead.palette は 1 色以上必要")
    if not cfg.rows:
        raise ConfigError("rows は 1 行以上必要")
    for i, row in enumerate(cfg.rows):
        if not math.isfinite(float(row.width)) or float(row.width) <= 0.0:
            raise ConfigError(f"rows[{i}].width は正の値である必要がある: got={row.width!r}")
        if float(row.line_width) <= 0.0:
            raise ConfigError(f"rows[{i}].line_width は正の値である必要がある: got={row.line_width!r}")
    if not cfg.background:
        raise ConfigError("background.stops は 1 個以上必要")
    prev = 0.0
    for stop in cfg.background:
        if not 0.0 <= float(stop.offset) <= 1.0 or float(stop.offset) < prev:
            raise ConfigError(
                f"background.stops の offset は 0..1 の非減少列である必要がある: got={stop.offset!r}"
            )
        prev = float(stop.offset)


# --- YAML → SketchConfig ---


def _mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise ConfigError(f"{key} は mapping である必要がある: got={value!r}")


def _sequence(value: Any, *, key: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ConfigError(f"{key} は配列である必要がある: got={value!r}")


def _float(value: Any, *, key: str, default: float | None = None) -> float:
    if value is None:
        if default is None:
            raise ConfigError(f"{key} が未設定です")
        return float(default)
    if isinstance(value, bool):
        raise ConfigError(f"{key} は数値である必要がある: got={value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} は数値である必要がある: got={value!r}") from exc
    if not math.isfinite(out):
        raise ConfigError(f"{key} は有限値である必要がある: got={value!r}")
    return out


def _int(value: Any, *, key: str, default: int | None = None) -> int:
    if value is None:
        if default is None:
            raise ConfigError(f"{key} が未設定です")
        return int(default)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigError(f"{key} は整数である必要がある: got={value!r}")
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{key} は整数である必要がある: got={value!r}") from exc


def _bool(value: Any, *, key: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{key} は true/false である必要がある: got={value!r}")


def _pair(value: Any, *, key: str) -> tuple[float, float]:
    seq = _sequence(value, key=key)
    if len(seq) != 2:
        raise ConfigError(f"{key} は [x, y] の配列である必要がある: got={value!r}")
    return _float(seq[0], key=f"{key}[0]"), _float(seq[1], key=f"{key}[1]")


def _enum(enum_type: Any, value: Any, *, key: str, default: Any) -> Any:
    if value is None:
        return default
    try:
        return enum_type(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(m.value for m in enum_type)
        raise ConfigError(f"{key} は {choices} のいずれかである必要がある: got={value!r}") from exc


def _parse_row(raw: Any, *, index: int) -> RowSpec:
    key = f"rows[{index}]"
    m = _mapping(raw, key=key)
    return RowSpec(
        name=str(m.get("name") or f"row{index}"),
        x0=_float(m.get("x0"), key=f"{key}.x0"),
        stop_x=_float(m.get("stop_x"), key=f"{key}.stop_x"),
        y0=_float(m.get("y0"), key=f"{key}.y0"),
        length=_float(m.get("length"), key=f"{key}.length"),
        width=_float(m.get("width"), key=f"{key}.width"),
        line_color=parse_color(m.get("line_color", "black"), key=f"{key}.line_color"),
        line_width=_float(m.get("line_width"), key=f"{key}.line_width", default=2.5),
        beads=_bool(m.get("beads"), key=f"{key}.beads", default=False),
    )


def _parse_stop(raw: Any, *, index: int) -> GradientStop:
    key = f"background.stops[{index}]"
    seq = _sequence(raw, key=key)
    if len(seq) != 2:
        raise ConfigError(f"{key} は [offset, color] である必要がある: got={raw!r}")
    return GradientStop(
        offset=_float(seq[0], key=f"{key}.offset"),
        color=parse_color(seq[1], key=f"{key}.color"),
    )


def _parse_rect(raw: Any, *, index: int) -> ExclusionRect:
    key = f"bead.exclusion_zones[{index}]"
    seq = _sequence(raw, key=key)
    if len(seq) != 4:
        raise ConfigError(f"{key} は [left, top, right, bottom] である必要がある: got={raw!r}")
    left, top, right, bottom = (_float(v, key=key) for v in seq)
    if right < left or bottom < top:
        raise ConfigError(f"{key} は left<=right, top<=bottom である必要がある: got={raw!r}")
    return ExclusionRect(left=left, top=top, right=right, bottom=bottom)


def _parse_text(raw: Any, *, index: int) -> TextOverlay:
    key = f"texts[{index}]"
    m = _mapping(raw, key=key)
    text = m.get("text")
    if not isinstance(text, str):
        raise ConfigError(f"{key}.text は文字列である必要がある: got={text!r}")
    size = _float(m.get("size"), key=f"{key}.size", default=24.0)
    if size <= 0:
        raise ConfigError(f"{key}.size は正の値である必要がある: got={size!r}")
    return TextOverlay(
        text=text,
        position=_pair(m.get("position"), key=f"{key}.position"),
        size=size,
        color=parse_color(m.get("color", "white"), key=f"{key}.color"),
        font=str(m.get("font") or ""),
    )


def sketch_config_from_mapping(payload: dict[str, Any]) -> SketchConfig:
    """YAML 由来の mapping から SketchConfig を組み立てて返す。"""

    version = payload.get("version", 1)
    if _int(version, key="version") != 1:
        raise ConfigError(f"未対応の sketch version です: got={version!r}")

    seed = payload.get("seed")
    if seed is None or not str(seed):
        raise ConfigError("seed が未設定です")

    canvas = _mapping(payload.get("canvas"), key="canvas")
    cw, ch = _pair(canvas.get("size"), key="canvas.size")

    timing = _mapping(payload.get("timing"), key="timing")
    variant = _mapping(payload.get("variant"), key="variant")
    bead = _mapping(payload.get("bead"), key="bead")

    radii = _pair(bead.get("radii", [6, 9]), key="bead.radii")
    glow_radius = _float(bead.get("glow_radius"), key="bead.glow_radius", default=0.0)
    glow: Glow | None = None
    if glow_radius > 0:
        glow = Glow(
            radius=glow_radius,
            color=parse_color(bead.get("glow_color", "white"), key="bead.glow_color"),
        )

    palette = tuple(
        parse_color(c, key=f"bead.palette[{i}]")
        for i, c in enumerate(_sequence(bead.get("palette"), key="bead.palette"))
    )
    if "palette" not in bead:
        palette = DEFAULT_PALETTE

    background = _mapping(payload.get("background"), key="background")
    stops = tuple(
        _parse_stop(s, index=i)
        for i, s in enumerate(_sequence(background.get("stops"), key="background.stops"))
    )

    logo_raw = payload.get("logo")
    logo: LogoOverlay | None = None
    if logo_raw is not None:
        logo_m = _mapping(logo_raw, key="logo")
        logo_path = logo_m.get("path")
        if logo_path:
            logo = LogoOverlay(
                path=str(logo_path),
                position=_pair(logo_m.get("position"), key="logo.position"),
            )

    debug = _mapping(payload.get("debug"), key="debug")
    guides = DebugGuides(
        enabled=_bool(debug.get("guides"), key="debug.guides", default=False),
        color=parse_color(debug.get("guide_color", "green"), key="debug.guide_color"),
        horizontal=tuple(
            _float(v, key="debug.horizontal") for v in _sequence(debug.get("horizontal"), key="debug.horizontal")
        ),
        vertical=tuple(
            _float(v, key="debug.vertical") for v in _sequence(debug.get("vertical"), key="debug.vertical")
        ),
    )

    return SketchConfig(
        seed=str(seed),
        canvas_size=(int(cw), int(ch)),
        total_steps=_int(timing.get("total_steps"), key="timing.total_steps", default=200),
        rows=tuple(
            _parse_row(r, index=i) for i, r in enumerate(_sequence(payload.get("rows"), key="rows"))
        ),
        background=stops,
        kink_count=_int(variant.get("kink_count"), key="variant.kink_count", default=2),
        bead_policy=_enum(
            BeadPolicy, variant.get("bead_policy"), key="variant.bead_policy", default=BeadPolicy.DRIP
        ),
        motion_blur_samples=_int(
            variant.get("motion_blur_samples"), key="variant.motion_blur_samples", default=0
        ),
        sample_step=_float(variant.get("sample_step"), key="variant.sample_step", default=0.005),
        include_endpoint=_bool(
            variant.get("include_endpoint"), key="variant.include_endpoint", default=True
        ),
        bead_radii=radii,
        bead_glow=glow,
        bead_color_mode=_enum(
            BeadColorMode,
            bead.get("color_mode"),
            key="bead.color_mode",
            default=BeadColorMode.PALETTE,
        ),
        bead_palette=palette,
        exclusion_zones=tuple(
            _parse_rect(r, index=i)
            for i, r in enumerate(_sequence(bead.get("exclusion_zones"), key="bead.exclusion_zones"))
        ),
        texts=tuple(
            _parse_text(t, index=i) for i, t in enumerate(_sequence(payload.get("texts"), key="texts"))
        ),
        logo=logo,
        guides=guides,
    )


def load_sketch_config(path: str | Path | None = None) -> SketchConfig:
    """sketch 設定をロードして返す。

    Notes
    -----
    同梱 `default_sketch.yaml` を読み、path が与えられればその最上位キーで上書きする。
    """

    payload = load_yaml_text(
        read_packaged_resource("default_sketch.yaml"),
        source="etchcard/resource/default_sketch.yaml",
    )
    if path is not None:
        p = Path(path).expanduser()
        if not p.is_file():
            raise FileNotFoundError(f"sketch 設定が見つかりません: {p}")
        payload.update(load_yaml_text(p.read_text(encoding="utf-8"), source=str(p)))
    return sketch_config_from_mapping(payload)


__all__ = [
    "DebugGuides",
    "LogoOverlay",
    "SketchConfig",
    "TextOverlay",
    "load_sketch_config",
    "sketch_config_from_mapping",
    "validate_sketch_config",
]
