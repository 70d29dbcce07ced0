# どこで: `src/etchcard/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 出力先やフォント/画像アセットの置き場所をユーザーが差し替えられるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """etchcard の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    font_dirs: tuple[Path, ...]
    asset_dir: Path | None
    window_pos: tuple[int, int]
    png_scale: float
    frame_count: int


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".etchcard" / "config.yaml",
        home / ".config" / "etchcard" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(_expand_path_text(s))


def _as_path_list(value: Any, *, key: str) -> list[Path]:
    if value is None:
        return []
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return []
        parts = [p for p in s.split(os.pathsep) if p]
        return [Path(_expand_path_text(p)) for p in parts]
    if not isinstance(value, (list, tuple)):
        raise RuntimeError(f"{key} は文字列か配列である必要があります: got={value!r}")

    out: list[Path] = []
    for item in value:
        p = _as_optional_path(item)
        if p is not None:
            out.append(p)
    return out


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int] | None:
    if value is None:
        return None
    try:
        seq = list(value)
    except TypeError as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    return (x, y)


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを mapping として読み込んで返す。空なら空 dict。"""

    import yaml

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"YAML の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"YAML の最上位は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return load_yaml_text(text, source=str(path))


def read_packaged_resource(*parts: str) -> str:
    """同梱リソース（`etchcard/resource/...`）をテキストとして返す。"""

    try:
        return resources.files("etchcard").joinpath("resource", *parts).read_text(encoding="utf-8")
    except (FileNotFoundError, ModuleNotFoundError) as exc:  # pragma: no cover
        joined = "/".join(parts)
        raise RuntimeError(
            f"同梱リソース {joined} の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = load_yaml_text(
        read_packaged_resource("default_config.yaml"),
        source="etchcard/resource/default_config.yaml",
    )
    if discovered_path is not None:
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload.update(_load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    version_i = _as_int(version, key="version")
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _as_optional_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError(
            "paths.output_dir が未設定です（同梱 default_config.yaml を確認してください）"
        )
    font_dirs = _as_path_list(paths.get("font_dirs"), key="paths.font_dirs")
    asset_dir = _as_optional_path(paths.get("asset_dir"))

    ui = _as_mapping(payload.get("ui"), key="ui")
    window_pos = _as_int_pair(ui.get("window_position"), key="ui.window_position")
    if window_pos is None:
        raise RuntimeError(
            "ui.window_position が未設定です（同梱 default_config.yaml を確認してください）"
        )

    export = _as_mapping(payload.get("export"), key="export")
    png = _as_mapping(export.get("png"), key="export.png")
    png_scale = _as_float(png.get("scale"), key="export.png.scale")
    if png_scale is None:
        raise RuntimeError(
            "export.png.scale が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if png_scale <= 0:
        raise ValueError(f"export.png.scale は正の値である必要があります: got={png_scale}")

    frames = _as_mapping(export.get("frames"), key="export.frames")
    frame_count = _as_int(frames.get("count"), key="export.frames.count")
    if frame_count is None:
        raise RuntimeError(
            "export.frames.count が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if frame_count <= 0:
        raise ValueError(f"export.frames.count は正の値である必要があります: got={frame_count}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        font_dirs=tuple(font_dirs),
        asset_dir=asset_dir,
        window_pos=window_pos,
        png_scale=float(png_scale),
        frame_count=int(frame_count),
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.etchcard/config.yaml` / `~/.config/etchcard/config.yaml`
    3) `set_config_path(...)` で指定した config
    """

    return Path(runtime_config().output_dir)


__all__ = [
    "RuntimeConfig",
    "load_yaml_text",
    "output_root_dir",
    "read_packaged_resource",
    "runtime_config",
    "set_config_path",
]
