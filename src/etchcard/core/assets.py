# どこで: `src/etchcard/core/assets.py`。
# 何を: ロゴ画像とフォントを最初のフレームより前にまとめて読み込む（準備完了ゲート）。
# なぜ: 読み込み失敗で描画ループが止まらないよう、欠けたアセットは警告だけ出して描画を省くため。

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from etchcard.core.font_resolver import resolve_font_path
from etchcard.core.runtime_config import runtime_config
from etchcard.core.sketch_config import SketchConfig

_logger = logging.getLogger(__name__)


def resolve_asset_path(path: str | Path) -> Path:
    """アセットの相対パスを `paths.asset_dir`（未設定ならカレント）基準で解決して返す。"""

    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    asset_dir = runtime_config().asset_dir
    if asset_dir is not None:
        return asset_dir / p
    return p


@dataclass(slots=True)
class AssetBundle:
    """描画に使う読み込み済みアセット。"""

    logo: Image.Image | None = None
    font_paths: dict[str, Path | None] = field(default_factory=dict)
    ready: bool = False

    @classmethod
    def load(cls, config: SketchConfig) -> AssetBundle:
        """config が参照するアセットを読み込んで返す。失敗したものは None のまま ready になる。"""

        bundle = cls()
        if config.logo is not None:
            bundle.logo = load_image(config.logo.path)

        for overlay in config.texts:
            name = overlay.font
            if not name or name in bundle.font_paths:
                continue
            try:
                bundle.font_paths[name] = resolve_font_path(name)
            except FileNotFoundError:
                _logger.warning("Font not found, falling back to the default font: %s", name)
                bundle.font_paths[name] = None

        bundle.ready = True
        return bundle


def load_image(path: str | Path) -> Image.Image | None:
    """画像を RGBA で読み込んで返す。読めなければ警告を出して None を返す。"""

    resolved = resolve_asset_path(path)
    try:
        with Image.open(resolved) as img:
            return img.convert("RGBA")
    except FileNotFoundError:
        _logger.warning("Image asset not found, overlay skipped: %s", resolved)
    except (UnidentifiedImageError, OSError):
        _logger.warning("Image asset could not be decoded, overlay skipped: %s", resolved)
    return None


__all__ = ["AssetBundle", "load_image", "resolve_asset_path"]
