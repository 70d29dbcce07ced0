# どこで: `src/etchcard/core/font_resolver.py`。
# 何を: 文字オーバーレイの `font` 指定（名前/パス）をフォントファイルへ解決する。
# なぜ: 実行環境ごとにフォントの場所が違っても、config.yaml の `font_dirs` で吸収できるようにするため。

from __future__ import annotations

import sys
from pathlib import Path

from etchcard.core.runtime_config import runtime_config

_FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")
_FONT_FILES_CACHE: dict[tuple[str, ...], tuple[Path, ...]] = {}


def _system_font_dirs() -> tuple[Path, ...]:
    home = Path.home()
    if sys.platform == "darwin":
        return (
            home / "Library" / "Fonts",
            Path("/Library/Fonts"),
            Path("/System/Library/Fonts"),
        )
    if sys.platform.startswith("win"):
        return (Path("C:/Windows/Fonts"),)
    return (
        home / ".fonts",
        home / ".local" / "share" / "fonts",
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    )


def _search_dirs() -> tuple[Path, ...]:
    cfg = runtime_config()
    dirs = [Path(d).expanduser() for d in cfg.font_dirs]
    dirs.extend(_system_font_dirs())
    return tuple(dirs)


def _list_font_files(*, dirs: tuple[Path, ...]) -> tuple[Path, ...]:
    key = tuple(str(d) for d in dirs)
    cached = _FONT_FILES_CACHE.get(key)
    if cached is not None:
        return cached

    # dirs の順を保ったまま、各ディレクトリ内はファイル名で安定ソートする。
    out: list[Path] = []
    seen: set[Path] = set()
    for root in dirs:
        if not root.is_dir():
            continue
        found: list[Path] = []
        for ext in _FONT_EXTENSIONS:
            for fp in root.glob(f"**/*{ext}"):
                resolved = fp.resolve()
                if resolved.is_file() and resolved not in seen:
                    seen.add(resolved)
                    found.append(resolved)
        out.extend(sorted(found, key=lambda p: p.name.lower()))

    files = tuple(out)
    _FONT_FILES_CACHE[key] = files
    return files


def clear_font_cache() -> None:
    """フォント一覧キャッシュを破棄する。"""

    _FONT_FILES_CACHE.clear()


def resolve_font_path(font: str) -> Path:
    """`font` 指定を実体ファイルへ解決して返す。

    解決順:
    0) 直接パス（絶対/相対）
    1) 探索ディレクトリ直下のファイル名一致
    2) 空白を除いた小文字での部分一致（dirs の順 → ファイル名順）

    Raises
    ------
    FileNotFoundError
        どこにも見つからない場合。
    """

    raw = str(font).strip()
    if not raw:
        raise FileNotFoundError("font が空です")

    direct_path = Path(raw).expanduser()
    if direct_path.is_file():
        return direct_path.resolve()

    dirs = _search_dirs()
    for d in dirs:
        fp = d / raw
        if fp.is_file():
            return fp.resolve()

    key = raw.lower().replace(" ", "").replace("-", "")
    for fp in _list_font_files(dirs=dirs):
        stem = fp.stem.lower().replace(" ", "").replace("-", "")
        if key in stem:
            return fp

    searched = ", ".join(str(d) for d in dirs) if dirs else "(none)"
    cfg = runtime_config()
    raise FileNotFoundError(
        f"フォントが見つかりません: font={raw!r}。"
        " 実在パスを渡すか、config.yaml の `paths.font_dirs` を設定してください"
        f"\nsearched_dirs={searched}, config_path={cfg.config_path}"
    )


__all__ = ["clear_font_cache", "resolve_font_path"]
