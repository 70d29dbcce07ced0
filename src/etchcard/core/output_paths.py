# どこで: `src/etchcard/core/output_paths.py`。
# 何を: カード設定（シード）に基づき、出力ファイルの保存先パスを決める。
# なぜ: `output/{kind}/` 配下へ種類別に整理し、シードごとに別名で残せるようにするため。

from __future__ import annotations

import re
from pathlib import Path

from etchcard.core.runtime_config import output_root_dir


def sanitize_stem(text: str) -> str:
    """text をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(text)).strip("_")


def output_path_for_seed(*, kind: str, ext: str, seed: str) -> Path:
    """`output_root/{kind}/<seed>.{ext}` を返す。"""

    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")
    stem = sanitize_stem(seed) or "card"
    return output_root_dir() / str(kind) / f"{stem}.{ext_norm}"


def frames_dir_for_seed(seed: str) -> Path:
    """連番フレームの既定出力ディレクトリ `output_root/frames/<seed>/` を返す。"""

    stem = sanitize_stem(seed) or "card"
    return output_root_dir() / "frames" / stem


__all__ = ["frames_dir_for_seed", "output_path_for_seed", "sanitize_stem"]
