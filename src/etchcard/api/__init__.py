# どこで: `src/etchcard/api/__init__.py`。
# 何を: 公開 API パッケージのエントリポイントとして Export/run を再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from .export import Export

__all__ = ["Export", "run"]


def run(*args, **kwargs):
    """公開 run API へのラッパ（遅延インポートで pyglet 依存を後回しにする）。"""

    from .runner import run as _run

    return _run(*args, **kwargs)
