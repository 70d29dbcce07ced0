# どこで: `src/etchcard/interactive/runtime/__init__.py`。
# 何を: プレビュー実行時の「ループ/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `src/etchcard/api/runner.py` を配線だけに保ち、責務ごとに差し替えやすくするため。

from __future__ import annotations

__all__ = []
