# どこで: `src/etchcard/core/errors.py`。
# 何を: 設定値の検証エラーを表す例外を定義する。
# なぜ: 不正設定を描画ループへ持ち込まず、読み込み時点で一括して失敗させるため。

from __future__ import annotations


class ConfigError(ValueError):
    """sketch 設定や描画パラメータが不正な場合に送出する。"""


__all__ = ["ConfigError"]
