# どこで: `src/etchcard/core/seeded_stream.py`。
# 何を: 文字列シードから再現可能な [0, 1) の乱数列を生成するストリームを提供する。
# なぜ: 毎フレーム同じシードで作り直すことで、線の形状をフレーム間で固定するため。

from __future__ import annotations

import hashlib

import numpy as np


def seed_to_int(seed: str) -> int:
    """シード文字列を numpy Generator 用の 64bit 整数へ変換して返す。

    Notes
    -----
    `hash()` はプロセスごとにランダム化されるため使わない。
    """

    digest = hashlib.sha256(str(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


class SeededStream:
    """シード文字列と呼び出し順だけで決まる一様乱数列。

    Notes
    -----
    呼び出し順がそのまま幾何パラメータの割り当て順になる。
    順序を入れ替えると全ての線の形が変わる。
    """

    def __init__(self, seed: str) -> None:
        self._seed = str(seed)
        self._rng = np.random.default_rng(seed_to_int(self._seed))
        self._calls = 0

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def calls(self) -> int:
        """これまでに `next()` した回数。"""

        return self._calls

    def next(self) -> float:
        """次の値（0 以上 1 未満）を返す。"""

        self._calls += 1
        return float(self._rng.random())

    def direction(self) -> int:
        """次の値から向き（`> 0.5` なら +1、それ以外 -1）を返す。"""

        return 1 if self.next() > 0.5 else -1


__all__ = ["SeededStream", "seed_to_int"]
