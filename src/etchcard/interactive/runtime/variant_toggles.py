# どこで: `src/etchcard/interactive/runtime/variant_toggles.py`。
# 何を: プレビュー中のキー操作で切り替える変種（ビーズ方式/kink 数/モーションブラー/ガイド）を提供する。
# なぜ: 設定は不変スナップショットなので、切り替えは「新しい SketchConfig を返す純粋関数」にしてテスト可能に保つため。

from __future__ import annotations

import dataclasses

from etchcard.core.bead import BeadPolicy
from etchcard.core.sketch_config import SketchConfig

DEFAULT_MOTION_BLUR_SAMPLES = 4


def toggle_bead_policy(config: SketchConfig) -> SketchConfig:
    """drip ↔ exclusion_zone を切り替えた設定を返す。"""

    policy = BeadPolicy.EXCLUSION_ZONE if config.bead_policy is BeadPolicy.DRIP else BeadPolicy.DRIP
    return config.replace(bead_policy=policy)


def toggle_kink_count(config: SketchConfig) -> SketchConfig:
    """kink 数 2 ↔ 1 を切り替えた設定を返す。"""

    return config.replace(kink_count=1 if config.kink_count == 2 else 2)


def toggle_motion_blur(config: SketchConfig, *, samples: int = DEFAULT_MOTION_BLUR_SAMPLES) -> SketchConfig:
    """モーションブラーの有無を切り替えた設定を返す（有効時は samples 枚）。"""

    return config.replace(motion_blur_samples=0 if config.motion_blur_samples > 0 else int(samples))


def toggle_guides(config: SketchConfig) -> SketchConfig:
    """デバッグガイドの表示を切り替えた設定を返す。"""

    guides = dataclasses.replace(config.guides, enabled=not config.guides.enabled)
    return config.replace(guides=guides)


def describe_variant(config: SketchConfig) -> str:
    """現在の変種を 1 行で返す（キャプション/ログ用）。"""

    blur = f"blur={config.motion_blur_samples}" if config.motion_blur_samples > 0 else "blur=off"
    guides = "guides=on" if config.guides.enabled else "guides=off"
    return f"beads={config.bead_policy.value} kinks={config.kink_count} {blur} {guides}"


__all__ = [
    "DEFAULT_MOTION_BLUR_SAMPLES",
    "describe_variant",
    "toggle_bead_policy",
    "toggle_guides",
    "toggle_kink_count",
    "toggle_motion_blur",
]
