"""プレビューの変種切り替え（`variant_toggles`）のテスト。"""

from etchcard.core.bead import BeadPolicy
from etchcard.core.sketch_config import load_sketch_config
from etchcard.interactive.runtime.variant_toggles import (
    DEFAULT_MOTION_BLUR_SAMPLES,
    describe_variant,
    toggle_bead_policy,
    toggle_guides,
    toggle_kink_count,
    toggle_motion_blur,
)


def test_toggles_flip_and_restore():
    cfg = load_sketch_config()

    flipped = toggle_bead_policy(cfg)
    assert flipped.bead_policy is BeadPolicy.EXCLUSION_ZONE
    assert toggle_bead_policy(flipped).bead_policy is BeadPolicy.DRIP

    assert toggle_kink_count(cfg).kink_count == 1
    assert toggle_kink_count(toggle_kink_count(cfg)).kink_count == 2

    blurred = toggle_motion_blur(cfg)
    assert blurred.motion_blur_samples == DEFAULT_MOTION_BLUR_SAMPLES
    assert toggle_motion_blur(blurred).motion_blur_samples == 0

    assert toggle_guides(cfg).guides.enabled
    assert not toggle_guides(toggle_guides(cfg)).guides.enabled

    # 元のスナップショットは変わらない。
    assert cfg.bead_policy is BeadPolicy.DRIP
    assert cfg.kink_count == 2


def test_describe_variant():
    cfg = load_sketch_config()
    assert describe_variant(cfg) == "beads=drip kinks=2 blur=off guides=off"
    assert describe_variant(toggle_motion_blur(cfg)) == "beads=drip kinks=2 blur=4 guides=off"
