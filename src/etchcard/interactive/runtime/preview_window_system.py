# どこで: `src/etchcard/interactive/runtime/preview_window_system.py`。
# 何を: カードの各フレームをラスタ描画し、プレビューウィンドウへ転送するサブシステムを提供する。
# なぜ: `src/etchcard/api/runner.py` の `run()` を「配線」に寄せ、描画と保存の責務を独立させるため。

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pyglet
from PIL import Image
from pyglet.window import key

from etchcard.core.assets import AssetBundle
from etchcard.core.output_paths import frames_dir_for_seed, output_path_for_seed
from etchcard.core.runtime_config import runtime_config
from etchcard.core.sketch_config import SketchConfig
from etchcard.export.image import default_png_output_path, export_image
from etchcard.export.svg import export_svg
from etchcard.interactive.draw_window import create_preview_window
from etchcard.interactive.runtime.frame_clock import FrameCounterClock
from etchcard.interactive.runtime.recording_system import FrameSequenceRecordingSystem
from etchcard.interactive.runtime.variant_toggles import (
    describe_variant,
    toggle_bead_policy,
    toggle_guides,
    toggle_kink_count,
    toggle_motion_blur,
)
from etchcard.render.frame_renderer import render_frame

_logger = logging.getLogger(__name__)

_TOGGLES: dict[int, Callable[[SketchConfig], SketchConfig]] = {
    key.D: toggle_bead_policy,
    key.K: toggle_kink_count,
    key.B: toggle_motion_blur,
    key.G: toggle_guides,
}


def image_to_pyglet(image: Image.Image) -> pyglet.image.ImageData:
    """Pillow の RGBA 画像を pyglet の ImageData へ変換して返す。"""

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    w, h = rgba.size
    # pyglet は下→上の行順なので、負の pitch で上→下の並びを渡す。
    return pyglet.image.ImageData(w, h, "RGBA", rgba.tobytes(), pitch=-w * 4)


class PreviewWindowSystem:
    """プレビュー（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        config: SketchConfig,
        *,
        assets: AssetBundle | None = None,
        window_position: tuple[int, int] | None = None,
    ) -> None:
        """ウィンドウとアセットを初期化する。アセットの読み込みは最初のフレームより前に終える。"""

        self._config = config
        self._assets = assets if assets is not None else AssetBundle.load(config)

        cfg = runtime_config()
        pos = window_position if window_position is not None else cfg.window_pos
        self.window = create_preview_window(config.canvas_size, position=pos)
        self._update_caption()

        self._svg_output_path = output_path_for_seed(kind="svg", ext="svg", seed=config.seed)
        self._png_output_path = default_png_output_path(config)
        self._recording = FrameSequenceRecordingSystem(
            output_dir=frames_dir_for_seed(config.seed),
            max_frames=int(cfg.frame_count),
        )
        self._clock = FrameCounterClock(total_steps=config.total_steps)
        self._pending_png_save = False
        self.window.push_handlers(on_key_press=self._on_key_press)

    @property
    def config(self) -> SketchConfig:
        return self._config

    @property
    def clock(self) -> FrameCounterClock:
        return self._clock

    def _update_caption(self) -> None:
        self.window.set_caption(f"etchcard [{describe_variant(self._config)}]")

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        if symbol == key.S:
            try:
                path = self.save_svg()
                print(f"Saved SVG: {path}")
            except Exception as e:
                _logger.exception("Failed to save SVG")
                print(f"Failed to save SVG: {e}")
            return
        if symbol == key.P:
            self._pending_png_save = True
            return
        if symbol == key.R:
            if not self._recording.is_recording:
                self._recording.start()
            else:
                self._recording.stop()
            return
        if symbol == key.SPACE:
            paused = self._clock.toggle_pause()
            _logger.info("Preview %s at frame %d", "paused" if paused else "resumed", self._clock.frame_index)
            return
        toggle = _TOGGLES.get(symbol)
        if toggle is not None:
            self._config = toggle(self._config)
            self._update_caption()
            _logger.info("Variant: %s", describe_variant(self._config))

    def save_svg(self) -> Path:
        """現在のフレームを SVG として保存し、保存先パスを返す。"""
        return export_svg(
            self._config,
            self._svg_output_path,
            frame_index=self._clock.frame_index,
            assets=self._assets,
        )

    def save_png(self) -> Path:
        """現在のフレームを高解像度 PNG として保存し、保存先パスを返す。"""
        return export_image(
            self._config,
            self._png_output_path,
            frame_index=self._clock.frame_index,
            assets=self._assets,
        )

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        image = render_frame(self._config, self._clock.frame_index, assets=self._assets)

        self.window.clear()
        image_to_pyglet(image).blit(0, 0)

        if self._recording.is_recording:
            self._recording.write_frame(image)

        if self._pending_png_save:
            self._pending_png_save = False
            try:
                png_path = self.save_png()
                print(f"Saved PNG: {png_path}")
            except Exception as e:
                _logger.exception("Failed to save PNG")
                print(f"Failed to save PNG: {e}")

    def advance(self) -> None:
        """フレームカウンタを 1 つ進める。"""

        self._clock.tick()

    def close(self) -> None:
        """録画を止めてウィンドウを閉じる。"""

        if self._recording.is_recording:
            try:
                self._recording.stop()
            except Exception:
                _logger.exception("Failed to stop frame recording")
        self.window.close()
