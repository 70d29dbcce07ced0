# どこで: `src/etchcard/interactive/runtime/recording_system.py`。
# 何を: R キー録画の開始/停止/フレーム書き込み（連番 PNG）を担当する。
# なぜ: PreviewWindowSystem の状態変数群を分離し、責務を明確化するため。

from __future__ import annotations

from pathlib import Path

from PIL import Image

from etchcard.export.frames import default_frame_filename
from etchcard.export.image import save_png


class FrameSequenceRecordingSystem:
    """連番 PNG 録画の最小ステートマシン。

    Notes
    -----
    ファイル名は録画開始からの通し番号（frame000.png, ...）。
    `max_frames` 枚に達したら自動で停止する。
    """

    def __init__(self, *, output_dir: Path, max_frames: int) -> None:
        if int(max_frames) <= 0:
            raise ValueError("max_frames は正の整数である必要がある")
        self._output_dir = Path(output_dir)
        self._max_frames = int(max_frames)
        self._written: int | None = None

    @property
    def is_recording(self) -> bool:
        """録画中なら True を返す。"""

        return self._written is not None

    @property
    def frames_written(self) -> int:
        return int(self._written or 0)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def start(self) -> None:
        """録画を開始する。"""

        if self._written is not None:
            return
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._written = 0
        print(f"Started frame recording: {self._output_dir} (max_frames={self._max_frames})")

    def write_frame(self, image: Image.Image) -> Path | None:
        """image を次の 1 フレームとして保存する。録画中でなければ何もしない。"""

        written = self._written
        if written is None:
            return None

        path = save_png(image, self._output_dir / default_frame_filename(written))
        self._written = written + 1
        if self._written >= self._max_frames:
            self.stop()
        return path

    def stop(self) -> None:
        """録画を終了する。"""

        written = self._written
        if written is None:
            return
        self._written = None
        print(f"Saved frames: {self._output_dir} (frames={written})")
