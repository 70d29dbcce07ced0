"""
どこで: `src/etchcard/api/export.py`。
何を: ヘッドレス export の公開導線 `Export` を提供する。
なぜ: 対話ウィンドウを立ち上げずに、カードの 1 フレーム（または 1 周期の連番）を保存できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from etchcard.core.assets import AssetBundle
from etchcard.core.sketch_config import SketchConfig
from etchcard.export.frames import export_frames
from etchcard.export.image import export_image
from etchcard.export.svg import export_svg


class Export:
    """カードのフレームをファイルへ書き出す。"""

    def __init__(
        self,
        config: SketchConfig,
        fmt: str,
        path: str | Path,
        *,
        frame_index: int = 0,
        count: int | None = None,
        scale: float | None = None,
        assets: AssetBundle | None = None,
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        config : SketchConfig
            カード構成。
        fmt : str
            出力フォーマット。`"svg"`, `"png"`（`"image"`）, `"frames"` を受け付ける。
        path : str or Path
            出力先パス。`"frames"` の場合は出力ディレクトリ。
        frame_index : int
            出力するフレーム番号（`"frames"` では開始番号）。
        count : int or None
            `"frames"` の枚数。None なら `export.frames.count`。
        scale : float or None
            PNG のピクセル倍率。None なら `export.png.scale`（`"frames"` では 1.0）。
        assets : AssetBundle or None
            読み込み済みアセット。None なら config から読み込む。
        """
        self.path = Path(path)
        self.fmt = str(fmt).lower().strip()
        self.assets = assets if assets is not None else AssetBundle.load(config)
        self.paths: list[Path] = []

        if self.fmt == "svg":
            self.paths = [export_svg(config, self.path, frame_index=frame_index, assets=self.assets)]
            return
        if self.fmt in {"image", "png"}:
            self.paths = [
                export_image(
                    config,
                    self.path,
                    frame_index=frame_index,
                    assets=self.assets,
                    scale=scale,
                )
            ]
            return
        if self.fmt == "frames":
            self.paths = export_frames(
                config,
                self.path,
                count=count,
                start=frame_index,
                assets=self.assets,
                scale=1.0 if scale is None else float(scale),
            )
            return

        raise ValueError(f"未対応の export fmt: {fmt!r}")
