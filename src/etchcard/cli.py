"""
どこで: `src/etchcard/cli.py`。
何を: `etchcard` / `python -m etchcard` のコマンドライン（preview / frame / frames）を提供する。
なぜ: 対話プレビューと headless 書き出しを、同じ設定読み込み経路から呼べるようにするため。

例
--
    etchcard preview
    etchcard frame --frame 50 -o card.png
    etchcard frames --count 200 --out-dir data/output/frames/card
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from etchcard.core.errors import ConfigError
from etchcard.core.runtime_config import set_config_path
from etchcard.core.sketch_config import SketchConfig, load_sketch_config

_logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None:
        set_config_path(args.config)

    try:
        config = _load_config(args)
    except (ConfigError, FileNotFoundError, RuntimeError) as e:
        _logger.error("%s", e)
        return 2

    if args.command == "preview":
        from etchcard.api.runner import run

        run(config, fps=float(args.fps), start_frame=int(args.frame))
        return 0

    try:
        return _export(args, config)
    except ValueError as e:
        # 未対応の拡張子や count / scale の不正値（ConfigError も含む）。
        _logger.error("%s", e)
        return 2


def _export(args: argparse.Namespace, config: SketchConfig) -> int:
    from etchcard.api.export import Export
    from etchcard.export.image import default_png_output_path

    if args.command == "frame":
        out = Path(args.output) if args.output else default_png_output_path(config)
        fmt = "svg" if out.suffix.lower() == ".svg" else "png"
        export = Export(config, fmt, out, frame_index=int(args.frame), scale=args.scale)
        for path in export.paths:
            print(f"Saved {fmt.upper()}: {path}")
        return 0

    if args.command == "frames":
        from etchcard.core.output_paths import frames_dir_for_seed

        out_dir = Path(args.out_dir) if args.out_dir else frames_dir_for_seed(config.seed)
        export = Export(
            config,
            "frames",
            out_dir,
            frame_index=int(args.start),
            count=args.count,
            scale=args.scale,
        )
        print(f"Saved frames: {out_dir} (frames={len(export.paths)})")
        return 0

    raise AssertionError(f"unknown command: {args.command!r}")


def _load_config(args: argparse.Namespace) -> SketchConfig:
    config = load_sketch_config(args.sketch)
    if args.seed is not None:
        config = config.replace(seed=str(args.seed))
    return config


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="etchcard", description="etched line holiday card")
    p.add_argument("--config", default=None, help="実行時設定 config.yaml のパス")
    p.add_argument("--sketch", default=None, help="カード構成 YAML のパス（省略時は同梱既定）")
    p.add_argument("--seed", default=None, help="乱数シード文字列を上書きする")
    p.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出す")

    sub = p.add_subparsers(dest="command", required=True)

    preview = sub.add_parser("preview", help="pyglet ウィンドウでプレビューする")
    preview.add_argument("--fps", type=float, default=60.0, help="目標フレームレート")
    preview.add_argument("--frame", type=int, default=0, help="開始フレーム番号")

    frame = sub.add_parser("frame", help="1 フレームを PNG / SVG で保存する")
    frame.add_argument("--frame", type=int, default=0, help="フレーム番号")
    frame.add_argument("-o", "--output", default=None, help="出力パス（.png / .svg）")
    frame.add_argument("--scale", type=float, default=None, help="PNG のピクセル倍率")

    frames = sub.add_parser("frames", help="連番 PNG（frame000.png, ...）を保存する")
    frames.add_argument("--count", type=int, default=None, help="枚数（省略時は export.frames.count）")
    frames.add_argument("--start", type=int, default=0, help="開始フレーム番号")
    frames.add_argument("--out-dir", default=None, help="出力ディレクトリ")
    frames.add_argument("--scale", type=float, default=None, help="ピクセル倍率")

    return p.parse_args(argv)


__all__ = ["main"]
