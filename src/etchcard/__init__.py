# どこで: `src/etchcard/__init__.py`。
# 何を: ルート `etchcard` パッケージを定義する。
# なぜ: import 起点を `etchcard` に統一するため。

from __future__ import annotations

from etchcard.api import Export, run
from etchcard.core.errors import ConfigError
from etchcard.core.sketch_config import SketchConfig, load_sketch_config

__all__ = ["ConfigError", "Export", "SketchConfig", "load_sketch_config", "run"]
