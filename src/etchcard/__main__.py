# どこで: `src/etchcard/__main__.py`。
# 何を: `python -m etchcard` のエントリポイント。

from __future__ import annotations

from etchcard.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
