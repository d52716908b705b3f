# どこで: `src/lissagif/__main__.py`。
# 何を: `python -m lissagif` で CLI を起動する。

from __future__ import annotations

from lissagif.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
