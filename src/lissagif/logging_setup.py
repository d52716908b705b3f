"""
どこで: `src/lissagif/logging_setup.py`。
何を: CLI 向けの最小ロギング設定を 1 度だけ適用するヘルパーを提供する。
なぜ: 各モジュールは `logging.getLogger(__name__)` を使うだけにし、設定はエントリポイントに寄せるため。
"""

from __future__ import annotations

import logging


def setup_default_logging(level: int | str = "INFO") -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - CLI から呼び出す想定
    """
    if isinstance(level, str):
        lvl = getattr(logging, level.strip().upper(), logging.INFO)
        if not isinstance(lvl, int):
            lvl = logging.INFO
    else:
        lvl = int(level)

    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


__all__ = ["setup_default_logging"]
