"""
どこで: `src/lissagif/cli.py`。
何を: コマンドライン引数と config.yaml から RenderConfig を組み立て、リサージュ GIF を書き出す。
なぜ: 描画コアはフラグを知らない純粋な処理に保ち、引数解釈と I/O をここへ集めるため。
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from lissagif.core.animation import render
from lissagif.core.render_config import RenderConfig
from lissagif.core.runtime_config import runtime_config, set_config_path
from lissagif.errors import LissagifError, RenderConfigError
from lissagif.export.gif import encode_gif, open_sink
from lissagif.logging_setup import setup_default_logging

_logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

# (フラグ名, 型, help)。既定値は config.yaml（同梱 default_config.yaml）から取る。
_RENDER_FLAGS: tuple[tuple[str, type, str], ...] = (
    ("outfile", str, "出力 GIF のファイル名"),
    ("nframes", int, "描画するフレーム数"),
    ("size", int, "画像の半径（px）"),
    ("delay", int, "フレーム間の delay（1/100 秒）"),
    ("cycles", float, "曲線のストロークの長さ（周回数）"),
    ("xfreq", float, "X 周波数"),
    ("xfreq_inc", float, "フレームごとの X 周波数の増分"),
    ("yfreq", float, "Y 周波数"),
    ("yfreq_inc", float, "フレームごとの Y 周波数の増分"),
    ("xphase", float, "X 位相"),
    ("xphase_inc", float, "フレームごとの X 位相の増分"),
    ("yphase", float, "Y 位相"),
    ("yphase_inc", float, "フレームごとの Y 位相の増分"),
    ("res", float, "角度方向の分解能"),
)


class ProgressPrinter:
    """`Rendered frame i of n` を同じ行に上書き表示する進捗表示。"""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def __call__(self, index: int, total: int) -> None:
        self._stream.write(f"\rRendered frame {int(index)} of {int(total)}")
        self._stream.flush()

    def finish(self, total: int) -> None:
        self._stream.write(f"\rRendered frame {int(total)} of {int(total)}\n")
        self._stream.flush()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="lissagif",
        description="リサージュ曲線のアニメーション GIF を描画する。",
    )
    for name, typ, help_text in _RENDER_FLAGS:
        p.add_argument(f"--{name}", type=typ, default=None, help=help_text)
    p.add_argument("--config", default=None, help="config.yaml のパス（既定の探索より優先）")
    p.add_argument("--workers", type=int, default=None, help="描画プロセス数（1 なら逐次）")
    p.add_argument("--log-level", default=None, help="ログレベル（DEBUG, INFO, WARNING, ...）")
    p.add_argument("--quiet", action="store_true", help="進捗表示を出さない")
    return p.parse_args(argv)


def build_render_config(args: argparse.Namespace, base: RenderConfig) -> RenderConfig:
    """base に、指定されたフラグだけを上書きした RenderConfig を返す。"""

    overrides: dict[str, Any] = {}
    for name, _typ, _help in _RENDER_FLAGS:
        value = getattr(args, name, None)
        if value is None:
            continue
        overrides[name] = Path(value) if name == "outfile" else value
    return dataclasses.replace(base, **overrides)


def main(argv: list[str] | None = None) -> int:
    """CLI エントリポイント。終了コードを返す。"""

    args = _parse_args(argv)
    set_config_path(args.config)

    try:
        rc = runtime_config()
    except (OSError, RuntimeError, ValueError) as exc:
        setup_default_logging(args.log_level or "INFO")
        _logger.error("設定を読み込めません: %s", exc)
        return EXIT_CONFIG_ERROR

    setup_default_logging(args.log_level or rc.log_level)

    try:
        config = build_render_config(args, rc.render)
    except RenderConfigError as exc:
        _logger.error("描画設定が不正です: %s", exc)
        return EXIT_CONFIG_ERROR

    workers = rc.workers if args.workers is None else int(args.workers)
    if workers < 1:
        _logger.error("--workers は 1 以上である必要がある: got=%d", workers)
        return EXIT_CONFIG_ERROR

    outfile = config.outfile
    try:
        sink = open_sink(outfile)
    except LissagifError as exc:
        _logger.error("%s", exc)
        return EXIT_FAILURE

    progress = None if args.quiet else ProgressPrinter(sys.stderr)
    saved = False
    try:
        with sink:
            animation = render(config, progress=progress, workers=workers)
            if progress is not None:
                progress.finish(config.nframes)
            encode_gif(animation, sink)
        saved = True
    except LissagifError as exc:
        _logger.error("GIF を保存できません: %s", exc)
        return EXIT_FAILURE
    finally:
        # 途中までのファイルは残さない（想定外の例外や Ctrl-C でも）。
        if not saved:
            outfile.unlink(missing_ok=True)

    _logger.info("Saved %s", outfile)
    return EXIT_OK


__all__ = ["EXIT_CONFIG_ERROR", "EXIT_FAILURE", "EXIT_OK", "ProgressPrinter", "build_render_config", "main"]
