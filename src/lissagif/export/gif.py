"""
どこで: `src/lissagif/export/gif.py`。
何を: Animation（パレット index フレーム列 + delay + ループ回数）を GIF89a としてエンコードし保存する。
なぜ: 描画コアとファイル形式を分離し、エンコード失敗時に途中までのファイルを残さないため。
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

from PIL import GifImagePlugin, Image

from lissagif.core.animation import Animation
from lissagif.core.frame import Frame
from lissagif.core.palette import PALETTE, RGB255, palette_bytes
from lissagif.errors import AnimationSinkError, GifEncodeError

_logger = logging.getLogger(__name__)


def _check_animation(animation: Animation) -> tuple[int, int]:
    frames = animation.frames
    if not frames:
        raise GifEncodeError("GIF には 1 枚以上のフレームが必要")
    if len(animation.delays) != len(frames):
        raise GifEncodeError(
            f"delay の数がフレーム数と一致しません: frames={len(frames)}, delays={len(animation.delays)}"
        )
    size = frames[0].size
    for i, frame in enumerate(frames):
        if frame.size != size:
            raise GifEncodeError(
                f"フレーム寸法が一致しません: index={i}, got={frame.size}, expected={size}"
            )
    for i, d in enumerate(animation.delays):
        if int(d) < 0 or int(d) > 0xFFFF:
            raise GifEncodeError(f"delay は 0..65535 である必要がある: index={i}, got={d!r}")
    if int(animation.loop_count) < 0 or int(animation.loop_count) > 0xFFFF:
        raise GifEncodeError(f"loop_count は 0..65535 である必要がある: got={animation.loop_count!r}")
    return size


def frame_to_image(frame: Frame, palette: Sequence[RGB255] = PALETTE) -> Image.Image:
    """Frame を Pillow の "P" モード画像に変換する。"""

    img = Image.frombytes("P", frame.size, frame.indices.tobytes())
    img.putpalette(palette_bytes(palette))
    return img


def _gif_chunks(
    images: Sequence[Image.Image],
    delays: Sequence[int],
    loop_count: int,
    palette: bytes,
) -> list[bytes]:
    """ヘッダ → フレームごとのブロック → trailer の順にバイト列を並べる。

    Notes
    -----
    `Image.save(save_all=True)` は連続する同一フレームを 1 枚にまとめるため使わない。
    フレーム 1 枚につき image descriptor 1 つ（delay > 0 なら graphic control extension 付き）を書く。
    """

    info = {"loop": int(loop_count), "duration": int(delays[0]) * 10, "optimize": False}
    header, _used = GifImagePlugin.getheader(images[0], palette, info)
    chunks: list[bytes] = list(header)
    for img, d in zip(images, delays):
        chunks.extend(GifImagePlugin.getdata(img, offset=(0, 0), duration=int(d) * 10))
    chunks.append(b";")
    return chunks


def encode_gif(
    animation: Animation,
    out: BinaryIO,
    *,
    palette: Sequence[RGB255] = PALETTE,
) -> None:
    """animation を GIF として out へ書き込む。

    Notes
    -----
    - delay は 1/100 秒単位のまま保存される（Pillow の duration はミリ秒なので 10 倍して渡す）。
    - 同一内容のフレームが続いても、Animation のフレーム数と GIF の画像数は一致する。
    - エンコードはメモリ上で完了させ、成功した場合のみ out へ 1 回書き込む。

    Raises
    ------
    GifEncodeError
        フレームが空、寸法/delay 数の不一致、または Pillow が失敗した場合。
    AnimationSinkError
        out への書き込みに失敗した場合。
    """

    _check_animation(animation)
    images = [frame_to_image(frame, palette) for frame in animation.frames]
    try:
        chunks = _gif_chunks(images, animation.delays, animation.loop_count, palette_bytes(palette))
    except Exception as exc:
        raise GifEncodeError(f"GIF のエンコードに失敗しました: {exc}") from exc

    data = b"".join(chunks)
    try:
        out.write(data)
    except OSError as exc:
        raise AnimationSinkError(f"GIF の書き込みに失敗しました: {exc}") from exc
    _logger.debug("Encoded %d frame(s) into %d bytes", len(images), len(data))


def gif_bytes(animation: Animation, *, palette: Sequence[RGB255] = PALETTE) -> bytes:
    """animation を GIF のバイト列として返す。"""

    buf = io.BytesIO()
    encode_gif(animation, buf, palette=palette)
    return buf.getvalue()


def open_sink(path: str | Path) -> BinaryIO:
    """出力ファイルを書き込み用に開いて返す（親ディレクトリは作成する）。

    Raises
    ------
    AnimationSinkError
        ファイルを作成/オープンできない場合。
    """

    _path = Path(path)
    try:
        _path.parent.mkdir(parents=True, exist_ok=True)
        return open(_path, "wb")
    except OSError as exc:
        raise AnimationSinkError(f"出力ファイルを開けません: {_path}: {exc}") from exc


def write_gif(
    animation: Animation,
    path: str | Path,
    *,
    palette: Sequence[RGB255] = PALETTE,
) -> Path:
    """animation を GIF ファイルとして path に保存し、そのパスを返す。

    Notes
    -----
    エンコードに失敗した場合はファイルを作らない。
    """

    _path = Path(path)
    data = gif_bytes(animation, palette=palette)
    with open_sink(_path) as fh:
        try:
            fh.write(data)
        except OSError as exc:
            raise AnimationSinkError(f"GIF の書き込みに失敗しました: {_path}: {exc}") from exc
    _logger.info("Saved GIF: %s (%d bytes)", _path, len(data))
    return _path


__all__ = ["encode_gif", "frame_to_image", "gif_bytes", "open_sink", "write_gif"]
