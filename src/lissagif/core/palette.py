# どこで: `src/lissagif/core/palette.py`。
# 何を: フレームで共有する 16 色グラデーションパレットと変換ユーティリティを定義する。
# なぜ: 強度グリッドの値をそのままパレット index として使うため、色数と強度上限を 1 箇所で固定する。

from __future__ import annotations

from collections.abc import Sequence

RGB255 = tuple[int, int, int]

# imgur グレー → 白 の 16 段グラデーション。index 0 が最暗、末尾が白。
PALETTE: tuple[RGB255, ...] = (
    (0x2C, 0x2F, 0x34),
    (0x3B, 0x3E, 0x42),
    (0x4A, 0x4D, 0x50),
    (0x59, 0x5C, 0x5E),
    (0x68, 0x6B, 0x6C),
    (0x77, 0x7A, 0x7A),
    (0x86, 0x89, 0x88),
    (0x95, 0x98, 0x96),
    (0xA4, 0xA7, 0x94),
    (0xB3, 0xB6, 0xA2),
    (0xC2, 0xC5, 0xB0),
    (0xD1, 0xD4, 0xBE),
    (0xE0, 0xE3, 0xCC),
    (0xFF, 0xF2, 0xDA),
    (0xFF, 0xF1, 0xE8),
    (0xFF, 0xFF, 0xFF),
)

# 強度グリッドの飽和上限。PALETTE の最終 index と一致する。
MAX_INTENSITY = len(PALETTE) - 1


def max_intensity(palette: Sequence[RGB255] = PALETTE) -> int:
    """palette で表現できる最大強度（= 最終 index）を返す。"""

    n = len(palette)
    if n < 1:
        raise ValueError("palette は 1 色以上である必要がある")
    if n > 256:
        raise ValueError(f"palette は 256 色以下である必要がある: got={n}")
    return n - 1


def palette_bytes(palette: Sequence[RGB255] = PALETTE) -> bytes:
    """palette を `r, g, b, r, g, b, ...` の平坦なバイト列にして返す。

    Notes
    -----
    Pillow の `Image.putpalette` にそのまま渡せる形式。
    """

    out = bytearray()
    for color in palette:
        try:
            r, g, b = color
        except Exception as exc:
            raise ValueError(f"palette の色は (r, g, b) である必要がある: {color!r}") from exc
        for v in (r, g, b):
            iv = int(v)
            if iv < 0 or iv > 255:
                raise ValueError(f"palette の色成分は 0..255 である必要がある: {color!r}")
            out.append(iv)
    return bytes(out)


__all__ = ["MAX_INTENSITY", "PALETTE", "RGB255", "max_intensity", "palette_bytes"]
