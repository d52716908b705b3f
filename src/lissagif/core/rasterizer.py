# どこで: `src/lissagif/core/rasterizer.py`。
# 何を: 連続座標の 1 点を強度グリッドの 3x3 近傍へ加算する簡易アンチエイリアス（splat）を提供する。
# なぜ: 被覆率計算を使わず、サブピクセルずらしの 9 タップで線の滲みを安く近似するため。

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[import-untyped]

# 9 タップのサブピクセルオフセット。整数に近い座標では隣接セルへ散る。
SPLAT_OFFSET = 0.55


def new_intensity_grid(size: int) -> np.ndarray:
    """`2*size` 四方のゼロ初期化された強度グリッドを返す。"""

    n = 2 * int(size)
    if n <= 0:
        raise ValueError(f"size は正の値である必要がある: got={size!r}")
    return np.zeros((n, n), dtype=np.uint8)


@njit(cache=True)  # type: ignore[misc]
def paint(x: float, y: float, scale: int, grid: np.ndarray, max_value: int) -> None:
    """単位円上の点 (x, y) を grid へ 9 タップで加算する。

    Parameters
    ----------
    x, y : float
        [-1, 1] の座標。
    scale : int
        グリッド空間への拡大率。原点はセル (scale, scale) に置く。
    grid : np.ndarray
        `[x, y]` で索引する 2 次元の強度グリッド（in-place で更新する）。
    max_value : int
        飽和上限。セルの値はこれを超えない。

    Notes
    -----
    - セル座標は `scale + int(px + dx)`。int は 0 方向への切り捨てで、floor ではない。
      これは出力の見た目を決める数値仕様なので変えない。
    - 範囲外のタップは捨てる（端へのクランプはしない）。
    """
    px = x * scale
    py = y * scale
    nx = grid.shape[0]
    ny = grid.shape[1]
    for i in range(3):
        dx = (i - 1) * SPLAT_OFFSET
        ix = scale + int(px + dx)
        if ix < 0 or ix >= nx:
            continue
        for j in range(3):
            dy = (j - 1) * SPLAT_OFFSET
            iy = scale + int(py + dy)
            if iy < 0 or iy >= ny:
                continue
            v = grid[ix, iy] + 1
            grid[ix, iy] = v if v < max_value else max_value


__all__ = ["SPLAT_OFFSET", "new_intensity_grid", "paint"]
