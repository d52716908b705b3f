# どこで: `src/lissagif/core/frame.py`。
# 何を: 1 フレームぶんの曲線を強度グリッドへ描き、パレット index 画像 `Frame` に変換する。
# なぜ: フレーム生成をパラメータだけで決まる純粋関数にし、逐次でも並列でも同じ結果にするため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from lissagif.core.palette import PALETTE, RGB255, max_intensity
from lissagif.core.rasterizer import new_intensity_grid
from lissagif.core.render_config import AnimationState
from lissagif.core.sampler import sweep_curve


@dataclass(frozen=True, slots=True, eq=False)
class Frame:
    """パレット index で表した 1 フレーム。

    Notes
    -----
    `indices` は shape `(height, width)` の読み取り専用 uint8 配列。
    """

    indices: np.ndarray

    @property
    def width(self) -> int:
        return int(self.indices.shape[1])

    @property
    def height(self) -> int:
        return int(self.indices.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) を返す。"""

        return self.width, self.height

    def index_at(self, x: int, y: int) -> int:
        """画素 (x, y) のパレット index を返す。"""

        return int(self.indices[int(y), int(x)])


def canvas_size(size: int) -> tuple[int, int]:
    """`size` に対するフレームの (width, height) を返す。

    Notes
    -----
    グリッド（`2*size` 四方）より幅が 1 列広く、高さが 1 行低い。
    既存出力との互換のため、この非対称な枠取りは変えない。
    """

    s = int(size)
    return 2 * s + 1, 2 * s - 1


def grid_to_frame(grid: np.ndarray, size: int) -> Frame:
    """`[x, y]` 索引の強度グリッドを Frame に変換する。

    Notes
    -----
    - 画素 (x, y) の index は `grid[x, y]`。
    - グリッドにない右端の列は index 0 のまま、キャンバス外になる最下行は捨てる。
    """

    width, height = canvas_size(size)
    out = np.zeros((height, width), dtype=np.uint8)
    cols = min(int(grid.shape[0]), width)
    rows = min(int(grid.shape[1]), height)
    out[:rows, :cols] = grid[:cols, :rows].T
    out.setflags(write=False)
    return Frame(indices=out)


def build_frame(
    size: int,
    state: AnimationState,
    *,
    cycles: float,
    res: float,
    palette: Sequence[RGB255] = PALETTE,
) -> Frame:
    """`state` の曲線を 1 回掃引して Frame を返す。

    Parameters
    ----------
    size : int
        画像の半径。グリッドは `2*size` 四方、拡大率は `size - 2`。
    state : AnimationState
        このフレームの周波数と位相。
    cycles : float
        掃引する周回数。
    res : float
        t の刻み。
    palette : Sequence[RGB255]
        強度上限は `len(palette) - 1`。
    """

    grid = new_intensity_grid(size)
    sweep_curve(
        grid,
        cycles=cycles,
        xfreq=state.xfreq,
        yfreq=state.yfreq,
        xphase=state.xphase,
        yphase=state.yphase,
        res=res,
        scale=int(size) - 2,
        max_value=max_intensity(palette),
    )
    return grid_to_frame(grid, size)


__all__ = ["Frame", "build_frame", "canvas_size", "grid_to_frame"]
