# どこで: `src/lissagif/core/sampler.py`。
# 何を: リサージュ曲線 `(sin(t*xfreq+xphase), sin(t*yfreq+yphase))` を t について掃引する。
# なぜ: 1 フレームぶんのサンプル列を、遅延列挙（検証用）と Numba カーネル（描画用）の両方で提供するため。

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from lissagif.core.rasterizer import paint
from lissagif.errors import RenderConfigError


def _check_sweep(cycles: float, res: float) -> tuple[float, float]:
    c = float(cycles)
    r = float(res)
    if not math.isfinite(r) or r <= 0.0:
        raise RenderConfigError(f"res は正の値である必要がある: got={res!r}")
    if not math.isfinite(c):
        raise RenderConfigError(f"cycles は有限の数値である必要がある: got={cycles!r}")
    return c, r


def sweep_limit(cycles: float) -> float:
    """t の上限 `cycles*2π`（この値は含まない）を返す。"""

    return float(cycles) * 2 * math.pi


def iter_curve_samples(
    cycles: float,
    xfreq: float,
    yfreq: float,
    xphase: float,
    yphase: float,
    res: float,
) -> Iterator[tuple[float, float]]:
    """t = 0, res, 2*res, ... (< cycles*2π) の曲線上の点 (x, y) を順に返す。

    Notes
    -----
    - t は加算で進める（`t += res`）。`sweep_curve` と同じ列になる。
    - 呼び出すたびに新しい掃引を始める。
    - res <= 0 は反復を始める前に RenderConfigError とする。
    """

    c, r = _check_sweep(cycles, res)
    return _iter_samples(sweep_limit(c), float(xfreq), float(yfreq), float(xphase), float(yphase), r)


def _iter_samples(
    limit: float, xfreq: float, yfreq: float, xphase: float, yphase: float, res: float
) -> Iterator[tuple[float, float]]:
    t = 0.0
    while t < limit:
        yield math.sin(t * xfreq + xphase), math.sin(t * yfreq + yphase)
        t += res


def curve_sample_count(cycles: float, res: float) -> int:
    """1 回の掃引で生成されるサンプル数を返す。"""

    c, r = _check_sweep(cycles, res)
    return int(_count_samples_numba(sweep_limit(c), r))


def sweep_curve(
    grid: np.ndarray,
    *,
    cycles: float,
    xfreq: float,
    yfreq: float,
    xphase: float,
    yphase: float,
    res: float,
    scale: int,
    max_value: int,
) -> int:
    """曲線を 1 回掃引し、各サンプルを `paint` で grid へ加算する。

    Returns
    -------
    int
        加算したサンプル数。
    """

    c, r = _check_sweep(cycles, res)
    return int(
        _sweep_numba(
            grid,
            sweep_limit(c),
            float(xfreq),
            float(yfreq),
            float(xphase),
            float(yphase),
            r,
            int(scale),
            int(max_value),
        )
    )


@njit(cache=True)  # type: ignore[misc]
def _count_samples_numba(limit: float, res: float) -> int:
    t = 0.0
    n = 0
    while t < limit:
        n += 1
        t += res
    return n


@njit(cache=True)  # type: ignore[misc]
def _sweep_numba(
    grid: np.ndarray,
    limit: float,
    xfreq: float,
    yfreq: float,
    xphase: float,
    yphase: float,
    res: float,
    scale: int,
    max_value: int,
) -> int:
    """`_iter_samples` + `paint` と同じ演算順で掃引する（Numba 版）。"""
    t = 0.0
    n = 0
    while t < limit:
        x = math.sin(t * xfreq + xphase)
        y = math.sin(t * yfreq + yphase)
        paint(x, y, scale, grid, max_value)
        t += res
        n += 1
    return n


__all__ = ["curve_sample_count", "iter_curve_samples", "sweep_curve", "sweep_limit"]
