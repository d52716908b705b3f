"""core.frame（強度グリッド → パレット index フレーム）をテスト。"""

from __future__ import annotations

import numpy as np

from lissagif.core.frame import build_frame, canvas_size, grid_to_frame
from lissagif.core.render_config import AnimationState


def test_canvas_size_is_asymmetric() -> None:
    assert canvas_size(10) == (21, 19)
    assert canvas_size(100) == (201, 199)


def test_grid_to_frame_transposes_and_crops() -> None:
    grid = np.arange(16, dtype=np.uint8).reshape(4, 4)  # size=2, [x, y]
    frame = grid_to_frame(grid, 2)

    assert frame.size == (5, 3)
    assert frame.indices.shape == (3, 5)
    for x in range(4):
        for y in range(3):
            assert frame.index_at(x, y) == int(grid[x, y])
    # グリッドにない右端の列は index 0
    assert not frame.indices[:, 4].any()
    assert not frame.indices.flags.writeable


def test_build_frame_scenario() -> None:
    state = AnimationState(xfreq=5.0, yfreq=4.0, xphase=0.0, yphase=0.0)
    frame = build_frame(10, state, cycles=2.0, res=0.01)

    assert frame.size == (21, 19)
    assert frame.indices.dtype == np.uint8
    # t=0 で曲線は原点（セル (scale, scale) = (8, 8)）を通る
    assert frame.index_at(8, 8) > 0
    assert int(frame.indices.max()) <= 15
    assert not frame.indices[:, 20].any()


def test_build_frame_is_deterministic() -> None:
    state = AnimationState(xfreq=3.0, yfreq=2.0, xphase=0.1, yphase=0.2)
    a = build_frame(12, state, cycles=1.5, res=0.005)
    b = build_frame(12, state, cycles=1.5, res=0.005)
    assert np.array_equal(a.indices, b.indices)


def test_build_frame_caps_at_palette_length() -> None:
    palette = ((0, 0, 0), (85, 85, 85), (170, 170, 170), (255, 255, 255))
    state = AnimationState(xfreq=5.0, yfreq=4.0, xphase=0.0, yphase=0.0)
    frame = build_frame(10, state, cycles=2.0, res=0.001, palette=palette)
    assert int(frame.indices.max()) == 3
