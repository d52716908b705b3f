"""core.render_config（RenderConfig / AnimationState）をテスト。"""

from __future__ import annotations

import math
from pathlib import Path

import pytest

from lissagif.core.render_config import (
    AnimationState,
    RenderConfig,
    frame_state,
    frame_states,
)
from lissagif.errors import RenderConfigError


def test_defaults_match_command_line_defaults() -> None:
    cfg = RenderConfig()
    assert cfg.outfile == Path("out.gif")
    assert cfg.nframes == 1
    assert cfg.size == 100
    assert cfg.delay == 8
    assert cfg.cycles == 2.0
    assert (cfg.xfreq, cfg.yfreq) == (5.0, 4.0)
    assert (cfg.xphase, cfg.yphase) == (0.0, 0.0)
    assert cfg.yphase_inc == 0.01
    assert cfg.res == 0.0001
    assert cfg.grid_size == 200
    assert cfg.canvas_size == (201, 199)


def test_outfile_is_normalized_to_path() -> None:
    cfg = RenderConfig(outfile="anim.gif")  # type: ignore[arg-type]
    assert cfg.outfile == Path("anim.gif")


def test_whole_float_counts_are_normalized_to_int() -> None:
    cfg = RenderConfig(size=10.0, nframes=2.0, delay=5.0)  # type: ignore[arg-type]
    assert (cfg.size, cfg.nframes, cfg.delay) == (10, 2, 5)
    assert type(cfg.size) is int
    assert type(cfg.nframes) is int
    assert type(cfg.delay) is int
    assert cfg.canvas_size == (21, 19)


def test_fractional_size_is_rejected() -> None:
    with pytest.raises(RenderConfigError):
        RenderConfig(size=10.5)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"size": 0},
        {"size": -3},
        {"size": math.inf},
        {"nframes": math.nan},
        {"nframes": -1},
        {"res": 0.0},
        {"res": -0.001},
        {"res": math.nan},
        {"cycles": 0.0},
        {"delay": -1},
        {"delay": 70000},
        {"xfreq": math.inf},
        {"yphase_inc": math.nan},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict) -> None:
    with pytest.raises(RenderConfigError):
        RenderConfig(**kwargs)


def test_render_config_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        RenderConfig(res=0.0)


def test_frame_state_is_closed_form() -> None:
    cfg = RenderConfig(
        nframes=10,
        xfreq=5.0,
        xfreq_inc=0.5,
        yfreq=4.0,
        yfreq_inc=-0.25,
        xphase=1.0,
        xphase_inc=0.1,
        yphase=0.0,
        yphase_inc=0.01,
    )
    s = frame_state(cfg, 3)
    assert s.xfreq == 5.0 + 3 * 0.5
    assert s.yfreq == 4.0 + 3 * -0.25
    assert s.xphase == 1.0 + 3 * 0.1
    assert s.yphase == 0.0 + 3 * 0.01
    assert frame_state(cfg, 0) == AnimationState(xfreq=5.0, yfreq=4.0, xphase=1.0, yphase=0.0)


def test_frame_states_do_not_depend_on_order() -> None:
    cfg = RenderConfig(nframes=5, yphase_inc=0.2, xfreq_inc=0.1)
    forward = frame_states(cfg)
    backward = [frame_state(cfg, i) for i in reversed(range(5))]
    assert len(forward) == 5
    assert forward == list(reversed(backward))


def test_frame_states_empty_for_zero_frames() -> None:
    assert frame_states(RenderConfig(nframes=0)) == []


def test_frame_state_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        frame_state(RenderConfig(), -1)
