"""
どこで: `src/lissagif/core/animation.py`。
何を: RenderConfig から全フレームを描画し、フレーム列・delay・ループ回数をまとめた Animation を返す。
なぜ: フレームごとのパラメータ更新と進捗通知を 1 箇所に集め、エンコーダには完成した列だけを渡すため。
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from lissagif.core.frame import Frame, build_frame
from lissagif.core.mp_render import iter_frames_mp
from lissagif.core.render_config import RenderConfig, frame_states

_logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True, slots=True, eq=False)
class Animation:
    """エンコード前のアニメーション。

    Attributes
    ----------
    frames : tuple[Frame, ...]
        表示順のフレーム列。
    delays : tuple[int, ...]
        frames と同じ長さの delay 列（1/100 秒）。
    loop_count : int
        GIF の NETSCAPE ループ回数（0 は無限）。
    """

    frames: tuple[Frame, ...]
    delays: tuple[int, ...]
    loop_count: int

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def canvas_size(self) -> tuple[int, int] | None:
        """先頭フレームの (width, height) を返す。空なら None。"""

        if not self.frames:
            return None
        return self.frames[0].size


def iter_frames(config: RenderConfig, *, workers: int = 1) -> Iterator[Frame]:
    """config の全フレームを表示順に描画して返す。

    Notes
    -----
    - フレーム i のパラメータは `base + i*inc`（`frame_states`）。
    - workers >= 2 なら spawn プロセスプールで並列描画する。結果は逐次と同一。
    """

    n_worker = int(workers)
    if n_worker < 1:
        raise ValueError(f"workers は 1 以上である必要がある: got={workers!r}")

    states = frame_states(config)
    if n_worker >= 2 and len(states) >= 2:
        for frame in iter_frames_mp(
            config.size,
            states,
            cycles=config.cycles,
            res=config.res,
            n_worker=n_worker,
        ):
            # pickle 経由で戻った配列は書き込み可能になっている。
            frame.indices.setflags(write=False)
            yield frame
        return

    for state in states:
        yield build_frame(config.size, state, cycles=config.cycles, res=config.res)


def render(
    config: RenderConfig,
    *,
    progress: ProgressCallback | None = None,
    workers: int = 1,
) -> Animation:
    """config に従ってアニメーションを描画して返す。

    Parameters
    ----------
    config : RenderConfig
        描画設定。
    progress : Callable[[int, int], None] or None
        各フレームの描画後に `(frame_index, nframes)` で呼ばれる。
    workers : int
        描画プロセス数。1 なら同一プロセスで逐次描画する。

    Returns
    -------
    Animation
        `nframes` 枚のフレームと同数の delay、`loop_count = nframes`。
    """

    total = int(config.nframes)
    _logger.info(
        "Rendering %d frame(s): size=%d cycles=%g res=%g workers=%d",
        total,
        int(config.size),
        float(config.cycles),
        float(config.res),
        int(workers),
    )
    started = time.perf_counter()

    frames: list[Frame] = []
    delays: list[int] = []
    for i, frame in enumerate(iter_frames(config, workers=workers)):
        frames.append(frame)
        delays.append(int(config.delay))
        _logger.debug("Rendered frame %d of %d", i, total)
        if progress is not None:
            progress(i, total)

    _logger.info("Rendered %d frame(s) in %.3fs", len(frames), time.perf_counter() - started)
    return Animation(frames=tuple(frames), delays=tuple(delays), loop_count=total)


__all__ = ["Animation", "ProgressCallback", "iter_frames", "render"]
