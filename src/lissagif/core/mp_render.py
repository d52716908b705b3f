"""
どこで: `src/lissagif/core/mp_render.py`。
何を: フレーム描画を別プロセス（spawn）のプールで実行し、フレーム順に結果を返す。
なぜ: 各フレームのパラメータは閉形式で事前に決まるので、フレーム間の依存なく並列化できるため。
"""

from __future__ import annotations

import multiprocessing as mp
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from lissagif.core.frame import Frame, build_frame
from lissagif.core.render_config import AnimationState
from lissagif.errors import FrameWorkerError


@dataclass(frozen=True, slots=True)
class _FrameTask:
    index: int
    size: int
    state: AnimationState
    cycles: float
    res: float


def _render_frame_task(task: _FrameTask) -> Frame:
    return build_frame(task.size, task.state, cycles=task.cycles, res=task.res)


def iter_frames_mp(
    size: int,
    states: Sequence[AnimationState],
    *,
    cycles: float,
    res: float,
    n_worker: int,
) -> Iterator[Frame]:
    """states の各フレームを n_worker プロセスで描画し、states の順に返す。

    Notes
    -----
    - spawn コンテキストを使うため、スクリプトから呼ぶ場合は `__main__` ガードが必要。
    - 返るフレームは逐次描画（`build_frame`）と同一。
    """

    if int(n_worker) < 2:
        raise ValueError("n_worker は 2 以上である必要がある")

    tasks = [
        _FrameTask(index=i, size=int(size), state=state, cycles=float(cycles), res=float(res))
        for i, state in enumerate(states)
    ]
    if not tasks:
        return

    ctx = mp.get_context("spawn")
    try:
        pool = ctx.Pool(processes=min(int(n_worker), len(tasks)))
    except Exception as exc:
        raise FrameWorkerError(
            "フレーム描画 worker の起動に失敗しました。"
            "スクリプト側が __main__ ガードを持つか確認してください。"
        ) from exc

    with pool:
        yield from pool.imap(_render_frame_task, tasks)


def render_frames_mp(
    size: int,
    states: Sequence[AnimationState],
    *,
    cycles: float,
    res: float,
    n_worker: int,
) -> list[Frame]:
    """`iter_frames_mp` の結果をリストで返す。"""

    return list(iter_frames_mp(size, states, cycles=cycles, res=res, n_worker=n_worker))


__all__ = ["iter_frames_mp", "render_frames_mp"]
