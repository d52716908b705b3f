# どこで: `src/lissagif/core/render_config.py`。
# 何を: 描画設定 `RenderConfig` と、フレームごとの曲線パラメータ `AnimationState` を定義する。
# なぜ: フラグ値をプロセス全体の可変状態にせず、不変の値として描画処理へ明示的に渡すため。

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from lissagif.errors import RenderConfigError

# GIF の delay は 16bit 符号なし整数（1/100 秒単位）。
MAX_GIF_DELAY = 0xFFFF


def _require_finite(name: str, value: float) -> float:
    fv = float(value)
    if not math.isfinite(fv):
        raise RenderConfigError(f"{name} は有限の数値である必要がある: got={value!r}")
    return fv


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """1 回のアニメーション描画の設定。

    Attributes
    ----------
    outfile : Path
        出力 GIF のパス。
    nframes : int
        描画するフレーム数（0 は空アニメーション）。
    size : int
        画像の半径（px）。強度グリッドは `2*size` 四方。
    delay : int
        フレーム間の待ち時間（1/100 秒）。
    cycles : float
        1 フレームで描く曲線の長さ（2π 単位の周回数）。
    xfreq, yfreq, xphase, yphase : float
        初期の周波数と位相。
    xfreq_inc, yfreq_inc, xphase_inc, yphase_inc : float
        フレームごとの周波数/位相の増分。
    res : float
        角度方向のサンプリング刻み。
    """

    outfile: Path = Path("out.gif")
    nframes: int = 1
    size: int = 100
    delay: int = 8
    cycles: float = 2.0
    xfreq: float = 5.0
    xfreq_inc: float = 0.0
    yfreq: float = 4.0
    yfreq_inc: float = 0.0
    xphase: float = 0.0
    xphase_inc: float = 0.0
    yphase: float = 0.0
    yphase_inc: float = 0.01
    res: float = 0.0001

    def __post_init__(self) -> None:
        object.__setattr__(self, "outfile", Path(str(self.outfile)).expanduser())
        for name in ("size", "nframes", "delay"):
            _require_finite(name, getattr(self, name))
        if int(self.size) != self.size or int(self.size) <= 0:
            raise RenderConfigError(f"size は正の整数である必要がある: got={self.size!r}")
        if int(self.nframes) != self.nframes or int(self.nframes) < 0:
            raise RenderConfigError(f"nframes は 0 以上の整数である必要がある: got={self.nframes!r}")
        if int(self.delay) != self.delay or not 0 <= int(self.delay) <= MAX_GIF_DELAY:
            raise RenderConfigError(
                f"delay は 0..{MAX_GIF_DELAY} の整数である必要がある: got={self.delay!r}"
            )
        # 10.0 のような整数値の float も int として保持する。
        for name in ("size", "nframes", "delay"):
            object.__setattr__(self, name, int(getattr(self, name)))
        for name in (
            "xfreq",
            "xfreq_inc",
            "yfreq",
            "yfreq_inc",
            "xphase",
            "xphase_inc",
            "yphase",
            "yphase_inc",
        ):
            _require_finite(name, getattr(self, name))
        if _require_finite("cycles", self.cycles) <= 0.0:
            raise RenderConfigError(f"cycles は正の値である必要がある: got={self.cycles!r}")
        if _require_finite("res", self.res) <= 0.0:
            # res <= 0 だと掃引ループが終わらない。
            raise RenderConfigError(f"res は正の値である必要がある: got={self.res!r}")

    @property
    def grid_size(self) -> int:
        """強度グリッドの一辺（`2*size`）を返す。"""

        return 2 * int(self.size)

    @property
    def canvas_size(self) -> tuple[int, int]:
        """出力フレームの (width, height) を返す。"""

        return 2 * int(self.size) + 1, 2 * int(self.size) - 1


@dataclass(frozen=True, slots=True)
class AnimationState:
    """1 フレームを描くときの曲線パラメータ。"""

    xfreq: float
    yfreq: float
    xphase: float
    yphase: float


def frame_state(config: RenderConfig, index: int) -> AnimationState:
    """フレーム `index` の状態を閉形式 `base + index*inc` で返す。

    Notes
    -----
    前フレームの描画結果に依存しないため、任意の順序・並列で計算できる。
    """

    i = int(index)
    if i < 0:
        raise ValueError(f"index は 0 以上である必要がある: got={index!r}")
    return AnimationState(
        xfreq=float(config.xfreq) + i * float(config.xfreq_inc),
        yfreq=float(config.yfreq) + i * float(config.yfreq_inc),
        xphase=float(config.xphase) + i * float(config.xphase_inc),
        yphase=float(config.yphase) + i * float(config.yphase_inc),
    )


def frame_states(config: RenderConfig) -> list[AnimationState]:
    """全フレームの状態を先頭から順に返す。"""

    return [frame_state(config, i) for i in range(int(config.nframes))]


__all__ = [
    "AnimationState",
    "MAX_GIF_DELAY",
    "RenderConfig",
    "frame_state",
    "frame_states",
]
