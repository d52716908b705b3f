# どこで: `src/lissagif/__init__.py`。
# 何を: ルート `lissagif` パッケージを定義し、主要 API を再公開する。
# なぜ: import 起点を `lissagif` に統一するため。

from __future__ import annotations

from lissagif.core.animation import Animation, render
from lissagif.core.frame import Frame, build_frame
from lissagif.core.palette import MAX_INTENSITY, PALETTE
from lissagif.core.rasterizer import paint
from lissagif.core.render_config import AnimationState, RenderConfig, frame_state
from lissagif.export.gif import encode_gif, write_gif

__all__ = [
    "Animation",
    "AnimationState",
    "Frame",
    "MAX_INTENSITY",
    "PALETTE",
    "RenderConfig",
    "build_frame",
    "encode_gif",
    "frame_state",
    "paint",
    "render",
    "write_gif",
]
