# どこで: `src/lissagif/errors.py`。
# 何を: lissagif が送出する例外の階層を定義する。
# なぜ: 設定不正や出力先エラー、エンコード失敗を呼び出し側で区別できるようにするため。

from __future__ import annotations


class LissagifError(RuntimeError):
    """lissagif の例外の基底クラス。"""


class RenderConfigError(LissagifError, ValueError):
    """描画設定が不正（size <= 0, res <= 0 など）なときのエラー。"""


class AnimationSinkError(LissagifError):
    """出力先を作成/オープン/書き込みできないときのエラー。"""


class GifEncodeError(LissagifError):
    """フレーム列を GIF にエンコードできないときのエラー。"""


class FrameWorkerError(LissagifError):
    """フレーム描画 worker の起動に失敗したときのエラー。"""


__all__ = ["AnimationSinkError", "FrameWorkerError", "GifEncodeError", "LissagifError", "RenderConfigError"]
