# どこで: `src/lissagif/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 描画パラメータの既定値や worker 数を、CLI 引数なしでもユーザーが固定できるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from importlib import resources
from pathlib import Path
from typing import Any

from lissagif.core.render_config import RenderConfig


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """lissagif の実行時設定。"""

    config_path: Path | None
    render: RenderConfig
    workers: int
    log_level: str


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None

_RENDER_INT_KEYS = ("nframes", "size", "delay")
_RENDER_FLOAT_KEYS = (
    "cycles",
    "xfreq",
    "xfreq_inc",
    "yfreq",
    "yfreq_inc",
    "xphase",
    "xphase_inc",
    "yphase",
    "yphase_inc",
    "res",
)


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".lissagif" / "config.yaml",
        home / ".config" / "lissagif" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int(value: Any, *, key: str) -> int:
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        fv = float(value)
        iv = int(fv)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc
    if iv != fv:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    return iv


def _as_float(value: Any, *, key: str) -> float:
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}")
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("lissagif")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="lissagif/resource/default_config.yaml")


def _merge_payload(base: dict[str, Any], override: dict[str, Any]) -> None:
    """override を base へ 1 段ぶん深くマージする（`render:` などのセクション単位）。"""

    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged = dict(current)
            merged.update(value)
            base[key] = merged
        else:
            base[key] = value


def render_config_from_mapping(values: dict[str, Any], *, key: str = "render") -> RenderConfig:
    """`render:` セクションの mapping から RenderConfig を作って返す。

    Notes
    -----
    未知のキーは RuntimeError とする。未指定のキーは RenderConfig の既定値になる。
    """

    known = {f.name for f in fields(RenderConfig)}
    unknown = sorted(str(k) for k in values if k not in known)
    if unknown:
        raise RuntimeError(f"{key} に未知のキーがあります: {unknown}")

    kwargs: dict[str, Any] = {}
    for name, value in values.items():
        if value is None:
            continue
        if name in _RENDER_INT_KEYS:
            kwargs[name] = _as_int(value, key=f"{key}.{name}")
        elif name in _RENDER_FLOAT_KEYS:
            kwargs[name] = _as_float(value, key=f"{key}.{name}")
        elif name == "outfile":
            s = str(value).strip()
            if not s:
                raise RuntimeError(f"{key}.outfile が空です")
            kwargs[name] = Path(_expand_path_text(s))
    return RenderConfig(**kwargs)


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.lissagif/config.yaml` / `~/.config/lissagif/config.yaml`
    3) `set_config_path()`（CLI の `--config`）で指定した config
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        _merge_payload(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        _merge_payload(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    render = render_config_from_mapping(_as_mapping(payload.get("render"), key="render"))

    runtime = _as_mapping(payload.get("runtime"), key="runtime")
    workers = _as_int(runtime.get("workers", 1), key="runtime.workers")
    if workers < 1:
        raise ValueError(f"runtime.workers は 1 以上である必要がある: got={workers}")
    log_level = str(runtime.get("log_level") or "INFO").strip().upper()

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        render=render,
        workers=workers,
        log_level=log_level,
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "render_config_from_mapping", "runtime_config", "set_config_path"]
