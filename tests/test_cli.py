"""`lissagif` CLI（引数 → RenderConfig → GIF 書き出し）をテスト。"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from lissagif.cli import EXIT_CONFIG_ERROR, EXIT_FAILURE, EXIT_OK, ProgressPrinter, main
from lissagif.core.runtime_config import set_config_path
from lissagif.errors import FrameWorkerError

_SMALL = ["--size", "10", "--cycles", "1", "--res", "0.01", "--quiet"]


@pytest.fixture(autouse=True)
def _isolate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def test_main_writes_gif(tmp_path: Path) -> None:
    out = tmp_path / "anim.gif"
    code = main(["--outfile", str(out), "--nframes", "2", "--yphase_inc", "0.5", "--delay", "4", *_SMALL])

    assert code == EXIT_OK
    with Image.open(out) as im:
        assert im.size == (21, 19)
        assert im.n_frames == 2
        assert im.info["loop"] == 2
        assert im.info["duration"] == 40


def test_main_uses_config_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "c.yaml"
    cfg.write_text(
        'render:\n  outfile: "from_config.gif"\n  size: 6\n  cycles: 1.0\n  res: 0.05\n',
        encoding="utf-8",
    )

    code = main(["--config", str(cfg), "--quiet"])

    assert code == EXIT_OK
    with Image.open(tmp_path / "from_config.gif") as im:
        assert im.size == (13, 11)


def test_main_prints_progress(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "p.gif"
    code = main(["--outfile", str(out), "--nframes", "2", "--size", "6", "--cycles", "1", "--res", "0.05"])

    assert code == EXIT_OK
    err = capsys.readouterr().err
    assert "\rRendered frame 0 of 2" in err
    assert "\rRendered frame 1 of 2" in err
    assert "\rRendered frame 2 of 2\n" in err


@pytest.mark.parametrize(
    "flags",
    [["--res", "0"], ["--res", "-1"], ["--size", "0"], ["--nframes", "-1"], ["--workers", "0"]],
)
def test_main_rejects_invalid_config_before_rendering(tmp_path: Path, flags: list[str]) -> None:
    out = tmp_path / "bad.gif"
    code = main(["--outfile", str(out), "--quiet", *flags])

    assert code == EXIT_CONFIG_ERROR
    assert not out.exists()


def test_main_missing_config_file(tmp_path: Path) -> None:
    assert main(["--config", str(tmp_path / "missing.yaml")]) == EXIT_CONFIG_ERROR


def test_main_reports_unopenable_sink(tmp_path: Path) -> None:
    target = tmp_path / "is_a_dir"
    target.mkdir()
    assert main(["--outfile", str(target), *_SMALL]) == EXIT_FAILURE


def test_main_zero_frames_fails_without_leaving_file(tmp_path: Path) -> None:
    out = tmp_path / "zero.gif"
    code = main(["--outfile", str(out), "--nframes", "0", *_SMALL])

    assert code == EXIT_FAILURE
    assert not out.exists()


def test_main_removes_file_on_unexpected_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*args, **kwargs):
        raise RuntimeError("worker crashed")

    monkeypatch.setattr("lissagif.cli.render", _boom)
    out = tmp_path / "crash.gif"
    with pytest.raises(RuntimeError, match="worker crashed"):
        main(["--outfile", str(out), "--nframes", "2", "--workers", "2", *_SMALL])
    assert not out.exists()


def test_main_worker_start_failure_exits_with_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_pool(*args, **kwargs):
        raise FrameWorkerError("フレーム描画 worker の起動に失敗しました。")

    monkeypatch.setattr("lissagif.cli.render", _no_pool)
    out = tmp_path / "nopool.gif"
    code = main(["--outfile", str(out), "--nframes", "2", "--workers", "2", *_SMALL])

    assert code == EXIT_FAILURE
    assert not out.exists()


def test_progress_printer_format() -> None:
    buf = io.StringIO()
    p = ProgressPrinter(buf)
    p(0, 3)
    p(1, 3)
    p.finish(3)
    assert buf.getvalue() == "\rRendered frame 0 of 3\rRendered frame 1 of 3\rRendered frame 3 of 3\n"
