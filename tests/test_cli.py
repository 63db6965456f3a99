import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from dithord import cli
from dithord.ordered_dither import dither_luma
from dithord.threshold_map import ThresholdMap


def write_gradient(path: Path, width: int = 32, height: int = 8) -> np.ndarray:
    row = np.linspace(0, 255, width).astype(np.uint8)
    grey = np.tile(row, (height, 1))
    Image.fromarray(grey).save(path)
    return grey


def test_parse_defaults():
    args = cli.parse_cli_args(["in.png", "out.png"])
    assert args.level == 2
    assert args.debug is False
    assert args.workers >= 1


def test_dithers_file_to_file(tmp_path: Path, capsys):
    src = tmp_path / "grad.png"
    dst = tmp_path / "grad_dither.png"
    grey = write_gradient(src)

    assert cli.main([str(src), str(dst), "--level", "1", "--workers", "1"]) == 0

    with Image.open(dst) as im:
        assert im.mode == "RGBA"
        out = np.array(im)
    assert out.shape == (8, 32, 4)
    assert set(np.unique(out[..., :3]).tolist()) <= {0, 255}
    assert (out[..., 3] == 255).all()
    expected = dither_luma(grey.astype(np.float32) / 255.0, ThresholdMap.from_level(1))
    np.testing.assert_array_equal(out[..., 0] == 255, expected)

    captured = capsys.readouterr().out
    assert "Wrote grad_dither.png" in captured
    assert "Level: 1" in captured


def test_debug_output(tmp_path: Path, capsys):
    src = tmp_path / "grad.png"
    write_gradient(src)
    assert cli.main([str(src), str(tmp_path / "o.png"), "--debug"]) == 0
    captured = capsys.readouterr().out
    assert "[debug] Loaded: 32x8" in captured
    assert "On share" in captured
    assert "Format: PNG" in captured


class FakeStdout:
    def __init__(self) -> None:
        self.buffer = io.BytesIO()

    def write(self, text: str) -> int:
        raise AssertionError(f"log line leaked to stdout: {text!r}")

    def flush(self) -> None:
        pass


def test_stdout_output_keeps_logs_off_stdout(tmp_path: Path, monkeypatch, capsys):
    src = tmp_path / "grad.png"
    write_gradient(src)
    fake = FakeStdout()
    monkeypatch.setattr(cli.sys, "stdout", fake)

    assert cli.main([str(src), "-"]) == 0

    with Image.open(io.BytesIO(fake.buffer.getvalue())) as im:
        assert im.format == "PNG"
        assert im.size == (32, 8)
    assert "Wrote stdout" in capsys.readouterr().err


def test_missing_input_exits_2(tmp_path: Path, capsys):
    assert cli.main([str(tmp_path / "nope.png"), str(tmp_path / "o.png")]) == 2
    assert "[error] not found" in capsys.readouterr().err


def test_invalid_level_exits_2(tmp_path: Path, capsys):
    src = tmp_path / "grad.png"
    write_gradient(src)
    assert cli.main([str(src), str(tmp_path / "o.png"), "--level", "40"]) == 2
    assert "exceeds" in capsys.readouterr().err


def test_undecodable_input_exits_1(tmp_path: Path, capsys):
    src = tmp_path / "junk.png"
    src.write_bytes(b"junk")
    assert cli.main([str(src), str(tmp_path / "o.png")]) == 1
    assert "failed to decode" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.parse_cli_args(["--version"])
    assert exc.value.code == 0
    assert "dithord" in capsys.readouterr().out
