"""Tests for the command-line entry point."""

import sys

import pytest

import main
from utils.image_io import load_buffer, save_buffer
from utils.test_images import generate_noise


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['main.py', *args])
    main.main()


def test_synthetic_effect_with_param(monkeypatch, tmp_path, capsys):
    """Positional param and output are applied and the result is saved."""
    out = tmp_path / "blur.png"
    run(monkeypatch, '--synthetic', 'blur', '1', str(out))
    assert (load_buffer(out).width, load_buffer(out).height) == (256, 256)
    assert "PSNR (RGB)" in capsys.readouterr().out


def test_shortcut_key_on_image_file(monkeypatch, tmp_path):
    """Shortcut "1" runs grayscale on a loaded image."""
    src = tmp_path / "noise.png"
    out = tmp_path / "gray.png"
    save_buffer(generate_noise(9, 5, seed=3), src)
    run(monkeypatch, str(src), '1', '1.0', str(out))
    result = load_buffer(out)
    assert (result.width, result.height) == (9, 5)
    assert (result.rgb[:, :, 0] == result.rgb[:, :, 2]).all()


def test_synthetic_demo_key_and_batch(monkeypatch, tmp_path):
    """--synthetic=<demo> picks the demo image; spaces writes one file per space."""
    run(monkeypatch, '--synthetic=checkerboard', 'spaces', str(tmp_path))
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        'CMYK.png', 'HSV.png', 'LAB.png', 'YCbCr.png',
    ]


def test_channels_batch(monkeypatch, tmp_path):
    """channels writes grayscale plus isolated and thresholded channels."""
    run(monkeypatch, '--synthetic=color_bars', 'channels', '100', str(tmp_path))
    assert len(list(tmp_path.iterdir())) == 7


@pytest.mark.parametrize("args, message", [
    (('--synthetic', 'HSV', '50'), "takes no parameter"),
    (('--synthetic', 'spaces', '50'), "takes no parameter"),
    (('--synthetic=plasma', 'blur'), "Unknown demo image"),
    (('--synthetic', 'sepia'), "Unknown effect"),
])
def test_bad_arguments_exit_with_error(monkeypatch, tmp_path, capsys, args, message):
    """Invalid input is reported on stderr with exit status 1."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, *args)
    assert exc.value.code == 1
    assert message in capsys.readouterr().err


def test_help_lists_effects(monkeypatch, capsys):
    """--help prints the usage with effects and demo images."""
    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, '--help')
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "pixelationColor" in out
    assert "color_bars" in out
