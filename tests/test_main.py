"""
End-to-end tests for the filter command line.
"""

import pytest

from conftest import open_with_full_disk, solid
from ppmfilter import main as cli
from ppmfilter.conv.kernels import BOX_BLUR
from ppmfilter.conv.standard import Standard
from ppmfilter.conv.threaded import Threaded
from ppmfilter.pixmap import service
from ppmfilter.pixmap.service import decode, encode


@pytest.fixture
def input_path(tmp_path, noise_image):
    path = tmp_path / "in.ppm"
    encode(noise_image, path)
    return path


def test_sequential(input_path, tmp_path, noise_image, capsys):
    output_path = tmp_path / "out.ppm"
    assert cli.sequential([str(input_path), str(output_path)]) == 0
    assert decode(output_path) == Standard().run(noise_image)
    assert "Image saved to" in capsys.readouterr().out


def test_threaded(input_path, tmp_path, noise_image):
    output_path = tmp_path / "out.ppm"
    assert cli.threaded([str(input_path), str(output_path), "4", "--kernel", "box-blur"]) == 0
    assert decode(output_path) == Threaded(BOX_BLUR).run(noise_image, num_threads=1)


def test_threaded_default_kernel_and_thread_clamp(input_path, tmp_path, noise_image):
    output_path = tmp_path / "out.ppm"
    assert cli.main(["conc", str(input_path), str(output_path), "-2"]) == 0
    assert decode(output_path) == Threaded().run(noise_image, num_threads=1)


def test_unknown_kernel_copies_input(input_path, tmp_path, noise_image):
    output_path = tmp_path / "out.ppm"
    assert cli.threaded([str(input_path), str(output_path), "2", "--kernel", "emboss"]) == 0
    assert decode(output_path) == noise_image


def test_decode_failure_exits_with_one(tmp_path, caplog):
    output_path = tmp_path / "out.ppm"
    assert cli.sequential([str(tmp_path / "missing.ppm"), str(output_path)]) == 1
    assert not output_path.exists()
    assert "Cannot open" in caplog.text


def test_bad_magic_exits_with_one(tmp_path):
    bad = tmp_path / "bad.ppm"
    bad.write_bytes(b"P3\n1 1\n255\n0 0 0\n")
    assert cli.threaded([str(bad), str(tmp_path / "out.ppm"), "2"]) == 1


def test_encode_failure_exits_with_one(input_path, tmp_path):
    assert cli.sequential([str(input_path), str(tmp_path / "missing" / "out.ppm")]) == 1


@pytest.mark.parametrize("argv", [[], ["only-input"], ["in", "out", "not-a-number"]])
def test_bad_arguments_exit_with_one(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.threaded(argv)
    assert excinfo.value.code == 1


def test_solid_red_scenario(tmp_path):
    input_path = tmp_path / "red.ppm"
    output_path = tmp_path / "red_conc.ppm"
    encode(solid(4, 4, (255, 0, 0)), input_path)
    assert cli.threaded([str(input_path), str(output_path), "2"]) == 0
    assert tuple(decode(output_path).pixels[0, 0]) == (255, 0, 0)


def test_worker_failure_writes_nothing(monkeypatch, input_path, tmp_path):
    def broken(self, padded, rows):
        raise MemoryError("out of memory")

    monkeypatch.setattr(Threaded, "convolve_rows", broken)
    output_path = tmp_path / "out.ppm"
    with pytest.raises(MemoryError):
        cli.threaded([str(input_path), str(output_path), "3"])
    assert not output_path.exists()


def test_write_failure_exits_with_one(monkeypatch, input_path, tmp_path, caplog):
    monkeypatch.setattr(service, "open", open_with_full_disk, raising=False)
    assert cli.sequential([str(input_path), str(tmp_path / "out.ppm")]) == 1
    assert "Cannot write" in caplog.text
