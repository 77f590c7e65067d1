"""Tests for the command line entry point."""

import logging

import pytest
from PIL import Image

from stl2ascii.cli import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("STL2ASCII_GRID_SIZE", "STL2ASCII_VIEW", "STL2ASCII_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    logger = logging.getLogger("stl2ascii")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def stl_path(tmp_path, sample_binary):
    path = tmp_path / "part.stl"
    path.write_bytes(sample_binary)
    return path


class TestMain:
    def test_renders_projection(self, stl_path, capsys):
        assert main([str(stl_path), "-s", "10"]) == 0
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert len(lines) == 6
        assert all(len(line) == 11 for line in lines)
        assert "▓" in out

    def test_summary(self, stl_path, capsys):
        assert main([str(stl_path), "--summary", "-v", "top"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Header: sample part\nTriangles: 2\n")

    def test_grid_size_from_environment(self, stl_path, capsys, monkeypatch):
        monkeypatch.setenv("STL2ASCII_GRID_SIZE", "4")
        assert main([str(stl_path)]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 3

    def test_png_output(self, stl_path, tmp_path):
        png_path = tmp_path / "preview.png"
        assert main([str(stl_path), "-s", "8", "--png", str(png_path)]) == 0
        with Image.open(png_path) as image:
            assert image.size == (9 * 8, 5 * 16)

    def test_png_write_failure(self, stl_path, tmp_path, capsys):
        target = tmp_path / "no_such_dir" / "preview.png"
        assert main([str(stl_path), "-s", "8", "--png", str(target)]) == 1
        assert "could not write" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.stl")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_truncated_binary(self, tmp_path, sample_binary, capsys):
        path = tmp_path / "broken.stl"
        path.write_bytes(sample_binary[:-10])
        assert main([str(path), "-f", "binary"]) == 1
        assert "Truncated" in capsys.readouterr().err

    def test_partial_ascii(self, tmp_path, sample_ascii, capsys):
        path = tmp_path / "partial.stl"
        broken = sample_ascii.split("endfacet\n", 1)
        path.write_text(broken[0] + "endfacet\nfacet normal 0 0 1\nouter loop\n", encoding="utf-8")

        assert main([str(path)]) == 1
        assert "[!] Error" in capsys.readouterr().err

        assert main([str(path), "--allow-partial", "--summary"]) == 0
        assert "Triangles: 1" in capsys.readouterr().out

    def test_invalid_size(self, stl_path):
        with pytest.raises(SystemExit):
            main([str(stl_path), "-s", "0"])
