"""Tests for bwconvert.cli module."""

from pathlib import Path
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from bwconvert.cli import main


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    """A small RGB JPEG input."""
    path = tmp_path / "photo.jpg"
    Image.fromarray(np.full((4, 6, 3), 90, dtype=np.uint8)).save(path, quality=95)
    return path


class TestCLIBasic:
    """Basic CLI tests."""

    def test_cli_converts_image(self, sample_image: Path, tmp_path: Path) -> None:
        """Test that a valid conversion returns 0 and writes the output."""
        output = tmp_path / "photo_bw.png"
        with patch("sys.argv", ["bwconvert", "-i", str(sample_image), "-o", str(output)]):
            result = main()

        assert result == 0
        with Image.open(output) as img:
            assert img.mode == "L"
            assert img.size == (6, 4)

    def test_cli_long_options(self, sample_image: Path, tmp_path: Path) -> None:
        """Test --input/--output long forms."""
        output = tmp_path / "photo_bw.tga"
        with patch(
            "sys.argv", ["bwconvert", "--input", str(sample_image), "--output", str(output)]
        ):
            assert main() == 0

        assert output.exists()

    def test_cli_success_prints_nothing(
        self, sample_image: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a successful run is silent."""
        output = tmp_path / "out.bmp"
        with patch("sys.argv", ["bwconvert", "-i", str(sample_image), "-o", str(output)]):
            main()

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_cli_help_shows_usage(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that --help shows usage information."""
        with patch("sys.argv", ["bwconvert", "--help"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
            assert exc_info.value.code == 0

        captured = capsys.readouterr()
        assert "grayscale" in captured.out

    def test_cli_missing_required_option(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that omitting --output is an argument error."""
        with patch("sys.argv", ["bwconvert", "-i", "in.png"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
            assert exc_info.value.code == 2

        assert "--output" in capsys.readouterr().err


class TestCLIErrors:
    """Tests for error reporting."""

    def test_cli_missing_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that a missing input file returns 1 with an error message."""
        output = tmp_path / "out.png"
        with patch(
            "sys.argv", ["bwconvert", "-i", str(tmp_path / "nope.png"), "-o", str(output)]
        ):
            result = main()

        assert result == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: ")
        assert "nope.png" in err
        assert not output.exists()

    def test_cli_unsupported_extension(
        self, sample_image: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that an unsupported output extension returns 1."""
        output = tmp_path / "out.xyz"
        with patch("sys.argv", ["bwconvert", "-i", str(sample_image), "-o", str(output)]):
            result = main()

        assert result == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: Unsupported image format")
        assert err.count("\n") == 1
        assert not output.exists()

    def test_cli_unwritable_output(
        self, sample_image: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a write failure returns 1."""
        output = tmp_path / "missing_dir" / "out.png"
        with patch("sys.argv", ["bwconvert", "-i", str(sample_image), "-o", str(output)]):
            result = main()

        assert result == 1
        assert capsys.readouterr().err.startswith("Error: Failed to write")

    def test_cli_unexpected_error(
        self, sample_image: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a failure outside the error taxonomy still returns 1."""
        output = tmp_path / "out.png"
        with patch("sys.argv", ["bwconvert", "-i", str(sample_image), "-o", str(output)]):
            with patch(
                "bwconvert.cli.ImageConverter.convert", side_effect=MemoryError("out of memory")
            ):
                result = main()

        assert result == 1
        assert capsys.readouterr().err == "Error: out of memory\n"

    def test_cli_wide_tga(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a TGA beyond the header size limit reports an error line."""
        source = tmp_path / "wide.png"
        Image.fromarray(np.zeros((1, 70000), dtype=np.uint8)).save(source)
        output = tmp_path / "out.tga"
        with patch("sys.argv", ["bwconvert", "-i", str(source), "-o", str(output)]):
            result = main()

        assert result == 1
        assert capsys.readouterr().err.startswith("Error: TGA cannot store")
        assert not output.exists()
