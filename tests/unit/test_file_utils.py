"""
Unit tests for file_utils.open_log_file.

Tests cover:
- Plain text files
- Gzip files with .gz extension
- Gzip files detected by magic bytes (no .gz extension)
- FileNotFoundError handling
- BadGzipFile for corrupt gzip
"""

import gzip
from pathlib import Path

import pytest

from elb_log_analyzer.parsing.file_utils import is_gzip_file, open_log_file


class TestOpenLogFile:
    """Tests for open_log_file function."""

    def test_plain_text_file(self, tmp_path: Path) -> None:
        """Test reading a plain text file."""
        test_file = tmp_path / "access.log"
        test_file.write_text("line 1\nline 2")

        with open_log_file(test_file) as f:
            content = f.read()

        assert content == "line 1\nline 2"

    def test_gzip_file_with_extension(self, tmp_path: Path) -> None:
        """Test reading a gzip file with .gz extension."""
        test_file = tmp_path / "access.log.gz"
        with gzip.open(test_file, "wt", encoding="utf-8") as f:
            f.write("Compressed content\nLine 2")

        with open_log_file(test_file) as f:
            content = f.read()

        assert content == "Compressed content\nLine 2"

    def test_gzip_file_magic_bytes_no_extension(self, tmp_path: Path) -> None:
        """Test reading a gzip file detected by magic bytes (no .gz extension)."""
        test_file = tmp_path / "access.log"
        with gzip.open(test_file, "wt", encoding="utf-8") as f:
            f.write("Magic bytes detection")

        assert is_gzip_file(test_file) is True
        with open_log_file(test_file) as f:
            assert f.read() == "Magic bytes detection"

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Test FileNotFoundError for non-existent file."""
        with pytest.raises(FileNotFoundError) as exc_info:
            open_log_file(tmp_path / "does_not_exist.log")

        assert "Log file not found" in str(exc_info.value)

    def test_bad_gzip_file(self, tmp_path: Path) -> None:
        """Test BadGzipFile for corrupt gzip file with .gz extension."""
        test_file = tmp_path / "corrupt.log.gz"
        test_file.write_bytes(b"This is not gzip content")

        with pytest.raises(gzip.BadGzipFile):
            with open_log_file(test_file) as f:
                f.read()

    def test_path_as_string(self, tmp_path: Path) -> None:
        test_file = tmp_path / "access.log"
        test_file.write_text("String path test")

        with open_log_file(str(test_file)) as f:
            assert f.read() == "String path test"

    def test_custom_encoding(self, tmp_path: Path) -> None:
        """Test reading file with custom encoding."""
        test_file = tmp_path / "latin1.log"
        test_file.write_bytes("Café résumé".encode("latin-1"))

        with open_log_file(test_file, encoding="latin-1") as f:
            assert f.read() == "Café résumé"

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file is plain text and reads as empty."""
        test_file = tmp_path / "empty.log"
        test_file.write_text("")

        assert is_gzip_file(test_file) is False
        with open_log_file(test_file) as f:
            assert f.read() == ""
