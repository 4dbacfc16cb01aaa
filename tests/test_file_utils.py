"""Tests for size-checked file reading and writing."""

import os
import sys

import pytest

from apo2cdsp import file_utils
from apo2cdsp.errors import FileAccessError
from apo2cdsp.file_utils import read_file, validate_file_access, write_file


class TestValidateFileAccess:
    def test_existing_file(self, export_file):
        validate_file_access(export_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError, match="File does not exist"):
            validate_file_access(tmp_path / "nonexistent.txt")

    def test_directory(self, tmp_path):
        with pytest.raises(FileAccessError, match="Path is not a file"):
            validate_file_access(tmp_path)

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "locked.txt"
        path.write_text("Filter")
        path.chmod(0)
        try:
            with pytest.raises(FileAccessError, match="File is not readable"):
                validate_file_access(path)
        finally:
            path.chmod(0o644)


class TestReadFile:
    def test_reads_small_file(self, export_file, apo_export):
        assert read_file(export_file) == apo_export.replace("\r\n", "\n")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with pytest.raises(FileAccessError, match="File is empty"):
            read_file(path)

    def test_too_large(self, tmp_path):
        path = tmp_path / "big.txt"
        path.write_text("x" * 2048)
        with pytest.raises(FileAccessError, match="File is too large"):
            read_file(path, max_size=1024)

    def test_streams_above_threshold(self, tmp_path, monkeypatch):
        monkeypatch.setattr(file_utils, "STREAM_THRESHOLD", 16)
        monkeypatch.setattr(file_utils, "CHUNK_SIZE", 7)
        content = "Filter 1: ON PK Fc 100 Hz Gain 3.5 dB Q 0.7\n" * 5
        path = tmp_path / "streamed.txt"
        path.write_text(content, encoding="utf-8")
        assert read_file(path) == content


class TestWriteFile:
    def test_writes_small_content(self, tmp_path):
        path = tmp_path / "out"
        write_file(path, '{"0": 1}')
        assert path.read_text(encoding="utf-8") == '{"0": 1}'

    def test_streams_large_content(self, tmp_path, monkeypatch):
        monkeypatch.setattr(file_utils, "STREAM_THRESHOLD", 10)
        monkeypatch.setattr(file_utils, "CHUNK_SIZE", 3)
        content = '{"0": 3.5, "10": 100, "1024": 0}'
        path = tmp_path / "out.json"
        write_file(path, content)
        assert path.read_text(encoding="utf-8") == content


class TestReadFileEdgeCases:
    def test_undecodable_bytes_are_replaced(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"# caf\xe9\nFilter 1: ON PK Fc 100 Hz Gain 1 dB Q 1\n")
        content = read_file(path)
        assert "\ufffd" in content
        assert content.endswith("Filter 1: ON PK Fc 100 Hz Gain 1 dB Q 1\n")

    def test_undecodable_bytes_are_replaced_when_streaming(self, tmp_path, monkeypatch):
        monkeypatch.setattr(file_utils, "STREAM_THRESHOLD", 4)
        monkeypatch.setattr(file_utils, "CHUNK_SIZE", 5)
        path = tmp_path / "streamed.txt"
        path.write_bytes(b"\xff\xfe# header\n")
        assert read_file(path) == "\ufffd\ufffd# header\n"

    def test_too_large_size_rounds_half_up(self, tmp_path):
        path = tmp_path / "big.txt"
        path.write_bytes(b"x" * (5 * 1024 * 1024 // 2))
        with pytest.raises(FileAccessError, match=r"File is too large: 3MB\. Maximum size is 1MB\."):
            read_file(path, max_size=1024 * 1024)
