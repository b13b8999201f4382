"""Tests for audiowork.io module - binary I/O utilities."""

from __future__ import annotations

from pathlib import Path

import pytest

from audiowork.io import read_bytes, write_bytes


class TestReadBytes:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x00\x01RIFF")

        assert read_bytes(path) == b"\x00\x01RIFF"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_bytes(tmp_path / "nonexistent.bin")


class TestWriteBytes:
    def test_writes_file(self, tmp_path: Path) -> None:
        output_path = tmp_path / "clip.wav"
        write_bytes(output_path, b"RIFF....WAVE")

        assert output_path.read_bytes() == b"RIFF....WAVE"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        output_path = tmp_path / "subdir" / "nested" / "clip.wav"
        write_bytes(output_path, b"data")

        assert output_path.exists()

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        write_bytes(tmp_path / "clip.wav", b"data")

        assert not any(tmp_path.glob("*.tmp"))

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        output_path = tmp_path / "clip.wav"
        output_path.write_bytes(b"old")

        write_bytes(output_path, b"new")

        assert output_path.read_bytes() == b"new"
