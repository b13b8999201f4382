"""Tests for audiowork.decode.audio module."""

from __future__ import annotations

import numpy as np
import pytest

from audiowork.decode.audio import decode_audio
from audiowork.exceptions import DecodeError


class TestDecodeAudio:
    def test_decodes_mono(self, wav_2s: bytes) -> None:
        decoded = decode_audio(wav_2s, 16000)

        assert decoded.sample_rate == 16000
        assert decoded.channel_count == 1
        assert decoded.length == 32000
        assert decoded.duration == pytest.approx(2.0)
        assert decoded.samples.dtype == np.float32

    def test_keeps_all_channels(self, wav_stereo: bytes) -> None:
        decoded = decode_audio(wav_stereo, 16000)

        assert decoded.channel_count == 2
        assert decoded.samples.shape == (2, 16000)

    def test_resamples_to_target_rate(self, wav_factory) -> None:
        decoded = decode_audio(wav_factory(1.0, sample_rate=8000), 16000)

        assert decoded.sample_rate == 16000
        assert decoded.length == 16000

    def test_truncates_to_capacity(self, wav_factory) -> None:
        decoded = decode_audio(wav_factory(3.0), 16000, max_seconds=1.0)

        assert decoded.length == 16000

    def test_samples_are_read_only(self, wav_2s: bytes) -> None:
        decoded = decode_audio(wav_2s, 16000)

        with pytest.raises(ValueError):
            decoded.samples[0, 0] = 1.0

    def test_empty_bytes_raise(self) -> None:
        with pytest.raises(DecodeError):
            decode_audio(b"", 16000)

    def test_garbage_bytes_raise(self) -> None:
        with pytest.raises(DecodeError):
            decode_audio(b"definitely not audio" * 64, 16000)

    def test_truncated_header_raises(self, wav_2s: bytes) -> None:
        with pytest.raises(DecodeError):
            decode_audio(wav_2s[:20], 16000)
