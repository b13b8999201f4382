"""Tests for audiowork.extract.pcm module."""

from __future__ import annotations

import numpy as np
import pytest

from audiowork.exceptions import InvalidRangeError, RangeOutOfBoundsError
from audiowork.extract.pcm import extract_range, validate_range
from audiowork.models import DecodedAudio, ExtractionRange


@pytest.fixture
def ramp() -> DecodedAudio:
    """Two seconds at 16kHz whose sample values equal their index; channel 1 is negated."""
    left = np.arange(32000, dtype=np.float32)
    return DecodedAudio.from_array(np.stack([left, -left]), 16000)


class TestValidateRange:
    def test_ordered_range_passes(self) -> None:
        validate_range(ExtractionRange(0.0, 1.0))

    def test_equal_bounds_raise(self) -> None:
        with pytest.raises(InvalidRangeError):
            validate_range(ExtractionRange(1.0, 1.0))

    def test_reversed_bounds_raise(self) -> None:
        with pytest.raises(InvalidRangeError):
            validate_range(ExtractionRange(1.5, 0.5))

    def test_negative_start_raises(self) -> None:
        with pytest.raises(InvalidRangeError):
            validate_range(ExtractionRange(-0.5, 0.5))

    @pytest.mark.parametrize(
        "from_seconds,to_seconds",
        [(float("nan"), 1.0), (0.0, float("nan")), (float("nan"), float("nan"))],
    )
    def test_nan_bound_raises(self, from_seconds: float, to_seconds: float) -> None:
        with pytest.raises(InvalidRangeError):
            validate_range(ExtractionRange(from_seconds, to_seconds))

    def test_nan_bound_rejected_before_slicing(self, ramp: DecodedAudio) -> None:
        with pytest.raises(InvalidRangeError):
            extract_range(ramp, ExtractionRange(float("nan"), 1.0))


class TestExtractRange:
    @pytest.mark.parametrize(
        "from_seconds,to_seconds",
        [(0.0, 1.0), (0.5, 1.5), (1.0, 2.0), (0.25, 0.75), (0.0, 2.0)],
    )
    def test_slice_length(self, ramp: DecodedAudio, from_seconds: float, to_seconds: float) -> None:
        pcm = extract_range(ramp, ExtractionRange(from_seconds, to_seconds))

        assert len(pcm) == int((to_seconds - from_seconds) * 16000)

    def test_slice_contents_from_channel_zero(self, ramp: DecodedAudio) -> None:
        pcm = extract_range(ramp, ExtractionRange(0.5, 1.0))

        assert pcm.start == 8000
        assert pcm.end == 16000
        assert pcm.samples[0] == 8000.0
        assert pcm.samples[-1] == 15999.0

    def test_slice_is_a_copy(self, ramp: DecodedAudio) -> None:
        pcm = extract_range(ramp, ExtractionRange(0.0, 1.0))
        pcm.samples[0] = 42.0

        assert ramp.channel(0)[0] == 0.0

    def test_other_channel(self, ramp: DecodedAudio) -> None:
        pcm = extract_range(ramp, ExtractionRange(0.0, 1.0), channel=1)

        assert pcm.samples[1] == -1.0

    def test_end_past_audio_raises(self, ramp: DecodedAudio) -> None:
        with pytest.raises(RangeOutOfBoundsError) as exc_info:
            extract_range(ramp, ExtractionRange(1.0, 2.5))

        assert exc_info.value.to_seconds == 2.5
        assert exc_info.value.duration_seconds == pytest.approx(2.0)

    def test_invalid_range_raises(self, ramp: DecodedAudio) -> None:
        with pytest.raises(InvalidRangeError):
            extract_range(ramp, ExtractionRange(1.0, 0.5))
