"""
audiowork.extract.pcm - Single-channel sample slicing.
"""

from __future__ import annotations

import numpy as np

from audiowork.exceptions import InvalidRangeError, RangeOutOfBoundsError
from audiowork.models import DecodedAudio, ExtractionRange, PCMSlice


def validate_range(extraction: ExtractionRange) -> None:
    """Check that a range is ordered and starts at or after zero.

    Raises:
        InvalidRangeError: If from < 0, from >= to, or either bound is NaN
    """
    if not (0 <= extraction.from_seconds < extraction.to_seconds):
        raise InvalidRangeError(extraction.from_seconds, extraction.to_seconds)


def extract_range(
    decoded: DecodedAudio,
    extraction: ExtractionRange,
    channel: int = 0,
) -> PCMSlice:
    """Copy the samples of one channel that fall inside a time range.

    Args:
        decoded: Decoded audio to read from
        extraction: Window in seconds
        channel: Channel index (0 unless the caller asks otherwise)

    Returns:
        PCMSlice holding exactly end - start samples

    Raises:
        InvalidRangeError: If the range is not ordered
        RangeOutOfBoundsError: If the range ends past the decoded audio
    """
    validate_range(extraction)

    if extraction.to_seconds * decoded.sample_rate > decoded.length:
        raise RangeOutOfBoundsError(extraction.to_seconds, decoded.duration)

    start, end = extraction.sample_bounds(decoded.sample_rate)
    samples = np.array(decoded.channel(channel)[start:end], dtype=np.float32)

    return PCMSlice(
        samples=samples,
        sample_rate=decoded.sample_rate,
        start=start,
        end=end,
    )
