"""
audiowork.decode.audio - librosa-backed decoding of in-memory audio.
"""

from __future__ import annotations

import io
import warnings

from audiowork.exceptions import DecodeError
from audiowork.models import DecodedAudio


def decode_audio(
    data: bytes,
    sample_rate: int,
    max_seconds: float | None = None,
) -> DecodedAudio:
    """Decode a container held in memory.

    Audio is resampled to sample_rate and truncated to max_seconds when
    given.

    Args:
        data: Raw container bytes (WAV, FLAC, OGG, ...)
        sample_rate: Target sample rate
        max_seconds: Decode capacity in seconds

    Returns:
        DecodedAudio with every channel of the input

    Raises:
        DecodeError: If bytes are empty, unrecognised, or corrupt
    """
    if not data:
        raise DecodeError("No audio data to decode")

    import librosa

    try:
        with warnings.catch_warnings():
            # librosa warns before falling back to audioread
            warnings.simplefilter("ignore")
            samples, sr = librosa.load(
                io.BytesIO(data),
                sr=sample_rate,
                mono=False,
                duration=max_seconds,
            )
    except Exception as e:
        raise DecodeError(f"Unable to decode audio data: {e}") from e

    if samples.size == 0:
        raise DecodeError("Decoded audio contains no samples")

    return DecodedAudio.from_array(samples, int(sr))
