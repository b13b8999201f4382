"""
audiowork.encode.wav - 16-bit PCM WAV encoding with soundfile.
"""

from __future__ import annotations

import io

import numpy as np

WAV_MIME_TYPE = "audio/wav"


def encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    """Encode mono float samples as a 16-bit PCM WAV container.

    Samples outside [-1.0, 1.0] are clipped.
    """
    import soundfile as sf

    data = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    buffer = io.BytesIO()
    sf.write(buffer, data, sample_rate, format="WAV", subtype="PCM_16")
    return buffer.getvalue()
