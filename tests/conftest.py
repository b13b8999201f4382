"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf
import yaml


def make_wav(
    duration: float,
    sample_rate: int = 16000,
    channels: int = 1,
    frequency: float = 440.0,
) -> bytes:
    """Build a WAV container holding a sine tone."""
    t = np.arange(int(duration * sample_rate)) / sample_rate
    tone = 0.5 * np.sin(2 * np.pi * frequency * t).astype(np.float32)
    data = np.stack([tone] * channels, axis=1) if channels > 1 else tone
    buffer = io.BytesIO()
    sf.write(buffer, data, sample_rate, format="WAV", subtype="PCM_16")
    return buffer.getvalue()


@pytest.fixture
def wav_2s() -> bytes:
    """Two seconds of mono 16kHz audio."""
    return make_wav(2.0)


@pytest.fixture
def wav_stereo() -> bytes:
    """One second of stereo 16kHz audio."""
    return make_wav(1.0, channels=2)


@pytest.fixture
def wav_file(tmp_path: Path, wav_2s: bytes) -> Path:
    path = tmp_path / "tone.wav"
    path.write_bytes(wav_2s)
    return path


@pytest.fixture
def sample_config_dict() -> dict:
    """Return a sample configuration dictionary."""
    return {
        "sample_rate": 16000,
        "debug_log": True,
        "max_decode_seconds": 50.0,
        "mime_type": "audio/wav",
        "fetch_timeout": 10.0,
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config_dict: dict) -> Path:
    path = tmp_path / "audiowork.yaml"
    with open(path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return path


@pytest.fixture
def wav_factory():
    """Return the sine-tone WAV builder."""
    return make_wav
