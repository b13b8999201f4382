"""
audiowork.models - Data carried between pipeline stages.
"""

from __future__ import annotations

import base64
import time
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from audiowork.io import write_bytes


@dataclass(frozen=True, eq=False)
class DecodedAudio:
    """Decoded PCM for every channel of a loaded buffer.

    Attributes:
        sample_rate: Samples per second of the decoded data
        channel_count: Number of channels
        length: Samples per channel
        samples: Read-only float32 array of shape (channel_count, length)
    """

    sample_rate: int
    channel_count: int
    length: int
    samples: np.ndarray = field(repr=False)

    @classmethod
    def from_array(cls, samples: np.ndarray, sample_rate: int) -> DecodedAudio:
        data = np.array(np.atleast_2d(samples), dtype=np.float32)
        data.flags.writeable = False
        return cls(
            sample_rate=sample_rate,
            channel_count=data.shape[0],
            length=data.shape[1],
            samples=data,
        )

    @property
    def duration(self) -> float:
        return self.length / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        return self.samples[index]


@dataclass(frozen=True)
class ExtractionRange:
    """A [from, to) window in seconds."""

    from_seconds: float
    to_seconds: float

    def sample_bounds(self, sample_rate: int) -> tuple[int, int]:
        return int(self.from_seconds * sample_rate), int(self.to_seconds * sample_rate)


@dataclass(frozen=True, eq=False)
class PCMSlice:
    """A contiguous single-channel run of float32 samples."""

    samples: np.ndarray = field(repr=False)
    sample_rate: int
    start: int
    end: int

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration(self) -> float:
        return len(self.samples) / self.sample_rate


@dataclass
class EncodedResult:
    """An encoded clip handed to the on_encoded callback."""

    payload: bytes = field(repr=False)
    mime_type: str
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    @property
    def size(self) -> int:
        return len(self.payload)

    @property
    def access_handle(self) -> str:
        """A data: URI addressing the payload."""
        encoded = base64.b64encode(self.payload).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def save(self, path: Path) -> Path:
        """Write the payload atomically and return the path."""
        write_bytes(path, self.payload)
        return path
