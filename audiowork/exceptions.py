"""
audiowork.exceptions - Custom exception classes.

All audiowork-specific exceptions inherit from AudioWorkError.
"""


class AudioWorkError(Exception):
    """Base exception for all audiowork errors."""

    pass


class ConfigError(AudioWorkError):
    """Configuration loading or validation error."""

    pass


class LoadError(AudioWorkError):
    """Raw audio bytes could not be retrieved."""

    pass


class LoadInProgressError(LoadError):
    """A retrieval is already in flight for this pipeline."""

    pass


class DecodeError(AudioWorkError):
    """Input bytes are not a recognised or intact audio container."""

    pass


class ExtractionError(AudioWorkError):
    """Time range extraction error."""

    pass


class InvalidRangeError(ExtractionError):
    """Extraction range start is not before its end."""

    def __init__(self, from_seconds: float, to_seconds: float):
        self.from_seconds = from_seconds
        self.to_seconds = to_seconds
        super().__init__(
            f"'from' must be non-negative and less than 'to' "
            f"(from={from_seconds}, to={to_seconds})"
        )


class RangeOutOfBoundsError(ExtractionError):
    """Extraction range ends past the decoded audio."""

    def __init__(self, to_seconds: float, duration_seconds: float):
        self.to_seconds = to_seconds
        self.duration_seconds = duration_seconds
        super().__init__(
            f"'to' must not exceed audio length ({to_seconds}s > {duration_seconds:.3f}s)"
        )


class EncodingError(AudioWorkError):
    """Background encoder failed to produce a container."""

    pass


class EncoderUnavailableError(EncodingError):
    """Message sent to an encoder that has been terminated."""

    pass


class EncoderBusyError(EncodingError):
    """Encode requested while another encode is still in flight."""

    pass


class PipelineClosedError(AudioWorkError):
    """Pipeline used after destroy()."""

    pass
