"""
audiowork.service - Pipeline façade.

PipelineService composes loading, decoding, extraction and background
encoding into one fluent object:

    service = PipelineService({"sample_rate": 16000})
    service.on_encoded(handle_clip).on_error(handle_error)
    service.load_from_url(url).extract(1.5, 4.0)

Fetch and decode run on a short-lived loader thread, encoding on the
encoder thread. Results and failures arrive through the "encoded" and
"error" events, on whichever thread produced them.
"""

from __future__ import annotations

import threading
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from audiowork.config import PipelineConfig, build_config
from audiowork.decode.audio import decode_audio
from audiowork.encode.wav import encode_wav
from audiowork.encode.worker import BackgroundEncoder, EncodeFn
from audiowork.events import DECODED, ENCODED, ERROR, EventChannel
from audiowork.exceptions import (
    AudioWorkError,
    DecodeError,
    EncoderBusyError,
    EncodingError,
    ExtractionError,
    InvalidRangeError,
    LoadError,
    LoadInProgressError,
    PipelineClosedError,
)
from audiowork.extract.pcm import extract_range, validate_range
from audiowork.loader import fetch_url, is_url, read_file
from audiowork.logging import logger
from audiowork.models import DecodedAudio, EncodedResult, ExtractionRange

FetchFn = Callable[[str, float], bytes]


class PipelineState(str, Enum):
    IDLE = "idle"
    LOADED = "loaded"
    DECODED = "decoded"
    EXTRACTION_PENDING = "extraction_pending"
    ENCODING = "encoding"
    COMPLETED = "completed"
    CLOSED = "closed"


class PipelineService:
    """Load → decode → extract → encode pipeline with event-based completion."""

    def __init__(
        self,
        config: PipelineConfig | dict[str, Any] | None = None,
        fetch: FetchFn = fetch_url,
        encode: EncodeFn = encode_wav,
    ) -> None:
        if config is None:
            config = PipelineConfig()
        elif isinstance(config, dict):
            config = build_config(config)
        self._config = config
        self._fetch = fetch

        self._lock = threading.RLock()
        self._state = PipelineState.IDLE
        self._audio_data: bytes | None = None
        self._decoded: DecodedAudio | None = None
        self._pending: ExtractionRange | None = None
        self._fetching = False
        # Bumped on every load and on destroy; stale loader threads compare against it.
        self._generation = 0

        self._events = EventChannel()
        self._events.on(DECODED, self._on_decoded)

        self._encoder = BackgroundEncoder(
            on_message=self._on_data_available,
            on_error=self._report,
            encode=encode,
        )

        self._debug("Configuration %s", self._config)

    def __enter__(self) -> PipelineService:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.destroy()

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def audio_data(self) -> bytes | None:
        return self._audio_data

    @property
    def decoded(self) -> DecodedAudio | None:
        return self._decoded

    @property
    def closed(self) -> bool:
        return self._state is PipelineState.CLOSED

    # Loading

    def load_from_buffer(self, data: bytes | bytearray | memoryview) -> PipelineService:
        """Store raw container bytes and start decoding them.

        Raises:
            LoadInProgressError: If a URL retrieval is still in flight
            PipelineClosedError: After destroy()
        """
        data = bytes(data)
        with self._lock:
            self._check_open()
            if self._fetching:
                raise LoadInProgressError("A retrieval is already in flight")
            generation = self._begin_load()
            self._audio_data = data

        self._debug("Load audio buffer (%d bytes)", len(data))
        self._spawn(self._decode, generation, data)
        return self

    def load_from_file(self, path: Path | str) -> PipelineService:
        """Read a local file and load its bytes."""
        try:
            data = read_file(Path(path))
        except LoadError as e:
            self._check_open()
            self._report(e)
            return self
        return self.load_from_buffer(data)

    def load_from_url(self, url: str) -> PipelineService:
        """Fetch raw bytes with a single GET, then decode them.

        Only one retrieval may be in flight; a second load before it
        finishes is rejected.

        Raises:
            LoadInProgressError: If a retrieval is already in flight
            PipelineClosedError: After destroy()
        """
        with self._lock:
            self._check_open()
            if self._fetching:
                raise LoadInProgressError("A retrieval is already in flight")
            generation = self._begin_load()
            self._fetching = True

        self._debug("Load audio file from url %s", url)
        self._spawn(self._fetch_and_decode, generation, url)
        return self

    def _begin_load(self) -> int:
        self._generation += 1
        self._audio_data = None
        self._decoded = None
        self._state = PipelineState.LOADED
        return self._generation

    def _spawn(self, target: Callable[..., None], *args: Any) -> None:
        thread = threading.Thread(target=target, args=args, name="audiowork-loader", daemon=True)
        thread.start()

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and not self.closed

    def _fetch_and_decode(self, generation: int, url: str) -> None:
        error: LoadError | None = None
        data = b""
        try:
            data = self._fetch(url, self._config.fetch_timeout)
        except LoadError as e:
            error = e
        except Exception as e:
            error = LoadError(f"GET {url} failed: {e}")
            error.__cause__ = e

        with self._lock:
            if not self._is_current(generation):
                return
            self._fetching = False
            if error is None:
                self._audio_data = data
            else:
                self._state = PipelineState.IDLE

        if error is not None:
            self._report(error)
            return

        self._debug("Fetched %d bytes from %s", len(data), url)
        self._decode(generation, data)

    def _decode(self, generation: int, data: bytes) -> None:
        try:
            decoded = decode_audio(
                data,
                self._config.sample_rate,
                max_seconds=self._config.max_decode_seconds,
            )
        except DecodeError as e:
            with self._lock:
                if not self._is_current(generation):
                    return
                self._state = PipelineState.IDLE
            self._report(e)
            return

        with self._lock:
            if not self._is_current(generation):
                self._debug("Discarding decode from superseded load")
                return
            self._decoded = decoded
            self._state = PipelineState.DECODED

        self._debug(
            "Decoded audio: %d channel(s), %d samples at %d Hz",
            decoded.channel_count,
            decoded.length,
            decoded.sample_rate,
        )
        self._events.emit(DECODED, decoded)

    # Extraction

    def extract(self, from_seconds: float, to_seconds: float) -> PipelineService:
        """Slice [from_seconds, to_seconds) from channel 0 and encode it.

        Before decoding completes, the request is held and serviced on the
        next "decoded" event; a newer request replaces a held one. Range
        errors are published on the "error" event and nothing is encoded.

        Raises:
            EncoderBusyError: If the previous clip is still encoding
            PipelineClosedError: After destroy()
        """
        extraction = ExtractionRange(float(from_seconds), float(to_seconds))
        try:
            validate_range(extraction)
        except InvalidRangeError as e:
            self._check_open()
            self._report(e)
            return self

        with self._lock:
            self._check_open()
            if self._encoder.busy:
                raise EncoderBusyError("Previous clip is still encoding")
            decoded = self._decoded
            if decoded is None:
                self._pending = extraction
                self._debug("Extraction %s held until decode completes", extraction)
                return self
            # Decode finished but the "decoded" event may not have fired yet.
            self._pending = None
            self._state = PipelineState.EXTRACTION_PENDING

        self._start_extraction(decoded, extraction)
        return self

    def _on_decoded(self, decoded: DecodedAudio) -> None:
        with self._lock:
            extraction = self._pending
            self._pending = None
            if extraction is None or self.closed:
                return
            self._state = PipelineState.EXTRACTION_PENDING
        self._start_extraction(decoded, extraction)

    def _start_extraction(self, decoded: DecodedAudio, extraction: ExtractionRange) -> None:
        try:
            pcm = extract_range(decoded, extraction)
        except ExtractionError as e:
            with self._lock:
                if self._state is PipelineState.EXTRACTION_PENDING:
                    self._state = PipelineState.DECODED
            self._report(e)
            return

        self._debug("Extracted audio from %d to %d (%d samples)", pcm.start, pcm.end, len(pcm))

        with self._lock:
            if self.closed:
                return
            try:
                self._encoder.encode(pcm.sample_rate, pcm.samples)
            except EncodingError as e:
                self._state = PipelineState.DECODED
                error: AudioWorkError | None = e
            else:
                self._state = PipelineState.ENCODING
                error = None

        if error is not None:
            self._report(error)

    def _on_data_available(self, payload: bytes) -> None:
        with self._lock:
            if self.closed:
                return
            if self._state is PipelineState.ENCODING:
                self._state = PipelineState.COMPLETED

        result = EncodedResult(payload=payload, mime_type=self._config.mime_type)
        self._debug("Encoded %d bytes of %s", result.size, result.mime_type)
        self._events.emit(ENCODED, result)

        with self._lock:
            if self._state is PipelineState.COMPLETED:
                self._state = PipelineState.IDLE

    # Callbacks

    def on_encoded(self, callback: Callable[[EncodedResult], None]) -> PipelineService:
        """Register the completion callback for the next encoded clip.

        The registration is one-shot and replaces any earlier one.
        """
        self._check_open()

        def listener(result: EncodedResult) -> None:
            try:
                callback(result)
            finally:
                self._events.off(ENCODED, listener)

        self._events.off(ENCODED)
        self._events.on(ENCODED, listener)
        return self

    def on_error(self, callback: Callable[[AudioWorkError], None]) -> PipelineService:
        """Register the callback receiving every pipeline failure, replacing any earlier one."""
        self._check_open()
        self._events.off(ERROR)
        self._events.on(ERROR, callback)
        return self

    def _report(self, error: AudioWorkError) -> None:
        if self.closed:
            return
        self._debug("%s: %s", type(error).__name__, error)
        if self._events.emit(ERROR, error) == 0:
            logger.warning("%s: %s", type(error).__name__, error)

    # Teardown

    def destroy(self) -> None:
        """Drop listeners and data and terminate the encoder. Safe in any state."""
        with self._lock:
            if self.closed:
                return
            self._state = PipelineState.CLOSED
            self._generation += 1
            self._fetching = False
            self._pending = None
            self._audio_data = None
            self._decoded = None
            self._events.clear()
        self._encoder.terminate()
        self._debug("Destroyed")

    def _check_open(self) -> None:
        if self.closed:
            raise PipelineClosedError("Pipeline has been destroyed")

    def _debug(self, msg: str, *args: Any) -> None:
        if self._config.debug_log:
            logger.debug("PipelineService: " + msg, *args)


def extract_clip(
    source: str | Path | bytes,
    from_seconds: float,
    to_seconds: float,
    config: PipelineConfig | None = None,
    timeout: float | None = 120.0,
) -> EncodedResult:
    """Run one full cycle and block until the clip is encoded.

    Args:
        source: http(s) URL, file path, or raw container bytes
        from_seconds: Range start
        to_seconds: Range end
        config: Pipeline configuration (defaults if None)
        timeout: Seconds to wait for completion; None waits forever

    Returns:
        The encoded clip

    Raises:
        AudioWorkError: Whatever the pipeline reported
        TimeoutError: If nothing was reported within timeout
    """
    done = threading.Event()
    outcome: dict[str, Any] = {}

    def on_encoded(result: EncodedResult) -> None:
        outcome["result"] = result
        done.set()

    def on_error(error: AudioWorkError) -> None:
        outcome.setdefault("error", error)
        done.set()

    with PipelineService(config) as service:
        service.on_encoded(on_encoded).on_error(on_error)
        if isinstance(source, (bytes, bytearray)):
            service.load_from_buffer(source)
        elif isinstance(source, str) and is_url(source):
            service.load_from_url(source)
        else:
            service.load_from_file(source)
        service.extract(from_seconds, to_seconds)

        if not done.wait(timeout):
            raise TimeoutError(f"No result within {timeout}s")

    if "error" in outcome:
        raise outcome["error"]
    return outcome["result"]
