"""
audiowork.encode.worker - Background encoding unit.

A daemon thread owns an inbox queue and understands two messages:

    ("dump", sample_rate, samples)  encode samples, reply via on_message
    ("close",)                      stop; no reply

Only one dump may be in flight at a time. Results that complete after
close are dropped.
"""

from __future__ import annotations

import queue
import threading
from typing import Any, Callable

import numpy as np

from audiowork.encode.wav import encode_wav
from audiowork.exceptions import EncoderBusyError, EncoderUnavailableError, EncodingError
from audiowork.logging import logger

DUMP = "dump"
CLOSE = "close"

EncodeFn = Callable[[np.ndarray, int], bytes]


class BackgroundEncoder:
    """Encodes PCM on its own thread and replies through callbacks."""

    def __init__(
        self,
        on_message: Callable[[bytes], None],
        on_error: Callable[[EncodingError], None] | None = None,
        encode: EncodeFn = encode_wav,
        name: str = "audiowork-encoder",
    ) -> None:
        self._on_message = on_message
        self._on_error = on_error
        self._encode = encode
        self._inbox: queue.Queue[tuple[Any, ...]] = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._inflight = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def busy(self) -> bool:
        return self._inflight

    def post_message(self, message: tuple[Any, ...]) -> None:
        """Send a protocol message to the encoder thread.

        Raises:
            EncoderUnavailableError: If the encoder has been closed
            EncoderBusyError: If a dump is already in flight
            ValueError: If the message is malformed
        """
        if not message:
            raise ValueError("Empty encoder message")

        kind = message[0]
        with self._lock:
            if self._closed:
                raise EncoderUnavailableError(f"Encoder is closed; cannot accept {kind!r}")
            if kind == DUMP:
                if len(message) != 3:
                    raise ValueError("dump message must be (dump, sample_rate, samples)")
                if self._inflight:
                    raise EncoderBusyError("An encode is already in flight")
                self._inflight = True
            elif kind == CLOSE:
                self._closed = True
            else:
                raise ValueError(f"Unknown encoder message: {kind!r}")
        self._inbox.put(message)

    def encode(self, sample_rate: int, samples: np.ndarray) -> None:
        self.post_message((DUMP, sample_rate, samples))

    def terminate(self) -> None:
        """Close the encoder. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
        try:
            self.post_message((CLOSE,))
        except EncoderUnavailableError:
            pass

    def join(self, timeout: float | None = None) -> None:
        self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            message = self._inbox.get()
            if message[0] == CLOSE:
                logger.debug("Encoder thread %s stopping", self._thread.name)
                return

            _, sample_rate, samples = message
            try:
                payload = self._encode(samples, sample_rate)
            except Exception as e:
                error = EncodingError(f"Encoding failed: {e}")
                error.__cause__ = e
                self._deliver(self._on_error, error)
            else:
                self._deliver(self._on_message, payload)

    def _deliver(self, callback: Callable[[Any], None] | None, value: Any) -> None:
        with self._lock:
            self._inflight = False
            if self._closed:
                logger.debug("Encoder closed; dropping %s", type(value).__name__)
                return

        if callback is None:
            if isinstance(value, Exception):
                logger.warning("%s", value)
            return

        try:
            callback(value)
        except Exception:
            logger.exception("Encoder callback failed")
