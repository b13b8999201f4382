"""
audiowork.encode - PCM to container bytes.

Pipeline Stage 4: encode a PCM slice to WAV on a background thread that
speaks a two-message protocol (dump / close).
"""

from __future__ import annotations
