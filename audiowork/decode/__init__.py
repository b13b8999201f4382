"""
audiowork.decode - Encoded bytes to PCM.

Pipeline Stage 2: decode a whole in-memory container into float32 PCM at
the configured sample rate, keeping every channel.
"""

from __future__ import annotations
