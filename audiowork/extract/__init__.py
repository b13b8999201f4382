"""
audiowork.extract - Time range extraction from decoded PCM.

Pipeline Stage 3: slice a [from, to) window out of channel 0.
"""

from __future__ import annotations
