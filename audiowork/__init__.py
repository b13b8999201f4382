"""
audiowork - Decode, slice and re-encode audio clips.

Takes raw encoded audio from a URL or an in-memory buffer and produces a
WAV clip of a chosen time range through a four-stage pipeline:
load → decode → extract → background encode.
"""

__version__ = "0.1.0"
