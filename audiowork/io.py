"""
audiowork.io - Binary read/write helpers, atomic file writes.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


def read_bytes(path: Path) -> bytes:
    """Read a file as raw bytes.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    with open(path, "rb") as f:
        return f.read()


def write_bytes(path: Path, data: bytes) -> None:
    """Write bytes atomically.

    Writes to a temp file first, then renames to prevent a truncated
    output on interruption.

    Args:
        path: Destination path
        data: Bytes to write
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)
