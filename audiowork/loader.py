"""
audiowork.loader - Raw audio byte retrieval.

The network transport is a single binary GET through urllib. Any failure
surfaces as LoadError so callers handle one exception type.
"""

from __future__ import annotations

import urllib.error
import urllib.request
from pathlib import Path

from audiowork.exceptions import LoadError
from audiowork.io import read_bytes


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_url(url: str, timeout: float = 30.0) -> bytes:
    """Fetch binary content from a URL.

    Args:
        url: http(s) URL of the audio resource
        timeout: Socket timeout in seconds

    Returns:
        Response body

    Raises:
        LoadError: On HTTP errors, connection failures, or an empty body
    """
    req = urllib.request.Request(url, method="GET")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise LoadError(f"GET {url} returned HTTP {status}")
            data = response.read()
    except urllib.error.HTTPError as e:
        raise LoadError(f"GET {url} returned HTTP {e.code}") from e
    except urllib.error.URLError as e:
        raise LoadError(f"GET {url} failed: {e.reason}") from e
    except OSError as e:
        raise LoadError(f"GET {url} failed: {e}") from e

    if not data:
        raise LoadError(f"GET {url} returned an empty body")
    return data


def read_file(path: Path) -> bytes:
    """Read raw audio bytes from a local file.

    Raises:
        LoadError: If the file is missing or unreadable
    """
    try:
        data = read_bytes(path)
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}") from e
    if not data:
        raise LoadError(f"{path} is empty")
    return data
