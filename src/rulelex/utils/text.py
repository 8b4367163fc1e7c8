"""Byte-span helpers for diagnostics."""

from __future__ import annotations


def excerpt(data: bytes | memoryview, limit: int | None = None) -> tuple[bytes, bool]:
    """Copy a bounded prefix of data for use in an error message.

    Args:
        data: Bytes or a view into the scanned input
        limit: Maximum bytes to keep (None = keep everything)

    Returns:
        (prefix, truncated) where truncated is True if data was cut

    Examples:
        >>> excerpt(b" 123")
        (b' 123', False)
        >>> excerpt(b"abcdef", limit=3)
        (b'abc', True)
    """
    if limit is None or len(data) <= limit:
        return bytes(data), False
    return bytes(data[: max(limit, 0)]), True

