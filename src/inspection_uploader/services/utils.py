"""Utility functions."""

import base64
import binascii
import time


def decode_base64_image(data: str) -> bytes:
    """
    Decode a base64 image payload.

    Whitespace is ignored; any other character outside the base64 alphabet
    is an error.

    Raises:
        ValueError: If the payload is not valid base64 or decodes to nothing.
    """
    try:
        decoded = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 data: {e}") from e

    if not decoded:
        raise ValueError("Empty image data")
    return decoded


def format_kb(size: int) -> str:
    """Format a byte count as KiB with two decimals."""
    return f"{size / 1024:.2f}"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
