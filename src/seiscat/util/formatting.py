# src/seiscat/util/formatting.py

from __future__ import annotations


BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")

_K = 1024


def format_bytes(num_bytes: int) -> str:
    """
    Render a byte count with base-1024 units.

    The unit is floor(log_1024(n)) clamped to TB, and the value is rounded
    to two decimals with trailing zeros dropped:

        format_bytes(0)          -> "0 Bytes"
        format_bytes(1024)       -> "1 KB"
        format_bytes(1536)       -> "1.5 KB"
        format_bytes(2300000000000) -> "2.09 TB"
    """
    if num_bytes < 0:
        raise ValueError(f"Byte count must be non-negative, got {num_bytes}")
    if num_bytes == 0:
        return "0 Bytes"

    # Integer stepping gives floor(log_1024(n)) without float log error
    unit = 0
    scaled = num_bytes
    while scaled >= _K and unit < len(BYTE_UNITS) - 1:
        scaled //= _K
        unit += 1

    value = num_bytes / (_K ** unit)
    return f"{_trim_decimal(value)} {BYTE_UNITS[unit]}"


def format_quality(quality: int) -> str:
    return f"{quality}%"


def _trim_decimal(value: float) -> str:
    text = f"{value:.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
