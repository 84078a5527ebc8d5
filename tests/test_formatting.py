"""
Byte-size and quality formatting.
"""

import pytest

from seiscat.util.formatting import format_bytes, format_quality


# ============================================================================
# format_bytes
# ============================================================================

@pytest.mark.parametrize(
    "num_bytes, expected",
    [
        (0, "0 Bytes"),
        (1, "1 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 ** 2, "1 MB"),
        (156000000, "148.77 MB"),
        (890000000, "848.77 MB"),
        (1024 ** 3, "1 GB"),
        (2300000000000, "2.09 TB"),
        (4700000000000, "4.27 TB"),
    ],
)
def test_format_bytes_known_values(num_bytes, expected):
    assert format_bytes(num_bytes) == expected


def test_format_bytes_clamps_at_terabytes():
    assert format_bytes(1024 ** 5) == "1024 TB"
    assert format_bytes(1024 ** 6) == "1048576 TB"


def test_format_bytes_drops_trailing_zeros():
    # 1.10 KB -> "1.1 KB", never "1.10 KB"
    assert format_bytes(int(1024 * 1.1)) == "1.1 KB"


def test_format_bytes_rejects_negative():
    with pytest.raises(ValueError):
        format_bytes(-1)


def test_format_quality():
    assert format_quality(92) == "92%"
    assert format_quality(0) == "0%"
