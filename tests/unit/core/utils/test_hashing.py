"""Unit tests for core/utils/hashing.py"""

import pytest

from mdblog.core.utils.hashing import _base36, fingerprint


@pytest.mark.parametrize("content,expected", [
    ("",    "0"),
    ("a",   "2p"),
    ("ab",  "2e9"),
])
def test_fingerprint_known_values(content, expected):
    assert fingerprint(content) == expected


def test_fingerprint_is_deterministic_and_order_sensitive():
    assert fingerprint("# Title\n\nbody") == fingerprint("# Title\n\nbody")
    assert fingerprint("ab") != fingerprint("ba")


def test_fingerprint_long_input_stays_base36():
    key = fingerprint("lorem ipsum " * 1000)
    assert key
    assert set(key) <= set("0123456789abcdefghijklmnopqrstuvwxyz")


def test_fingerprint_hashes_astral_chars_as_surrogate_pairs():
    """Characters outside the BMP hash like their two UTF-16 code units."""
    h = 0
    for unit in (0xD83D, 0xDE00):
        h = (h * 31 + unit) & 0xFFFFFFFF
    assert fingerprint("\U0001F600") == _base36(h)


@pytest.mark.parametrize("n,expected", [(0, "0"), (35, "z"), (36, "10"), (1295, "zz")])
def test_base36(n, expected):
    assert _base36(n) == expected
