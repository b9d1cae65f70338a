"""Render cache fingerprints for markdown bodies"""

import string


_DIGITS = string.digits + string.ascii_lowercase


def _utf16_units(text: str):
    for ch in text:
        code = ord(ch)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


def fingerprint(content: str) -> str:
    """Return a short, order-sensitive base-36 hash of content.

    31-multiplier rolling hash over UTF-16 code units, wrapped to a signed
    32-bit integer, so keys match those produced by the browser build.
    Not collision-resistant; only used as a memoization key.
    """
    h = 0
    for unit in _utf16_units(content):
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return _base36(abs(h))
