"""
RFC 4648 base32 for shared secrets.

Decoding is permissive: characters outside the alphabet are skipped and a
trailing group of fewer than 8 bits is dropped, so secrets typed or scanned
with some formatting noise still decode.
"""
import re

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

# both cases, looked up one character at a time
_VALUES      = {char: index for index, char in enumerate(ALPHABET)}
_VALUES.update({char.lower(): index for char, index in list(_VALUES.items())})
_SECRET_RE   = re.compile(r"[A-Z2-7]+=*", re.IGNORECASE | re.ASCII)
_SEPARATORS  = re.compile(r"[\s-]+")


def encode(data: bytes) -> str:
    buffer    = 0
    bits_left = 0
    chars     = []
    for byte in data:
        buffer     = ((buffer << 8) | byte) & 0xFFF
        bits_left += 8
        while bits_left >= 5:
            bits_left -= 5
            chars.append(ALPHABET[(buffer >> bits_left) & 0x1F])
    if bits_left:
        # pad the final group with zero bits
        chars.append(ALPHABET[(buffer << (5 - bits_left)) & 0x1F])
    chars.extend("=" * (-len(chars) % 8))
    return "".join(chars)


def decode(text: str) -> bytes:
    buffer    = 0
    bits_left = 0
    result    = bytearray()
    for char in text:
        value = _VALUES.get(char)
        if value is None:
            continue
        buffer     = ((buffer << 5) | value) & 0xFFF
        bits_left += 5
        if bits_left >= 8:
            bits_left -= 8
            result.append((buffer >> bits_left) & 0xFF)
    return bytes(result)


def is_valid_secret(text: str) -> bool:
    """Strict format check: alphabet characters followed by optional padding."""
    return bool(text) and _SECRET_RE.fullmatch(text) is not None


def normalize_secret(text: str) -> str:
    """Uppercase a hand-entered setup key and drop spaces and dashes."""
    return "".join(char.upper() if char.isascii() else char for char in _SEPARATORS.sub("", text))
