"""
SHA-1 (FIPS 180-4), used only as the hash underneath HMAC-SHA1.

Every call starts from the initial state, nothing is shared between calls.
"""
import struct

BLOCK_SIZE  = 64
DIGEST_SIZE = 20

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)
_MASK          = 0xFFFFFFFF


def _rotl(value: int, count: int) -> int:
    return ((value << count) | (value >> (32 - count))) & _MASK


def _pad(message: bytes) -> bytes:
    # 1 bit, zeros up to 56 mod 64, then the 64-bit big-endian bit length
    bit_length = (len(message) * 8) & 0xFFFFFFFFFFFFFFFF
    padding    = b"\x80" + b"\x00" * ((55 - len(message)) % BLOCK_SIZE)
    return message + padding + struct.pack(">Q", bit_length)


def _compress(state, block: bytes):
    w = list(struct.unpack(">16I", block))
    for i in range(16, 80):
        w.append(_rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

    a, b, c, d, e = state
    for i in range(80):
        if i < 20:
            f = (b & c) | (~b & d)
            k = 0x5A827999
        elif i < 40:
            f = b ^ c ^ d
            k = 0x6ED9EBA1
        elif i < 60:
            f = (b & c) | (b & d) | (c & d)
            k = 0x8F1BBCDC
        else:
            f = b ^ c ^ d
            k = 0xCA62C1D6
        temp = (_rotl(a, 5) + (f & _MASK) + e + k + w[i]) & _MASK
        a, b, c, d, e = temp, a, _rotl(b, 30), c, d

    return tuple((x + y) & _MASK for x, y in zip(state, (a, b, c, d, e)))


def sha1(message: bytes) -> bytes:
    """Return the 20-byte SHA-1 digest of ``message``."""
    padded = _pad(bytes(message))
    state  = _INITIAL_STATE
    for offset in range(0, len(padded), BLOCK_SIZE):
        state = _compress(state, padded[offset:offset + BLOCK_SIZE])
    return struct.pack(">5I", *state)
