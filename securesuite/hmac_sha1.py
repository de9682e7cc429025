"""HMAC (RFC 2104) over the SHA-1 primitive."""
from .sha1 import BLOCK_SIZE, sha1

_IPAD = 0x36
_OPAD = 0x5C


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    if len(key) > BLOCK_SIZE:
        key = sha1(key)
    key = bytes(key).ljust(BLOCK_SIZE, b"\x00")

    inner_key = bytes(k ^ _IPAD for k in key)
    outer_key = bytes(k ^ _OPAD for k in key)

    inner = sha1(inner_key + bytes(message))
    return sha1(outer_key + inner)
