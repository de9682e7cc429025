"""
HOTP (RFC 4226) and TOTP (RFC 6238) code generation and verification.

All functions are pure over their arguments; ``now`` and the default time of
``verify`` are the only places that read the clock.
"""
import logging
import struct
import time

from . import base32
from .errors import InvalidCandidate, InvalidSecret
from .hmac_sha1 import hmac_sha1

log = logging.getLogger(__name__)

DEFAULT_STEP   = 30
DEFAULT_DIGITS = 6
DEFAULT_WINDOW = 1


def _check_digits(digits: int):
    if not 6 <= digits <= 8:
        raise ValueError(f"digits must be between 6 and 8, got {digits}")


def _check_step(step: int):
    if not isinstance(step, int) or step <= 0:
        raise ValueError(f"step must be a positive integer, got {step!r}")


def decode_secret(secret: str) -> bytes:
    """
    Decode a base32 secret into key bytes.
    Raises InvalidSecret if nothing usable is left after decoding.
    """
    key = base32.decode(secret or "")
    if not key:
        raise InvalidSecret("secret does not contain any base32 key material")
    return key


def truncate(digest: bytes, digits: int = DEFAULT_DIGITS) -> str:
    # https://www.rfc-editor.org/rfc/rfc4226#section-5.4
    offset = digest[19] & 0x0F
    binary = struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF
    return str(binary % (10 ** digits)).zfill(digits)


def hotp(secret: str, counter: int, digits: int = DEFAULT_DIGITS) -> str:
    _check_digits(digits)
    if not 0 <= counter < 2 ** 64:
        raise ValueError("counter must fit in an unsigned 64-bit integer")
    key = decode_secret(secret)
    # Pack counter value in 8-byte big-endian format.
    counter_bytes = struct.pack(">Q", counter)
    return truncate(hmac_sha1(key, counter_bytes), digits)


def time_counter(unix_time, step: int = DEFAULT_STEP) -> int:
    _check_step(step)
    if unix_time < 0:
        raise ValueError("unix time must be non-negative")
    return int(unix_time // step)


def totp(secret: str, unix_time, step: int = DEFAULT_STEP, digits: int = DEFAULT_DIGITS) -> str:
    """Code for the time step that contains ``unix_time``."""
    return hotp(secret, time_counter(unix_time, step), digits)


def now(secret: str, step: int = DEFAULT_STEP, digits: int = DEFAULT_DIGITS) -> str:
    return totp(secret, int(time.time()), step, digits)


def time_remaining(unix_time=None, step: int = DEFAULT_STEP) -> int:
    """Seconds until the next code, between 1 and ``step``."""
    _check_step(step)
    if unix_time is None:
        unix_time = time.time()
    return step - int(unix_time % step)


def strings_equal(left: str, right: str) -> bool:
    """Compare two equal-length strings without stopping at the first mismatch."""
    if len(left) != len(right):
        return False
    result = 0
    for a, b in zip(left.encode("utf-8"), right.encode("utf-8")):
        result |= a ^ b
    return result == 0


def check_candidate(code: str, digits: int = DEFAULT_DIGITS) -> str:
    if not isinstance(code, str) or len(code) != digits or not (code.isascii() and code.isdigit()):
        raise InvalidCandidate(f"code must be exactly {digits} decimal digits")
    return code


def verify(secret: str, code: str, unix_time=None, window: int = DEFAULT_WINDOW,
           step: int = DEFAULT_STEP, digits: int = DEFAULT_DIGITS) -> bool:
    """
    Check ``code`` against the codes of every time step within ``window``
    steps of ``unix_time`` (current time if omitted).

    A malformed code is rejected before any HMAC is computed. An undecodable
    secret raises InvalidSecret so it is never confused with a mismatch.
    """
    if window < 0:
        raise ValueError("window must be non-negative")
    try:
        check_candidate(code, digits)
    except InvalidCandidate:
        log.debug("rejected malformed candidate code")
        return False

    decode_secret(secret)
    if unix_time is None:
        unix_time = int(time.time())
    current = time_counter(unix_time, step)

    for offset in range(-window, window + 1):
        counter = current + offset
        if counter < 0:
            continue
        if strings_equal(hotp(secret, counter, digits), code):
            log.debug("code matched at step offset %d", offset)
            return True
    return False
