"""Tests for HOTP/TOTP generation and verification."""

import pytest

from securesuite import otp
from securesuite.errors import InvalidSecret

SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

RFC4226_CODES = ["755224", "287082", "359152", "969429", "338314",
                 "254676", "287922", "162583", "399871", "520489"]


@pytest.mark.parametrize("counter, code", list(enumerate(RFC4226_CODES)))
def test_rfc4226_hotp_vectors(counter, code):
    assert otp.hotp(SECRET, counter) == code


@pytest.mark.parametrize("unix_time, code", [
    (59, "287082"),
    (1111111109, "081804"),
    (1111111111, "050471"),
    (1234567890, "005924"),
    (2000000000, "279037"),
])
def test_rfc6238_totp_vectors(unix_time, code):
    assert otp.totp(SECRET, unix_time) == code


def test_eight_digit_codes():
    assert otp.totp(SECRET, 59, digits=8) == "94287082"
    assert otp.totp(SECRET, 1111111109, digits=8) == "07081804"


def test_deterministic():
    assert otp.totp(SECRET, 1700000000) == otp.totp(SECRET, 1700000000)


def test_same_step_same_code():
    assert otp.totp(SECRET, 60) == otp.totp(SECRET, 89)
    assert otp.time_counter(60) == otp.time_counter(89) == 2


def test_time_zero():
    assert otp.time_counter(0) == 0
    assert otp.totp(SECRET, 0) == RFC4226_CODES[0]


def test_lowercase_and_unpadded_secret():
    assert otp.totp(SECRET.lower(), 59) == "287082"
    assert otp.totp("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ====", 59) == "287082"


@pytest.mark.parametrize("secret", ["", "!!!!", "0189", "A"])
def test_invalid_secret_raises(secret):
    with pytest.raises(InvalidSecret):
        otp.totp(secret, 59)


@pytest.mark.parametrize("kwargs", [{"step": 0}, {"step": -30}, {"step": 1.5}, {"digits": 5}, {"digits": 9}])
def test_bad_arguments(kwargs):
    with pytest.raises(ValueError):
        otp.totp(SECRET, 59, **kwargs)


def test_negative_time_and_counter():
    with pytest.raises(ValueError):
        otp.totp(SECRET, -1)
    with pytest.raises(ValueError):
        otp.hotp(SECRET, -1)


def test_time_remaining():
    assert otp.time_remaining(59) == 1
    assert otp.time_remaining(60) == 30
    assert otp.time_remaining(75, step=60) == 45
    assert 1 <= otp.time_remaining() <= 30


def test_now_uses_clock(monkeypatch):
    monkeypatch.setattr(otp.time, "time", lambda: 59.7)
    assert otp.now(SECRET) == "287082"


def test_strings_equal():
    assert otp.strings_equal("123456", "123456")
    assert not otp.strings_equal("123456", "123457")
    assert not otp.strings_equal("123456", "12345")


@pytest.mark.parametrize("window", [0, 1, 2, 3])
def test_window_accepts_adjacent_steps(window):
    current = 1111111109 // 30
    for offset in range(-window, window + 1):
        code = otp.hotp(SECRET, current + offset)
        assert otp.verify(SECRET, code, current * 30, window=window)


@pytest.mark.parametrize("window", [0, 1, 2])
def test_window_rejects_steps_outside(window):
    current = 1111111109 // 30
    assert not otp.verify(SECRET, otp.hotp(SECRET, current + window + 1), current * 30, window=window)
    assert not otp.verify(SECRET, otp.hotp(SECRET, current - window - 1), current * 30, window=window)


def test_verify_near_epoch_skips_negative_counters():
    assert otp.verify(SECRET, RFC4226_CODES[0], 0, window=2)
    assert otp.verify(SECRET, RFC4226_CODES[1], 0, window=1)


@pytest.mark.parametrize("candidate", ["", "abc", "12345", "1234567", "12 456", "12345a", "١٢٣٤٥٦", None])
def test_verify_rejects_malformed_candidates(candidate):
    assert otp.verify(SECRET, candidate, 59) is False


def test_malformed_candidate_skips_computation(monkeypatch):
    def fail(*args):
        raise AssertionError("HMAC computed for a malformed code")

    monkeypatch.setattr(otp, "hmac_sha1", fail)
    assert otp.verify(SECRET, "abc", 59) is False
    # a malformed code is rejected before the secret is looked at
    assert otp.verify("", "abc", 59) is False


def test_verify_invalid_secret_raises():
    with pytest.raises(InvalidSecret):
        otp.verify("!!!!", "123456", 59)


def test_verify_negative_window():
    with pytest.raises(ValueError):
        otp.verify(SECRET, "287082", 59, window=-1)


def test_verify_uses_clock_by_default(monkeypatch):
    monkeypatch.setattr(otp.time, "time", lambda: 1111111111.2)
    assert otp.verify(SECRET, "050471")


def test_check_candidate():
    from securesuite.errors import InvalidCandidate

    assert otp.check_candidate("012345") == "012345"
    assert otp.check_candidate("01234567", digits=8) == "01234567"
    with pytest.raises(InvalidCandidate):
        otp.check_candidate("01234")


def test_counter_above_64_bits():
    assert otp.hotp(SECRET, 2 ** 64 - 1)
    with pytest.raises(ValueError):
        otp.hotp(SECRET, 2 ** 64)
    with pytest.raises(ValueError):
        otp.totp(SECRET, 2 ** 64 * 30)
