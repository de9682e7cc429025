"""Tests for the SHA-1 and HMAC-SHA1 primitives."""

import hashlib
import hmac
import os

import pytest

from securesuite.hmac_sha1 import hmac_sha1
from securesuite.sha1 import sha1


@pytest.mark.parametrize("message, digest", [
    (b"", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
    (b"abc", "a9993e364706816aba3e25717850c26c9cd0d89d"),
    (b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
     "84983e441c3bd26ebaae4aa1f95129e5e54670f1"),
])
def test_fips_vectors(message, digest):
    assert sha1(message).hex() == digest


def test_padding_boundaries_match_hashlib():
    # lengths around the 55/56/64 byte padding edges
    for length in (54, 55, 56, 57, 63, 64, 65, 119, 120, 128, 1000):
        data = os.urandom(length)
        assert sha1(data) == hashlib.sha1(data).digest()


def test_million_a():
    assert sha1(b"a" * 1000000).hex() == "34aa973cd4c4daa4f61eeb2bdbad27316534016f"


def test_digest_size_and_determinism():
    assert len(sha1(b"secure")) == 20
    assert sha1(b"secure") == sha1(b"secure")


@pytest.mark.parametrize("key, message, digest", [
    (b"\x0b" * 20, b"Hi There", "b617318655057264e28bc0b6fb378c8ef146be00"),
    (b"Jefe", b"what do ya want for nothing?", "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"),
    (b"\xaa" * 80, b"Test Using Larger Than Block-Size Key - Hash Key First",
     "aa4ae5e15272d00e95705637ce8a3b55ed402112"),
])
def test_hmac_rfc2202_vectors(key, message, digest):
    assert hmac_sha1(key, message).hex() == digest


def test_hmac_matches_stdlib():
    for key_length in (0, 1, 20, 63, 64, 65, 100):
        key = os.urandom(key_length)
        message = os.urandom(37)
        assert hmac_sha1(key, message) == hmac.new(key, message, hashlib.sha1).digest()


def test_hmac_accepts_empty_inputs():
    assert hmac_sha1(b"", b"") == hmac.new(b"", b"", hashlib.sha1).digest()
