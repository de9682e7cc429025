import time

from . import base32
from .errors import (InvalidCandidate, InvalidSecret, MalformedUri, OTPError,
                     ProvisioningUnavailable)
from .hmac_sha1 import hmac_sha1
from .otp import (DEFAULT_DIGITS, DEFAULT_STEP, DEFAULT_WINDOW, check_candidate, decode_secret, hotp,
                  now, time_counter, time_remaining, totp, verify)
from .provisioning import (Provisioned, build_uri, generate_secret, provision,
                           qr_code_data_url, qr_code_image)
from .sha1 import sha1
from .uri import ParsedUri, parse_uri

__all__ = [
    "TOTPAuthenticator",
    "base32", "sha1", "hmac_sha1",
    "hotp", "totp", "now", "time_counter", "time_remaining", "check_candidate", "verify",
    "Provisioned", "generate_secret", "build_uri", "provision", "qr_code_image", "qr_code_data_url",
    "ParsedUri", "parse_uri",
    "OTPError", "InvalidSecret", "InvalidCandidate", "ProvisioningUnavailable", "MalformedUri",
]


class TOTPAuthenticator:
    def __init__(self, secret: str = None, interval: int = DEFAULT_STEP, digits: int = DEFAULT_DIGITS):
        """
        Initialize authenticator
        If no secret is given a new secret is generated
        Raises InvalidSecret if the secret holds no key material
        """
        self.interval = interval
        self.digits   = digits
        if secret is None:
            self.secret = self.generate_secret()
        else:
            self.secret = base32.normalize_secret(secret)
        # fail early on secrets that cannot produce a code
        decode_secret(self.secret)

    @staticmethod
    def generate_secret() -> str:
        return generate_secret()

    def get_time_counter(self, for_time: int = None) -> int:
        if for_time is None:
            for_time = int(time.time())
        return time_counter(for_time, self.interval)

    def hotp(self, counter: int) -> str:
        return hotp(self.secret, counter, self.digits)

    def at(self, for_time: int) -> str:
        return totp(self.secret, for_time, self.interval, self.digits)

    def generate_current_otp(self) -> str:
        return self.at(int(time.time()))

    def time_remaining(self) -> int:
        return time_remaining(step=self.interval)

    def verify_otp(self, otp: str, valid_window: int = DEFAULT_WINDOW, for_time: int = None) -> bool:
        return verify(self.secret, otp, for_time, valid_window, self.interval, self.digits)

    def get_secret(self) -> str:
        return self.secret

    def provisioning_uri(self, user: str, issuer: str) -> str:
        """
        Generate provisioning URI for authenticator apps
        """
        return build_uri(self.secret, user, issuer, self.interval, self.digits)

    def provisioning_uri_qr_code(self, user: str, issuer: str):
        return qr_code_image(self.provisioning_uri(user, issuer))
