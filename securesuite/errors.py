class OTPError(ValueError):
    """Base class for failures at the OTP engine boundary."""


class InvalidSecret(OTPError):
    """The shared secret decoded to no usable key material."""


class InvalidCandidate(OTPError):
    """A submitted code is empty, non-numeric or of the wrong length."""


class ProvisioningUnavailable(OTPError):
    """No cryptographically secure randomness source is available."""


class MalformedUri(OTPError):
    """Text could not be read as an otpauth:// URI."""
