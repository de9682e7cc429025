"""
Secret provisioning: fresh random secrets and otpauth:// URIs for
authenticator apps.
"""
import base64
import io
import logging
import secrets
import urllib.parse
from typing import NamedTuple

import qrcode

from . import base32
from .errors import ProvisioningUnavailable
from .otp import DEFAULT_DIGITS, DEFAULT_STEP

log = logging.getLogger(__name__)

SECRET_LENGTH = 20


class Provisioned(NamedTuple):
    secret: str
    uri: str


def _quote(value: str) -> str:
    return urllib.parse.quote(value, safe="")


def generate_secret(length: int = SECRET_LENGTH) -> str:
    """
    Generate a base32 secret from ``length`` random bytes.
    Fails with ProvisioningUnavailable if the OS has no secure random source.
    """
    if length < 1:
        raise ValueError("secret length must be positive")
    try:
        random_bytes = secrets.token_bytes(length)
    except (NotImplementedError, OSError) as err:
        raise ProvisioningUnavailable("no secure randomness source available") from err
    return base32.encode(random_bytes)


def build_uri(secret: str, label: str, issuer: str = "", step: int = DEFAULT_STEP,
              digits: int = DEFAULT_DIGITS) -> str:
    # otpauth://totp/{issuer}:{label}?secret={secret}&issuer={issuer}
    path   = f"{_quote(issuer)}:{_quote(label)}" if issuer else _quote(label)
    params = [f"secret={secret}"]
    if issuer:
        params.append(f"issuer={_quote(issuer)}")
    if digits != DEFAULT_DIGITS:
        params.append(f"digits={digits}")
    if step != DEFAULT_STEP:
        params.append(f"period={step}")
    return f"otpauth://totp/{path}?{'&'.join(params)}"


def provision(label: str, issuer: str = "", step: int = DEFAULT_STEP,
              digits: int = DEFAULT_DIGITS) -> Provisioned:
    """
    Create a new secret for an account. Nothing is stored: the caller keeps
    the returned secret against the account.
    """
    secret = generate_secret()
    log.debug("provisioned new secret for issuer %r", issuer)
    return Provisioned(secret, build_uri(secret, label, issuer, step, digits))


def qr_code_image(uri: str):
    qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_L)
    qr.add_data(uri)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white")


def qr_code_data_url(uri: str) -> str:
    """Render ``uri`` as a QR code and return it as a PNG data URL."""
    img_io = io.BytesIO()
    qr_code_image(uri).save(img_io, 'PNG')
    return "data:image/png;base64," + base64.b64encode(img_io.getvalue()).decode("utf-8")
