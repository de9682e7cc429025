"""
Reading otpauth:// URIs, typically text decoded from a scanned QR code.

Parsing happens in two tiers: a strict structured parse, then a best-effort
scrape of a ``secret=`` parameter when the text is not a usable URI.
"""
import logging
import re
import urllib.parse
from typing import NamedTuple

from .errors import MalformedUri

log = logging.getLogger(__name__)

DEFAULT_ISSUER = "Scanned Account"
DEFAULT_LABEL  = "From QR Code"

_SECRET_PARAM = re.compile(r"secret=([A-Z2-7]+)", re.IGNORECASE)


class ParsedUri(NamedTuple):
    secret: str
    issuer: str
    label: str


def parse_strict(text: str) -> ParsedUri:
    try:
        parsed = urllib.parse.urlsplit(text.strip())
        query  = urllib.parse.parse_qs(parsed.query)
    except ValueError as err:
        raise MalformedUri(str(err)) from err
    if parsed.scheme.lower() != "otpauth" or not parsed.netloc:
        raise MalformedUri("not an otpauth:// URI")

    issuer = ""
    label  = ""
    path   = parsed.path.lstrip("/")
    if path:
        segments = path.split(":", 1)
        if len(segments) == 2:
            issuer = urllib.parse.unquote(segments[0])
            label  = urllib.parse.unquote(segments[1])
        else:
            label = urllib.parse.unquote(segments[0])

    # the issuer parameter wins over the issuer in the label
    if query.get("issuer", [""])[0]:
        issuer = query["issuer"][0]

    return ParsedUri(query.get("secret", [""])[0], issuer, label)


def parse_fallback(text: str, default_issuer: str = DEFAULT_ISSUER,
                   default_label: str = DEFAULT_LABEL) -> ParsedUri:
    match  = _SECRET_PARAM.search(text)
    secret = match.group(1) if match else text.strip()
    return ParsedUri(secret, default_issuer, default_label)


def parse_uri(text: str, default_issuer: str = DEFAULT_ISSUER,
              default_label: str = DEFAULT_LABEL) -> ParsedUri:
    """
    Recover secret, issuer and label from ``text``. Never raises: text that
    is not a well-formed otpauth:// URI falls back to pattern extraction
    labelled with the given defaults.
    """
    try:
        return parse_strict(text)
    except MalformedUri as err:
        log.debug("falling back to pattern extraction: %s", err)
        return parse_fallback(text, default_issuer, default_label)
