"""Base64url codec (RFC 7515 section 2, no padding)."""

import base64
import re

_B64URL_RE = re.compile(rb"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> bytes:
    """Base64url encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def b64url_decode(data: bytes) -> bytes:
    """Strict base64url decode.

    Raises:
        ValueError: If the input has padding, characters outside the
            base64url alphabet, or an impossible length.
    """
    if not _B64URL_RE.fullmatch(data) or len(data) % 4 == 1:
        raise ValueError("Invalid base64url data")
    padded = data + b"=" * (-len(data) % 4)
    decoded = base64.urlsafe_b64decode(padded)
    # Unused low bits of the last character must be zero
    if b64url_encode(decoded) != data:
        raise ValueError("Non-canonical base64url data")
    return decoded
