"""Compact serialization of JOSE objects (RFC 7516 section 7.1).

A JWE is five base64url segments joined by ".":

    header.encrypted_key.iv.ciphertext.tag

A three-segment input is a JWS; it is recognized but not decoded here.
"""

import json
from dataclasses import dataclass

from jose_jwe.core.b64 import b64url_decode, b64url_encode
from jose_jwe.core.errors import HeaderFormatError
from jose_jwe.core.header import Header

SEPARATOR = b"."


@dataclass(frozen=True)
class DecodableJwe:
    """Five-segment JWE with a usable header."""

    header: Header
    encrypted_key: bytes
    iv: bytes
    ciphertext: bytes
    tag: bytes
    aad: bytes  # Header segment exactly as transmitted


@dataclass(frozen=True)
class DecodableJws:
    """Three-segment JWS; only the shape is checked."""

    header: dict
    payload: bytes
    signature: bytes


@dataclass(frozen=True)
class Malformed:
    """Input that is neither a JWE nor a JWS."""

    error: HeaderFormatError


ParsedToken = DecodableJwe | DecodableJws | Malformed


def serialize(
    header: bytes,
    encrypted_key: bytes,
    iv: bytes,
    ciphertext: bytes,
    tag: bytes,
) -> bytes:
    """Build the compact serialization from the encoded header and raw parts."""
    return SEPARATOR.join(
        b64url_encode(part) for part in (header, encrypted_key, iv, ciphertext, tag)
    )


def parse(token: bytes | str, max_size: int | None = None) -> ParsedToken:
    """Split and classify a compact-serialized token.

    Never raises for bad input; problems are returned as Malformed.
    """
    if isinstance(token, str):
        try:
            token = token.encode("ascii")
        except UnicodeEncodeError:
            return Malformed(HeaderFormatError("Token is not ASCII"))

    if max_size is not None and len(token) > max_size:
        return Malformed(HeaderFormatError(f"Token exceeds {max_size} bytes"))

    segments = token.split(SEPARATOR)
    try:
        decoded = [b64url_decode(segment) for segment in segments]
    except ValueError:
        return Malformed(HeaderFormatError("Invalid base64url segment"))

    if len(segments) == 5:
        try:
            header = Header.decode(decoded[0])
        except HeaderFormatError as e:
            return Malformed(e)
        _, encrypted_key, iv, ciphertext, tag = decoded
        return DecodableJwe(
            header=header,
            encrypted_key=encrypted_key,
            iv=iv,
            ciphertext=ciphertext,
            tag=tag,
            aad=segments[0],
        )

    if len(segments) == 3:
        try:
            header = json.loads(decoded[0])
        except (ValueError, RecursionError):
            return Malformed(HeaderFormatError("Invalid JWS header"))
        if not isinstance(header, dict):
            return Malformed(HeaderFormatError("Invalid JWS header"))
        return DecodableJws(header=header, payload=decoded[1], signature=decoded[2])

    return Malformed(HeaderFormatError(f"Invalid number of segments: {len(segments)}"))
