"""JWE protected header.

The encoded form of a header doubles as the AAD of the content cipher, so
`Header.encode` must be deterministic: compact JSON, fixed member order,
absent members omitted.
"""

import json
from dataclasses import dataclass

from jose_jwe.core.errors import HeaderFormatError, UnsupportedAlgorithmError
from jose_jwe.core.jwa import JWEAlgorithm, JWEEncryption

# Content type marking a nested JWT payload
NESTED_JWT_CTY = "JWT"

_OPTIONAL_MEMBERS = ("kid", "cty", "typ")


@dataclass(frozen=True)
class Header:
    """JWE protected header fields."""

    alg: JWEAlgorithm
    enc: JWEEncryption
    kid: str | None = None
    cty: str | None = None
    typ: str | None = None

    @classmethod
    def build(
        cls,
        alg: JWEAlgorithm | str,
        enc: JWEEncryption | str,
        kid: str | None = None,
        cty: str | None = None,
        typ: str | None = None,
    ) -> "Header":
        """Create a header, validating the algorithm identifiers.

        Raises:
            UnsupportedAlgorithmError: If ``alg`` or ``enc`` is unknown
        """
        return cls(
            alg=parse_algorithm(alg),
            enc=parse_encryption(enc),
            kid=kid,
            cty=cty,
            typ=typ,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary in canonical member order."""
        header = {"alg": self.alg.value, "enc": self.enc.value}
        for name in _OPTIONAL_MEMBERS:
            value = getattr(self, name)
            if value is not None:
                header[name] = value
        return header

    def encode(self) -> bytes:
        """Canonical JSON encoding of the header."""
        return json.dumps(self.to_dict(), separators=(",", ":")).encode()

    @classmethod
    def decode(cls, data: bytes) -> "Header":
        """Parse the JSON form of a JWE header.

        Unknown members are ignored.

        Raises:
            HeaderFormatError: If the JSON is malformed or a member has the
                wrong type
            UnsupportedAlgorithmError: If ``alg`` or ``enc`` is unknown
        """
        try:
            header = json.loads(data)
        except (ValueError, RecursionError) as e:
            raise HeaderFormatError(f"Invalid header JSON: {e}")

        if not isinstance(header, dict):
            raise HeaderFormatError("Header is not a JSON object")

        alg_str = header.get("alg")
        enc_str = header.get("enc")
        if not isinstance(alg_str, str) or not isinstance(enc_str, str):
            raise HeaderFormatError("Missing 'alg' or 'enc' header")

        for name in _OPTIONAL_MEMBERS:
            if name in header and not isinstance(header[name], str):
                raise HeaderFormatError(f"Header '{name}' must be a string")

        return cls.build(
            alg_str,
            enc_str,
            kid=header.get("kid"),
            cty=header.get("cty"),
            typ=header.get("typ"),
        )

    @property
    def is_nested(self) -> bool:
        return self.cty is not None and self.cty.upper() == NESTED_JWT_CTY


def parse_algorithm(alg: JWEAlgorithm | str) -> JWEAlgorithm:
    try:
        return JWEAlgorithm(alg)
    except ValueError:
        raise UnsupportedAlgorithmError(f"Unsupported JWE algorithm: {alg}")


def parse_encryption(enc: JWEEncryption | str) -> JWEEncryption:
    try:
        return JWEEncryption(enc)
    except ValueError:
        raise UnsupportedAlgorithmError(f"Unsupported JWE encryption: {enc}")
