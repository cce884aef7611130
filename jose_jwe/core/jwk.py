"""JSON Web Key variants accepted by the JWE engine.

Only the shape needed for algorithm dispatch is modelled here: the key
material as a `cryptography` key object (or raw bytes for symmetric keys),
plus the ``kid`` and ``use`` metadata. Generation and storage of keys are
left to the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from cryptography.hazmat.primitives.asymmetric import ec, rsa


class KeyUse(str, Enum):
    """Intended key use ("use" JWK parameter)."""

    SIG = "sig"
    ENC = "enc"


@dataclass(frozen=True)
class Jwk:
    """Base JSON Web Key."""

    key: Any
    kid: str | None = None
    use: KeyUse | None = None


@dataclass(frozen=True)
class RsaPublicJwk(Jwk):
    """RSA public key, usable to encode a JWE."""

    key: rsa.RSAPublicKey


@dataclass(frozen=True)
class RsaPrivateJwk(Jwk):
    """RSA private key, usable to decode (and encode) a JWE."""

    key: rsa.RSAPrivateKey


@dataclass(frozen=True)
class SymmetricJwk(Jwk):
    """Symmetric ("oct") key for AES Key Wrap."""

    key: bytes

    def __repr__(self) -> str:
        return f"SymmetricJwk(kid={self.kid!r}, use={self.use!r}, size={len(self.key)})"


@dataclass(frozen=True)
class EcPublicJwk(Jwk):
    """EC public key. Signature keys only; cannot be used for JWE."""

    key: ec.EllipticCurvePublicKey


@dataclass(frozen=True)
class EcPrivateJwk(Jwk):
    """EC private key. Signature keys only; cannot be used for JWE."""

    key: ec.EllipticCurvePrivateKey
