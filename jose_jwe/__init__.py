"""JSON Web Encryption (RFC 7516) in compact serialization.

To create a JWE, select two algorithms. The content encryption algorithm
(e.g. ``A128GCM``) encrypts the token content under a single-use key that is
generated internally. The key management algorithm (RSA or AES Key Wrap)
encrypts that content encryption key for the recipient.

    >>> from cryptography.hazmat.primitives.asymmetric import rsa
    >>> private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    >>> jwt = jwk_encode("RSA-OAEP", "A128GCM", RsaPublicJwk(private_key.public_key()), b"secret claims")
    >>> jwk_decode(RsaPrivateJwk(private_key), jwt.token).plaintext
    b'secret claims'
"""

from jose_jwe.core.errors import (
    DecryptionError,
    HeaderFormatError,
    InvalidKeyError,
    JOSEError,
    UnsupportedAlgorithmError,
)
from jose_jwe.core.header import Header
from jose_jwe.core.jwa import JWEAlgorithm, JWEEncryption
from jose_jwe.core.jwe_engine import (
    Claims,
    DecodedJWE,
    JWEEngine,
    Jwt,
    Nested,
    jwk_decode,
    jwk_encode,
    rsa_decode,
    rsa_encode,
)
from jose_jwe.core.jwk import (
    EcPrivateJwk,
    EcPublicJwk,
    Jwk,
    KeyUse,
    RsaPrivateJwk,
    RsaPublicJwk,
    SymmetricJwk,
)

__version__ = "0.1.0"

__all__ = [
    "Claims",
    "DecodedJWE",
    "DecryptionError",
    "EcPrivateJwk",
    "EcPublicJwk",
    "Header",
    "HeaderFormatError",
    "InvalidKeyError",
    "JOSEError",
    "JWEAlgorithm",
    "JWEEncryption",
    "JWEEngine",
    "Jwk",
    "Jwt",
    "KeyUse",
    "Nested",
    "RsaPrivateJwk",
    "RsaPublicJwk",
    "SymmetricJwk",
    "UnsupportedAlgorithmError",
    "jwk_decode",
    "jwk_encode",
    "rsa_decode",
    "rsa_encode",
]
