"""JWE (JSON Web Encryption) Engine.

Implements compact-serialized JWE (RFC 7516) with the algorithms of
RFC 7518:

Key Management:
- RSA1_5, RSA-OAEP, RSA-OAEP-256 (RSA key transport)
- A128KW, A192KW, A256KW (AES Key Wrap)

Content Encryption:
- A128GCM, A192GCM, A256GCM (AES-GCM)
- A128CBC-HS256, A192CBC-HS384, A256CBC-HS512 (AES-CBC with HMAC)

Decoding never reveals why a token failed to decrypt. A dummy CEK of the
right size is generated on every decode, and it replaces the unwrapped key
whenever unwrapping fails or yields a key of the wrong length. Content
decryption then always runs, so a failed unwrap (e.g. bad RSA1_5 padding)
and a failed authentication tag produce the same DecryptionError. This
closes the Bleichenbacher-style oracle on RSA key transport.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from cryptography.hazmat.primitives.asymmetric import rsa

from jose_jwe.config import Settings, get_settings
from jose_jwe.core import compact, content_cipher
from jose_jwe.core.b64 import b64url_encode
from jose_jwe.core.content_cipher import RandomSource
from jose_jwe.core.errors import (
    DecryptionError,
    HeaderFormatError,
    InvalidKeyError,
    UnsupportedAlgorithmError,
)
from jose_jwe.core.header import NESTED_JWT_CTY, Header, parse_algorithm, parse_encryption
from jose_jwe.core.jwa import CEK_SIZES, JWEAlgorithm, JWEEncryption
from jose_jwe.core.jwk import Jwk, KeyUse, RsaPrivateJwk, RsaPublicJwk
from jose_jwe.core.key_manager import can_decode, can_encode, key_manager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Jwt:
    """A compact-serialized token."""

    token: bytes

    @property
    def compact(self) -> str:
        return self.token.decode("ascii")


@dataclass(frozen=True)
class Claims:
    """Raw claims payload."""

    content: bytes


@dataclass(frozen=True)
class Nested:
    """Payload that is itself a serialized JOSE object."""

    jwt: Jwt


Payload = Claims | Nested


@dataclass(frozen=True)
class DecodedJWE:
    """Result of a successful JWE decode."""

    header: Header
    plaintext: bytes

    @property
    def is_nested(self) -> bool:
        """True if the plaintext is a nested JWT."""
        return self.header.is_nested


class JWEEngine:
    """JWE encode/decode operations.

    Holds no mutable state; one instance can be shared across threads.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        random_source: RandomSource = os.urandom,
    ):
        self.settings = settings or get_settings()
        self.random_source = random_source

    def encode(
        self,
        algorithm: JWEAlgorithm | str,
        encryption: JWEEncryption | str,
        jwk: Jwk,
        payload: Payload | bytes,
    ) -> Jwt:
        """Create a JWE.

        Args:
            algorithm: Key management algorithm
            encryption: Content encryption algorithm
            jwk: Recipient key used to wrap the CEK
            payload: Claims, a nested token, or raw claim bytes

        Returns:
            The compact-serialized JWE

        Raises:
            UnsupportedAlgorithmError: If an algorithm is unknown or not allowed
            InvalidKeyError: If the key cannot be used with the algorithm
        """
        algorithm = parse_algorithm(algorithm)
        encryption = parse_encryption(encryption)
        self._check_allowed(algorithm, encryption)

        # Key compatibility is checked before any randomness is drawn
        if not can_encode(jwk):
            raise InvalidKeyError("JWK cannot encode a JWE")
        key_manager.check_wrap_key(algorithm, jwk, CEK_SIZES[encryption])

        if isinstance(payload, bytes):
            payload = Claims(payload)
        if isinstance(payload, Nested):
            content_type, content = NESTED_JWT_CTY, payload.jwt.token
        else:
            content_type, content = None, payload.content

        header = Header(alg=algorithm, enc=encryption, kid=jwk.kid, cty=content_type)
        header_bytes = header.encode()
        aad = b64url_encode(header_bytes)

        cek, iv = content_cipher.generate_cek_and_iv(encryption, self.random_source)
        ciphertext, tag = content_cipher.encrypt(encryption, cek, iv, aad, content)
        encrypted_key = key_manager.wrap(algorithm, jwk, cek)

        logger.debug(
            "Encoded JWE alg=%s enc=%s kid=%s", algorithm.value, encryption.value, jwk.kid
        )
        return Jwt(compact.serialize(header_bytes, encrypted_key, iv, ciphertext, tag))

    def decode(self, jwk: Jwk, token: bytes | str) -> DecodedJWE:
        """Decrypt a JWE.

        Args:
            jwk: Recipient key (RSA private key or symmetric key)
            token: Compact serialization

        Returns:
            DecodedJWE with the header and plaintext

        Raises:
            InvalidKeyError: If the key cannot decode any JWE
            HeaderFormatError: If the token is not a well-formed JWE
            DecryptionError: For any cryptographic failure
        """
        if not can_decode(jwk) or jwk.use == KeyUse.SIG:
            raise InvalidKeyError("JWK cannot decode a JWE")

        parsed = compact.parse(token, max_size=self.settings.max_token_size)
        if isinstance(parsed, compact.Malformed):
            raise parsed.error
        if not isinstance(parsed, compact.DecodableJwe):
            raise HeaderFormatError("Content is not a JWE")

        header = parsed.header
        self._check_allowed(header.alg, header.enc)

        dummy_cek, _ = content_cipher.generate_cek_and_iv(header.enc, self.random_source)

        # Capture the outcome, then branch only on the size of what came back
        try:
            candidate = key_manager.unwrap(header.alg, jwk, parsed.encrypted_key)
        except Exception:
            candidate = b""
        cek = candidate if len(candidate) == len(dummy_cek) else dummy_cek

        try:
            plaintext = content_cipher.decrypt(
                header.enc, cek, parsed.iv, parsed.aad, parsed.ciphertext, parsed.tag
            )
        except DecryptionError:
            logger.debug("JWE decryption failed alg=%s enc=%s", header.alg.value, header.enc.value)
            raise

        logger.debug(
            "Decoded JWE alg=%s enc=%s kid=%s", header.alg.value, header.enc.value, header.kid
        )
        return DecodedJWE(header=header, plaintext=plaintext)

    def _check_allowed(self, algorithm: JWEAlgorithm, encryption: JWEEncryption) -> None:
        if algorithm.value not in self.settings.allowed_algorithms:
            raise UnsupportedAlgorithmError(f"Algorithm {algorithm.value} not allowed")

        if encryption.value not in self.settings.allowed_encryptions:
            raise UnsupportedAlgorithmError(f"Encryption {encryption.value} not allowed")


@lru_cache
def get_engine() -> JWEEngine:
    """Get the shared engine, built from settings on first use."""
    return JWEEngine()


def jwk_encode(
    algorithm: JWEAlgorithm | str,
    encryption: JWEEncryption | str,
    jwk: Jwk,
    payload: Payload | bytes,
) -> Jwt:
    """Create a JWE using a JWK. See JWEEngine.encode."""
    return get_engine().encode(algorithm, encryption, jwk, payload)


def jwk_decode(jwk: Jwk, token: bytes | str) -> DecodedJWE:
    """Decode a JWE using a JWK. See JWEEngine.decode."""
    return get_engine().decode(jwk, token)


def rsa_encode(
    algorithm: JWEAlgorithm | str,
    encryption: JWEEncryption | str,
    public_key: rsa.RSAPublicKey,
    claims: bytes,
) -> Jwt:
    """Create a JWE with the CEK encrypted under a raw RSA public key."""
    return jwk_encode(algorithm, encryption, RsaPublicJwk(public_key), Claims(claims))


def rsa_decode(private_key: rsa.RSAPrivateKey, token: bytes | str) -> DecodedJWE:
    """Decrypt a JWE with a raw RSA private key."""
    return jwk_decode(RsaPrivateJwk(private_key), token)
