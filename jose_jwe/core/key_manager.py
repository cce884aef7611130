"""JWE key management: wrapping and unwrapping the CEK.

Dispatch is over (key variant, algorithm) pairs, checked against explicit
compatibility tables before any key operation:

- RSA1_5, RSA-OAEP, RSA-OAEP-256: wrap with an RSA public key (or the
  public half of a private key), unwrap with an RSA private key
- A128KW, A192KW, A256KW: wrap and unwrap with a symmetric key of the
  matching size

RSA private-key operations go through OpenSSL, which blinds every
decryption with a fresh random value drawn for that operation.
"""

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.keywrap import (
    InvalidUnwrap,
    aes_key_unwrap,
    aes_key_wrap,
)

from jose_jwe.core.errors import InvalidKeyError, KeyUnwrapError
from jose_jwe.core.jwa import KEY_WRAP_SIZES, RSA_ALGORITHMS, JWEAlgorithm
from jose_jwe.core.jwk import Jwk, KeyUse, RsaPrivateJwk, RsaPublicJwk, SymmetricJwk

# Key variants able to wrap a CEK for each algorithm
WRAP_KEY_TYPES = {
    JWEAlgorithm.RSA1_5: (RsaPublicJwk, RsaPrivateJwk),
    JWEAlgorithm.RSA_OAEP: (RsaPublicJwk, RsaPrivateJwk),
    JWEAlgorithm.RSA_OAEP_256: (RsaPublicJwk, RsaPrivateJwk),
    JWEAlgorithm.A128KW: (SymmetricJwk,),
    JWEAlgorithm.A192KW: (SymmetricJwk,),
    JWEAlgorithm.A256KW: (SymmetricJwk,),
}

# Key variants able to unwrap a CEK for each algorithm
UNWRAP_KEY_TYPES = {
    JWEAlgorithm.RSA1_5: (RsaPrivateJwk,),
    JWEAlgorithm.RSA_OAEP: (RsaPrivateJwk,),
    JWEAlgorithm.RSA_OAEP_256: (RsaPrivateJwk,),
    JWEAlgorithm.A128KW: (SymmetricJwk,),
    JWEAlgorithm.A192KW: (SymmetricJwk,),
    JWEAlgorithm.A256KW: (SymmetricJwk,),
}

# Bytes of padding overhead per RSA algorithm (RFC 8017 7.1.1, 7.2.1)
RSA_PADDING_OVERHEAD = {
    JWEAlgorithm.RSA1_5: 11,
    JWEAlgorithm.RSA_OAEP: 2 * 20 + 2,  # SHA-1
    JWEAlgorithm.RSA_OAEP_256: 2 * 32 + 2,  # SHA-256
}


def can_encode(jwk: Jwk) -> bool:
    """Whether the key variant can encode a JWE with some algorithm."""
    return any(isinstance(jwk, types) for types in WRAP_KEY_TYPES.values())


def can_decode(jwk: Jwk) -> bool:
    """Whether the key variant can decode a JWE with some algorithm."""
    return any(isinstance(jwk, types) for types in UNWRAP_KEY_TYPES.values())


class KeyManager:
    """Wraps and unwraps content encryption keys."""

    def check_wrap_key(
        self,
        algorithm: JWEAlgorithm,
        jwk: Jwk,
        cek_size: int | None = None,
    ) -> None:
        """Check the key can wrap a CEK with the algorithm.

        Draws no randomness and performs no key operation.

        Raises:
            InvalidKeyError: If the key and algorithm are incompatible, or
                the RSA modulus is too small for a CEK of ``cek_size`` bytes
        """
        if jwk.use == KeyUse.SIG:
            raise InvalidKeyError("Signature key cannot be used for encryption")

        if not isinstance(jwk, WRAP_KEY_TYPES.get(algorithm, ())):
            raise InvalidKeyError(
                f"{type(jwk).__name__} cannot be used with {algorithm.value}"
            )

        if algorithm in KEY_WRAP_SIZES:
            expected_size = KEY_WRAP_SIZES[algorithm]
            if len(jwk.key) != expected_size:
                raise InvalidKeyError(
                    f"{algorithm.value} requires {expected_size}-byte key"
                )

        if algorithm in RSA_ALGORITHMS and cek_size is not None:
            max_size = _rsa_public_key(jwk).key_size // 8 - RSA_PADDING_OVERHEAD[algorithm]
            if cek_size > max_size:
                raise InvalidKeyError(
                    f"RSA key too small for a {cek_size}-byte CEK with {algorithm.value}"
                )

    def wrap(self, algorithm: JWEAlgorithm, jwk: Jwk, cek: bytes) -> bytes:
        """Encrypt the CEK for the recipient key.

        Raises:
            InvalidKeyError: If the key and algorithm are incompatible, or
                the CEK is too large for the RSA modulus
        """
        self.check_wrap_key(algorithm, jwk, len(cek))

        if algorithm in RSA_ALGORITHMS:
            try:
                return _rsa_public_key(jwk).encrypt(cek, self._rsa_padding(algorithm))
            except ValueError as e:
                raise InvalidKeyError(f"RSA encryption failed: {e}")

        return aes_key_wrap(jwk.key, cek)

    def unwrap(self, algorithm: JWEAlgorithm, jwk: Jwk, encrypted_key: bytes) -> bytes:
        """Recover the CEK from the encrypted key segment.

        All failures, including an incompatible key, raise the same
        KeyUnwrapError without the underlying cause.

        Raises:
            KeyUnwrapError: If the CEK cannot be recovered
        """
        if not isinstance(jwk, UNWRAP_KEY_TYPES.get(algorithm, ())):
            raise KeyUnwrapError()
        if algorithm in KEY_WRAP_SIZES and len(jwk.key) != KEY_WRAP_SIZES[algorithm]:
            raise KeyUnwrapError()

        try:
            if algorithm in RSA_ALGORITHMS:
                return jwk.key.decrypt(encrypted_key, self._rsa_padding(algorithm))
            return aes_key_unwrap(jwk.key, encrypted_key)
        except (InvalidUnwrap, ValueError, TypeError):
            raise KeyUnwrapError() from None

    @staticmethod
    def _rsa_padding(algorithm: JWEAlgorithm) -> padding.AsymmetricPadding:
        if algorithm == JWEAlgorithm.RSA1_5:
            return padding.PKCS1v15()
        hash_alg = hashes.SHA1() if algorithm == JWEAlgorithm.RSA_OAEP else hashes.SHA256()
        return padding.OAEP(mgf=padding.MGF1(algorithm=hash_alg), algorithm=hash_alg, label=None)


def _rsa_public_key(jwk: Jwk):
    if isinstance(jwk, RsaPrivateJwk):
        return jwk.key.public_key()
    return jwk.key


# Singleton instance
key_manager = KeyManager()
