"""JSON Web Algorithms used by JWE (RFC 7518).

Key Management:
- RSA1_5 (RSAES-PKCS1-v1_5)
- RSA-OAEP (RSAES OAEP, SHA-1), RSA-OAEP-256 (SHA-256)
- A128KW, A192KW, A256KW (AES Key Wrap)

Content Encryption:
- A128GCM, A192GCM, A256GCM (AES-GCM)
- A128CBC-HS256, A192CBC-HS384, A256CBC-HS512 (AES-CBC with HMAC)
"""

from enum import Enum


class JWEAlgorithm(str, Enum):
    """Supported JWE key management algorithms."""

    RSA1_5 = "RSA1_5"
    RSA_OAEP = "RSA-OAEP"
    RSA_OAEP_256 = "RSA-OAEP-256"
    A128KW = "A128KW"  # AES-128 Key Wrap
    A192KW = "A192KW"  # AES-192 Key Wrap
    A256KW = "A256KW"  # AES-256 Key Wrap


class JWEEncryption(str, Enum):
    """Supported JWE content encryption algorithms."""

    A128GCM = "A128GCM"  # AES-128-GCM
    A192GCM = "A192GCM"  # AES-192-GCM
    A256GCM = "A256GCM"  # AES-256-GCM
    A128CBC_HS256 = "A128CBC-HS256"  # AES-128-CBC + HMAC-SHA-256
    A192CBC_HS384 = "A192CBC-HS384"  # AES-192-CBC + HMAC-SHA-384
    A256CBC_HS512 = "A256CBC-HS512"  # AES-256-CBC + HMAC-SHA-512


RSA_ALGORITHMS = frozenset(
    [JWEAlgorithm.RSA1_5, JWEAlgorithm.RSA_OAEP, JWEAlgorithm.RSA_OAEP_256]
)

# KEK size in bytes for AES Key Wrap
KEY_WRAP_SIZES = {
    JWEAlgorithm.A128KW: 16,
    JWEAlgorithm.A192KW: 24,
    JWEAlgorithm.A256KW: 32,
}

GCM_ENCRYPTIONS = frozenset(
    [JWEEncryption.A128GCM, JWEEncryption.A192GCM, JWEEncryption.A256GCM]
)

CEK_SIZES = {
    JWEEncryption.A128GCM: 16,
    JWEEncryption.A192GCM: 24,
    JWEEncryption.A256GCM: 32,
    JWEEncryption.A128CBC_HS256: 32,  # 16 mac + 16 enc
    JWEEncryption.A192CBC_HS384: 48,  # 24 mac + 24 enc
    JWEEncryption.A256CBC_HS512: 64,  # 32 mac + 32 enc
}

IV_SIZES = {
    JWEEncryption.A128GCM: 12,
    JWEEncryption.A192GCM: 12,
    JWEEncryption.A256GCM: 12,
    JWEEncryption.A128CBC_HS256: 16,
    JWEEncryption.A192CBC_HS384: 16,
    JWEEncryption.A256CBC_HS512: 16,
}

TAG_SIZES = {
    JWEEncryption.A128GCM: 16,
    JWEEncryption.A192GCM: 16,
    JWEEncryption.A256GCM: 16,
    JWEEncryption.A128CBC_HS256: 16,
    JWEEncryption.A192CBC_HS384: 24,
    JWEEncryption.A256CBC_HS512: 32,
}
