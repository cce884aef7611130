"""JWE content encryption (RFC 7518 section 5).

Wraps the AEAD primitives from ``cryptography``:
- AES-GCM via AESGCM
- AES-CBC + HMAC-SHA2 composed per RFC 7518 section 5.2

Any failure while decrypting is reported as a single DecryptionError with
no further detail.
"""

import hmac as std_hmac
import os
import struct
from collections.abc import Callable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes, hmac as crypto_hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from jose_jwe.core.errors import DecryptionError, UnsupportedAlgorithmError
from jose_jwe.core.jwa import CEK_SIZES, GCM_ENCRYPTIONS, IV_SIZES, TAG_SIZES, JWEEncryption

# Source of secure random bytes: takes a length, returns that many bytes
RandomSource = Callable[[int], bytes]

HMAC_HASHES = {
    JWEEncryption.A128CBC_HS256: hashes.SHA256,
    JWEEncryption.A192CBC_HS384: hashes.SHA384,
    JWEEncryption.A256CBC_HS512: hashes.SHA512,
}


def generate_cek_and_iv(
    encryption: JWEEncryption,
    random_source: RandomSource = os.urandom,
) -> tuple[bytes, bytes]:
    """Generate a fresh CEK and IV sized for the content encryption algorithm."""
    try:
        cek_size = CEK_SIZES[encryption]
        iv_size = IV_SIZES[encryption]
    except KeyError:
        raise UnsupportedAlgorithmError(f"Unsupported encryption: {encryption}")
    return random_source(cek_size), random_source(iv_size)


def encrypt(
    encryption: JWEEncryption,
    cek: bytes,
    iv: bytes,
    aad: bytes,
    plaintext: bytes,
) -> tuple[bytes, bytes]:
    """Encrypt content and return (ciphertext, tag)."""
    if encryption in GCM_ENCRYPTIONS:
        aesgcm = AESGCM(cek)
        ciphertext_and_tag = aesgcm.encrypt(iv, plaintext, aad)
        tag_size = TAG_SIZES[encryption]
        return ciphertext_and_tag[:-tag_size], ciphertext_and_tag[-tag_size:]

    elif encryption in HMAC_HASHES:
        mac_key, enc_key = _split_cek(cek)

        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(algorithms.AES(enc_key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        tag = _cbc_hmac_tag(encryption, mac_key, aad, iv, ciphertext)
        return ciphertext, tag

    else:
        raise UnsupportedAlgorithmError(f"Unsupported encryption: {encryption}")


def decrypt(
    encryption: JWEEncryption,
    cek: bytes,
    iv: bytes,
    aad: bytes,
    ciphertext: bytes,
    tag: bytes,
) -> bytes:
    """Verify the tag and decrypt content.

    Raises:
        DecryptionError: For every verification or decryption failure
    """
    try:
        if encryption in GCM_ENCRYPTIONS:
            if len(tag) != TAG_SIZES[encryption]:
                raise InvalidTag()
            aesgcm = AESGCM(cek)
            return aesgcm.decrypt(iv, ciphertext + tag, aad)

        elif encryption in HMAC_HASHES:
            mac_key, enc_key = _split_cek(cek)

            expected_tag = _cbc_hmac_tag(encryption, mac_key, aad, iv, ciphertext)
            if not std_hmac.compare_digest(tag, expected_tag):
                raise InvalidTag()

            decryptor = Cipher(algorithms.AES(enc_key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()

            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            return unpadder.update(padded) + unpadder.finalize()

        else:
            raise InvalidTag()

    except (InvalidTag, ValueError, TypeError):
        raise DecryptionError()


def _split_cek(cek: bytes) -> tuple[bytes, bytes]:
    """Split a CBC-HMAC CEK into (MAC key, ENC key)."""
    half = len(cek) // 2
    return cek[:half], cek[half:]


def _cbc_hmac_tag(
    encryption: JWEEncryption,
    mac_key: bytes,
    aad: bytes,
    iv: bytes,
    ciphertext: bytes,
) -> bytes:
    # AAD length in bits, 64-bit big-endian
    al = struct.pack(">Q", len(aad) * 8)
    h = crypto_hmac.HMAC(mac_key, HMAC_HASHES[encryption]())
    h.update(aad + iv + ciphertext + al)
    mac = h.finalize()
    # Tag is first half of MAC
    return mac[: len(mac) // 2]
