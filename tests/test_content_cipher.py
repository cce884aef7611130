"""Tests for CEK/IV generation and content encryption."""

import os

import pytest

from jose_jwe.core import content_cipher
from jose_jwe.core.errors import DecryptionError
from jose_jwe.core.jwa import CEK_SIZES, IV_SIZES, TAG_SIZES, JWEEncryption

AAD = b"eyJhbGciOiJBMTI4S1ciLCJlbmMiOiJBMTI4R0NNIn0"


class TestGenerateCekAndIv:
    """Tests for CEK/IV generation."""

    @pytest.mark.parametrize("encryption", list(JWEEncryption))
    def test_sizes(self, encryption):
        """Test CEK and IV sizes follow the encryption algorithm."""
        cek, iv = content_cipher.generate_cek_and_iv(encryption)

        assert len(cek) == CEK_SIZES[encryption]
        assert len(iv) == IV_SIZES[encryption]

    def test_uses_given_random_source(self):
        """Test the random source is used for both values."""
        requests = []

        def fixed(size):
            requests.append(size)
            return b"\x07" * size

        cek, iv = content_cipher.generate_cek_and_iv(JWEEncryption.A256GCM, fixed)

        assert cek == b"\x07" * 32
        assert iv == b"\x07" * 12
        assert requests == [32, 12]

    def test_fresh_values(self):
        """Test two calls produce different keys."""
        first, _ = content_cipher.generate_cek_and_iv(JWEEncryption.A128GCM)
        second, _ = content_cipher.generate_cek_and_iv(JWEEncryption.A128GCM)

        assert first != second


class TestContentCipher:
    """Tests for authenticated content encryption."""

    @pytest.mark.parametrize("encryption", list(JWEEncryption))
    def test_encrypt_decrypt(self, encryption):
        """Test decrypt recovers the plaintext and the tag has the right size."""
        cek, iv = content_cipher.generate_cek_and_iv(encryption)

        ciphertext, tag = content_cipher.encrypt(encryption, cek, iv, AAD, b"secret claims")

        assert len(tag) == TAG_SIZES[encryption]
        assert ciphertext != b"secret claims"
        assert content_cipher.decrypt(encryption, cek, iv, AAD, ciphertext, tag) == b"secret claims"

    def test_cbc_ciphertext_is_padded(self):
        """Test CBC output is a whole number of blocks."""
        cek, iv = content_cipher.generate_cek_and_iv(JWEEncryption.A128CBC_HS256)

        ciphertext, _ = content_cipher.encrypt(JWEEncryption.A128CBC_HS256, cek, iv, AAD, b"x" * 16)

        assert len(ciphertext) == 32

    def test_rfc7516_appendix_a3_tag(self):
        """Test A128CBC-HS256 against the RFC 7516 Appendix A.3 example."""
        cek = bytes([
            4, 211, 31, 197, 84, 157, 252, 254, 11, 100, 157, 250, 63, 170, 106, 206,
            107, 124, 212, 45, 111, 107, 9, 219, 200, 177, 0, 240, 143, 156, 44, 207,
        ])
        iv = bytes([3, 22, 60, 12, 43, 67, 104, 105, 108, 108, 105, 99, 111, 116, 104, 101])
        aad = b"eyJhbGciOiJBMTI4S1ciLCJlbmMiOiJBMTI4Q0JDLUhTMjU2In0"
        plaintext = b"Live long and prosper."

        ciphertext, tag = content_cipher.encrypt(
            JWEEncryption.A128CBC_HS256, cek, iv, aad, plaintext
        )

        assert tag == bytes([83, 73, 191, 98, 104, 205, 211, 128, 201, 189, 199, 133, 32, 38, 194, 85])
        assert content_cipher.decrypt(
            JWEEncryption.A128CBC_HS256, cek, iv, aad, ciphertext, tag
        ) == plaintext

    @pytest.mark.parametrize("encryption", list(JWEEncryption))
    @pytest.mark.parametrize("part", ["cek", "iv", "aad", "ciphertext", "tag"])
    def test_any_change_fails_the_same_way(self, encryption, part):
        """Test every modified input raises the same DecryptionError."""
        cek, iv = content_cipher.generate_cek_and_iv(encryption)
        ciphertext, tag = content_cipher.encrypt(encryption, cek, iv, AAD, b"payload")
        args = {"cek": cek, "iv": iv, "aad": AAD, "ciphertext": ciphertext, "tag": tag}
        value = bytearray(args[part])
        value[0] ^= 0x01
        args[part] = bytes(value)

        with pytest.raises(DecryptionError) as exc_info:
            content_cipher.decrypt(encryption, **args)

        assert str(exc_info.value) == "Decryption failed"

    @pytest.mark.parametrize("encryption", list(JWEEncryption))
    def test_bad_lengths_fail_as_decryption_error(self, encryption):
        """Test truncated IVs and tags are not reported differently."""
        cek, iv = content_cipher.generate_cek_and_iv(encryption)
        ciphertext, tag = content_cipher.encrypt(encryption, cek, iv, AAD, b"payload")

        with pytest.raises(DecryptionError):
            content_cipher.decrypt(encryption, cek, b"", AAD, ciphertext, tag)
        with pytest.raises(DecryptionError):
            content_cipher.decrypt(encryption, cek, iv, AAD, ciphertext, tag[:4])
        with pytest.raises(DecryptionError):
            content_cipher.decrypt(encryption, cek, iv, AAD, b"", tag)

    def test_wrong_key_fails(self):
        """Test decrypting with another CEK of the same size."""
        cek, iv = content_cipher.generate_cek_and_iv(JWEEncryption.A256GCM)
        ciphertext, tag = content_cipher.encrypt(JWEEncryption.A256GCM, cek, iv, AAD, b"payload")

        with pytest.raises(DecryptionError):
            content_cipher.decrypt(JWEEncryption.A256GCM, os.urandom(32), iv, AAD, ciphertext, tag)
