"""Tests for the JWE header model."""

import json

import pytest

from jose_jwe.core.errors import HeaderFormatError, UnsupportedAlgorithmError
from jose_jwe.core.header import Header
from jose_jwe.core.jwa import JWEAlgorithm, JWEEncryption


class TestHeaderEncode:
    """Tests for canonical header encoding."""

    def test_minimal_header(self):
        """Test only alg and enc are written when nothing else is set."""
        header = Header.build("RSA-OAEP", "A128GCM")

        assert header.encode() == b'{"alg":"RSA-OAEP","enc":"A128GCM"}'

    def test_member_order_is_fixed(self):
        """Test optional members follow alg and enc in a fixed order."""
        header = Header.build("A128KW", "A256GCM", kid="k1", cty="JWT", typ="JWE")

        assert header.encode() == (
            b'{"alg":"A128KW","enc":"A256GCM","kid":"k1","cty":"JWT","typ":"JWE"}'
        )

    def test_encoding_is_deterministic(self):
        """Test equal headers always produce identical bytes."""
        a = Header.build(JWEAlgorithm.RSA1_5, JWEEncryption.A128CBC_HS256, kid="x")
        b = Header(alg=JWEAlgorithm.RSA1_5, enc=JWEEncryption.A128CBC_HS256, kid="x")

        assert a == b
        assert a.encode() == b.encode()

    def test_build_rejects_unknown_algorithm(self):
        """Test building a header with an unknown alg."""
        with pytest.raises(UnsupportedAlgorithmError):
            Header.build("dir", "A128GCM")


class TestHeaderDecode:
    """Tests for header parsing."""

    def test_decode_encoded(self):
        """Test decoding recovers the header."""
        header = Header.build("A256KW", "A256CBC-HS512", kid="key", cty="JWT")

        assert Header.decode(header.encode()) == header

    def test_decode_accepts_other_layouts(self):
        """Test whitespace and member order do not matter when parsing."""
        data = b'{ "enc" : "A128GCM",\n "alg" : "RSA-OAEP", "x5t": "ignored" }'

        header = Header.decode(data)

        assert header.alg == JWEAlgorithm.RSA_OAEP
        assert header.enc == JWEEncryption.A128GCM
        assert header.kid is None

    @pytest.mark.parametrize(
        "data",
        [
            b"not json",
            b"[1, 2, 3]",
            b'"RSA-OAEP"',
            b'{"alg": "RSA-OAEP"}',
            b'{"enc": "A128GCM"}',
            b'{"alg": 1, "enc": "A128GCM"}',
            b'{"alg": "RSA-OAEP", "enc": "A128GCM", "kid": 7}',
            b"\xff\xfe",
        ],
    )
    def test_malformed(self, data):
        """Test structural problems raise HeaderFormatError."""
        with pytest.raises(HeaderFormatError) as exc_info:
            Header.decode(data)

        assert not isinstance(exc_info.value, UnsupportedAlgorithmError)

    @pytest.mark.parametrize("data", [b"[" * 200000, b'{"a":' * 200000])
    def test_deeply_nested_json(self, data):
        """Test JSON nested past the interpreter recursion limit."""
        with pytest.raises(HeaderFormatError):
            Header.decode(data)

    @pytest.mark.parametrize(
        "header",
        [
            {"alg": "dir", "enc": "A128GCM"},
            {"alg": "RSA-OAEP", "enc": "C20P"},
            {"alg": "ECDH-ES", "enc": "A256GCM"},
        ],
    )
    def test_unsupported_algorithm(self, header):
        """Test unknown algorithms are reported distinctly."""
        with pytest.raises(UnsupportedAlgorithmError):
            Header.decode(json.dumps(header).encode())

    def test_nested_content_type(self):
        """Test the nested JWT marker."""
        assert Header.build("A128KW", "A128GCM", cty="JWT").is_nested
        assert not Header.build("A128KW", "A128GCM").is_nested
