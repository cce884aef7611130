"""Shared fixtures for JWE tests."""

import os

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from jose_jwe.config import Settings
from jose_jwe.core.jwe_engine import JWEEngine
from jose_jwe.core.jwk import RsaPrivateJwk, RsaPublicJwk, SymmetricJwk


class CountingRandom:
    """Random source that records every request."""

    def __init__(self):
        self.requests = []

    def __call__(self, size: int) -> bytes:
        self.requests.append(size)
        return os.urandom(size)


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def rsa_public_jwk(rsa_private_key):
    return RsaPublicJwk(rsa_private_key.public_key(), kid="My RSA Key")


@pytest.fixture
def rsa_private_jwk(rsa_private_key):
    return RsaPrivateJwk(rsa_private_key, kid="My RSA Key")


@pytest.fixture
def aes_jwk():
    """128-bit key for A128KW."""
    return SymmetricJwk(os.urandom(16), kid="My Keywrap Key")


@pytest.fixture
def counting_random():
    return CountingRandom()


@pytest.fixture
def engine(counting_random):
    """Engine with default settings and a recording random source."""
    return JWEEngine(settings=Settings(), random_source=counting_random)
