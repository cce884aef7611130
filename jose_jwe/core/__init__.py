"""Core JWE logic."""

from jose_jwe.core.jwe_engine import JWEEngine, get_engine
from jose_jwe.core.key_manager import KeyManager, key_manager

__all__ = ["JWEEngine", "get_engine", "KeyManager", "key_manager"]
