"""JOSE/JWE exceptions."""


class JOSEError(Exception):
    """Base JOSE exception."""

    pass


class InvalidKeyError(JOSEError):
    """Key cannot be used with the requested algorithm or operation."""

    pass


class HeaderFormatError(JOSEError):
    """Token or header structure is malformed."""

    pass


class UnsupportedAlgorithmError(HeaderFormatError):
    """Algorithm identifier is unknown or not allowed."""

    pass


class DecryptionError(JOSEError):
    """JWE could not be decrypted.

    Raised for every cryptographic failure on the decode path, whatever the
    cause, so callers cannot tell a bad key from a tampered token.
    """

    def __init__(self, message: str = "Decryption failed"):
        super().__init__(message)


class KeyUnwrapError(JOSEError):
    """Encrypted key could not be recovered. Never raised out of decode."""

    pass
