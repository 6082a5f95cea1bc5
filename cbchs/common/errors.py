"""
Error Module - Exception Types
Failures raised by the AES-CBC + HMAC-SHA2 content encryption core.
"""


class CBCHSError(Exception):
    """Base exception for content encryption operations."""
    pass


class EngineUnavailable(CBCHSError):
    """Raised when no usable AES-CBC engine can be resolved."""
    pass


class EngineFailure(CBCHSError):
    """Raised when the underlying AES-CBC operation fails (bad length, bad padding)."""
    pass


class AuthenticationFailure(CBCHSError):
    """
    Raised when the authentication tag does not verify.

    The message is always generic. No plaintext is ever produced alongside it.
    """

    def __init__(self, message="Authentication tag verification failed"):
        super().__init__(message)


class InvalidKeyLength(CBCHSError, ValueError):
    """Raised when the content encryption key has the wrong length."""
    pass


class InvalidIVLength(CBCHSError, ValueError):
    """Raised when the initialization vector is not 16 bytes."""
    pass


class UnsupportedAlgorithm(CBCHSError, ValueError):
    """Raised for an unknown content encryption algorithm or hash name."""
    pass
