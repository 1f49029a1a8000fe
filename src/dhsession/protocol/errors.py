"""dhsession exception hierarchy.

All library-specific exceptions inherit from :class:`DHSessionError`.
Precondition violations additionally subclass ``ValueError`` or
``RuntimeError`` so generic handlers keep working.
"""

from __future__ import annotations


class DHSessionError(Exception):
    """Base exception for all dhsession errors."""


class InvalidKeyError(DHSessionError, ValueError):
    """Raised when a session key does not have the required length."""


class InvalidPublicKeyError(DHSessionError, ValueError):
    """Raised when a peer's DH public value is outside ``[2, p-2]``."""


class EncryptionError(DHSessionError):
    """Raised on encryption failures."""


class DecryptionError(EncryptionError):
    """Raised on decryption failures (wrong key, tampered or truncated data)."""


class RegistryClosedError(DHSessionError, RuntimeError):
    """Raised when the session key registry is used outside ``start``/``shutdown``."""


class UnknownSessionError(DHSessionError):
    """Raised when a message arrives for a session with no live key."""
