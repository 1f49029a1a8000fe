"""dhsession -- Diffie-Hellman session keys with expiring server-side storage.

Top-level convenience re-exports::

    from dhsession import SessionKeyRegistry, generate_keypair, derive_shared_secret
    from dhsession.protocol import encrypt_message, decrypt_message
"""

__version__ = "0.1.0"

from dhsession.protocol.dh import DHKeyPair, derive_shared_secret, generate_keypair
from dhsession.protocol.types import ResetOutcome
from dhsession.registry.registry import SessionKeyRegistry

__all__ = [
    "__version__",
    "DHKeyPair",
    "derive_shared_secret",
    "generate_keypair",
    "ResetOutcome",
    "SessionKeyRegistry",
]
