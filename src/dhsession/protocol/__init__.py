"""dhsession protocol -- DH key agreement and session-key encryption.

Public API re-exports for ``dhsession.protocol``.
"""

from dhsession.protocol.types import (
    SESSION_KEY_SIZE,
    ResetOutcome,
    b64_encode,
    b64_decode,
)

from dhsession.protocol.errors import (
    DHSessionError,
    InvalidKeyError,
    InvalidPublicKeyError,
    EncryptionError,
    DecryptionError,
    RegistryClosedError,
    UnknownSessionError,
)

from dhsession.protocol.params import G, P, SHARED_SECRET_SIZE, int_to_bytes

from dhsession.protocol.dh import (
    DHKeyPair,
    mod_exp,
    random_int,
    generate_secret,
    derive_public,
    generate_keypair,
    validate_public_key,
    derive_shared_secret,
)

from dhsession.protocol.cipher import (
    check_key,
    generate_key,
    encrypt,
    decrypt,
    encrypt_message,
    decrypt_message,
)

__all__ = [
    # Types
    "SESSION_KEY_SIZE",
    "ResetOutcome",
    "b64_encode",
    "b64_decode",
    # Errors
    "DHSessionError",
    "InvalidKeyError",
    "InvalidPublicKeyError",
    "EncryptionError",
    "DecryptionError",
    "RegistryClosedError",
    "UnknownSessionError",
    # Parameters
    "G",
    "P",
    "SHARED_SECRET_SIZE",
    "int_to_bytes",
    # DH
    "DHKeyPair",
    "mod_exp",
    "random_int",
    "generate_secret",
    "derive_public",
    "generate_keypair",
    "validate_public_key",
    "derive_shared_secret",
    # Cipher
    "check_key",
    "generate_key",
    "encrypt",
    "decrypt",
    "encrypt_message",
    "decrypt_message",
]
