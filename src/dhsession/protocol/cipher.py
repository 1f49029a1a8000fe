"""Symmetric encryption under a negotiated session key.

Wraps PyNaCl's ``SecretBox`` (XSalsa20-Poly1305).  The 32-byte key is
the output of :func:`dhsession.protocol.dh.derive_shared_secret` or of
:func:`generate_key`.

This module never hand-rolls crypto -- every operation delegates to PyNaCl.
"""

from __future__ import annotations

import nacl.exceptions
import nacl.utils
from nacl.secret import SecretBox

from dhsession.protocol.errors import DecryptionError, EncryptionError, InvalidKeyError
from dhsession.protocol.types import SESSION_KEY_SIZE, b64_decode, b64_encode

NONCE_SIZE = SecretBox.NONCE_SIZE


def check_key(key: bytes) -> bytes:
    """Return *key* if it is a 32-byte session key.

    Raises:
        InvalidKeyError: On any other type or length.
    """
    if not isinstance(key, bytes) or len(key) != SESSION_KEY_SIZE:
        size = len(key) if isinstance(key, (bytes, bytearray)) else type(key).__name__
        raise InvalidKeyError(f"Session key must be {SESSION_KEY_SIZE} bytes, got {size}")
    return key


def generate_key() -> bytes:
    """Return a random 32-byte session key."""
    return nacl.utils.random(SESSION_KEY_SIZE)


# ---------------------------------------------------------------------------
# Raw (nonce, ciphertext) interface
# ---------------------------------------------------------------------------

def encrypt(key: bytes, plaintext: bytes) -> tuple[bytes, bytes]:
    """Encrypt *plaintext* under *key* with a fresh random nonce.

    Returns:
        A ``(nonce, ciphertext)`` tuple; the ciphertext carries the MAC.

    Raises:
        EncryptionError: On any libsodium error.
    """
    box = SecretBox(check_key(key))
    try:
        message = box.encrypt(plaintext, nacl.utils.random(NONCE_SIZE))
    except nacl.exceptions.CryptoError as exc:
        raise EncryptionError(str(exc)) from exc
    return message.nonce, message.ciphertext


def decrypt(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """Decrypt and authenticate *ciphertext*.

    Raises:
        DecryptionError: On a wrong key, tampered data or a bad nonce.
    """
    box = SecretBox(check_key(key))
    try:
        return box.decrypt(ciphertext, nonce)
    except (nacl.exceptions.CryptoError, ValueError) as exc:
        raise DecryptionError(str(exc)) from exc


# ---------------------------------------------------------------------------
# Base64 envelope: b64(nonce || ciphertext)
# ---------------------------------------------------------------------------

def encrypt_message(key: bytes, message: str) -> str:
    """Encrypt a text message, returning ``b64(nonce || ciphertext)``."""
    nonce, ciphertext = encrypt(key, message.encode("utf-8"))
    return b64_encode(nonce + ciphertext)


def decrypt_message(key: bytes, payload_b64: str) -> str:
    """Reverse :func:`encrypt_message`.

    Raises:
        DecryptionError: If the payload is malformed, forged, or was
            encrypted under a different key.
    """
    try:
        raw = b64_decode(payload_b64)
    except ValueError as exc:
        raise DecryptionError(f"Malformed payload: {exc}") from exc
    if len(raw) < NONCE_SIZE + SecretBox.MACBYTES:
        raise DecryptionError("Payload too short")
    plaintext = decrypt(key, raw[:NONCE_SIZE], raw[NONCE_SIZE:])
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecryptionError(str(exc)) from exc
