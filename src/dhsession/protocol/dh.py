"""Ephemeral Diffie-Hellman key agreement over the fixed group in
:mod:`dhsession.protocol.params`.

Every function here is pure arithmetic on Python's arbitrary-precision
``int``.  Participants are not authenticated: a bare DH exchange is open
to man-in-the-middle attacks.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass, field

from dhsession.protocol.errors import InvalidPublicKeyError
from dhsession.protocol.params import G, P, SHARED_SECRET_SIZE, int_to_bytes


@dataclass(frozen=True)
class DHKeyPair:
    """One peer's ephemeral keypair.  ``secret`` never leaves the peer."""

    secret: int = field(repr=False)
    public: int


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """Compute ``base ** exponent % modulus`` by right-to-left square-and-multiply.

    Raises:
        ValueError: If *modulus* is not positive or *exponent* is negative.
    """
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    if exponent < 0:
        raise ValueError("exponent must be non-negative")
    if exponent == 0:
        return 1

    result = 1
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = result * base % modulus
        base = base * base % modulus
        exponent >>= 1
    return result


def random_int(low: int, high: int) -> int:
    """Return a cryptographically secure integer uniform in ``[low, high]``."""
    if high < low:
        raise ValueError(f"Empty range [{low}, {high}]")
    return low + secrets.randbelow(high - low + 1)


# ---------------------------------------------------------------------------
# Key generation
# ---------------------------------------------------------------------------

def generate_secret() -> int:
    """Pick a private exponent uniformly from ``[2, P - 2]``."""
    return random_int(2, P - 2)


def derive_public(secret: int) -> int:
    """Return the public value ``G ** secret mod P``."""
    return mod_exp(G, secret, P)


def generate_keypair() -> DHKeyPair:
    """Generate a fresh ephemeral keypair."""
    secret = generate_secret()
    return DHKeyPair(secret=secret, public=derive_public(secret))


def validate_public_key(value: int) -> int:
    """Check that a peer's public value lies in ``[2, P - 2]``.

    Values outside that range (0, 1, ``P - 1``, or anything not reduced
    mod ``P``) confine the shared secret to a trivial subgroup.

    Returns:
        *value*, unchanged.

    Raises:
        InvalidPublicKeyError: If the value is out of range.
    """
    if not isinstance(value, int) or not 2 <= value <= P - 2:
        raise InvalidPublicKeyError("DH public value out of range [2, p-2]")
    return value


# ---------------------------------------------------------------------------
# Shared secret
# ---------------------------------------------------------------------------

def derive_shared_secret(other_public: int, my_secret: int) -> bytes:
    """Derive the 32-byte session key from the peer's public value.

    The raw DH value is serialized big-endian and left-padded to 32 bytes
    so that both peers hash an identical byte string, then SHA-256 is
    applied.
    """
    raw = mod_exp(other_public, my_secret, P)
    return hashlib.sha256(int_to_bytes(raw, SHARED_SECRET_SIZE)).digest()
