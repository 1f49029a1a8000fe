"""Fixed Diffie-Hellman group parameters.

Both peers must use these exact values; there is no negotiation.

``P`` is the 1024-bit MODP safe prime from RFC 2409 (Oakley Group 2)::

    FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1
    29024E08 8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD
    EF9519B3 CD3A431B 302B0A6D F25F1437 4FE1356D 6D51C245
    E485B576 625E7EC6 F44C42E9 A637ED6B 0BFF5CB6 F406B7ED
    EE386BFB 5A899FA5 AE9F2411 7C4B1FE6 49286651 ECE65381
    FFFFFFFF FFFFFFFF

``G = 4`` is a quadratic residue, so it generates the prime-order
subgroup of size ``(P - 1) / 2``.
"""

from __future__ import annotations

from dhsession.protocol.types import SESSION_KEY_SIZE

P = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
    "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
    "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE65381"
    "FFFFFFFFFFFFFFFF",
    16,
)

G = 4

# Width the raw DH value is left-padded to before hashing
SHARED_SECRET_SIZE = SESSION_KEY_SIZE


def int_to_bytes(value: int, min_length: int = 0) -> bytes:
    """Encode a non-negative integer as big-endian bytes.

    The result is the minimal encoding, left-padded with zero bytes to
    *min_length* when shorter.  Longer encodings are returned unchanged.
    """
    if value < 0:
        raise ValueError("Cannot encode a negative integer")
    length = max((value.bit_length() + 7) // 8, min_length, 1)
    return value.to_bytes(length, "big")
