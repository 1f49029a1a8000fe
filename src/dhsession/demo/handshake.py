"""In-process client/server pair demonstrating the full session flow.

The server owns one ephemeral DH keypair and a :class:`SessionKeyRegistry`.
A client handshakes by sending its public value; both sides derive the
same 32-byte key, which the server registers under the client's id with a
timeout.  Every encrypted message the server receives is answered with
``"ACK " + message`` and renews the session's timeout.

Run with::

    dhsession demo "attack at dawn"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dhsession.protocol.cipher import decrypt_message, encrypt_message
from dhsession.protocol.dh import (
    DHKeyPair,
    derive_shared_secret,
    generate_keypair,
    validate_public_key,
)
from dhsession.protocol.errors import UnknownSessionError
from dhsession.protocol.types import ResetOutcome
from dhsession.registry.registry import SessionKeyRegistry

logger = logging.getLogger(__name__)


class DemoServer:
    """Accepts handshakes and answers encrypted messages."""

    def __init__(
        self,
        registry: SessionKeyRegistry,
        timeout: float | None = 10.0,
        keypair: DHKeyPair | None = None,
    ) -> None:
        self._registry = registry
        self._timeout = timeout
        self._keypair = keypair or generate_keypair()

    @property
    def public(self) -> int:
        return self._keypair.public

    async def handshake(self, client_id: str, client_public: int) -> int:
        """Derive and register the session key for *client_id*.

        Returns:
            The server's public value, for the client to finish the exchange.
        """
        validate_public_key(client_public)
        key = derive_shared_secret(client_public, self._keypair.secret)
        await self._registry.register(client_id, key, self._timeout)
        logger.info("Handshake complete for %s", client_id)
        return self._keypair.public

    async def handle_message(self, client_id: str, payload_b64: str) -> str:
        """Decrypt a client message and return the encrypted acknowledgement.

        Raises:
            UnknownSessionError: If *client_id* has no live session key.
            DecryptionError: If the payload does not decrypt under that key.
        """
        key = await self._registry.get(client_id)
        if key is None:
            raise UnknownSessionError(f"No session key for {client_id!r}")
        message = decrypt_message(key, payload_b64)
        logger.info("Received encrypted message from %s", client_id)
        reply = encrypt_message(key, "ACK " + message)
        if self._timeout is not None:
            outcome = await self._registry.reset_timeout(client_id, self._timeout)
            if outcome is ResetOutcome.EXPIRED:
                logger.warning("Session %s expired while handling a message", client_id)
        return reply


class DemoClient:
    """One peer talking to a :class:`DemoServer`."""

    def __init__(self, client_id: str, server: DemoServer) -> None:
        self.client_id = client_id
        self._server = server
        self._keypair = generate_keypair()
        self._key: bytes | None = None

    @property
    def key(self) -> bytes | None:
        return self._key

    async def handshake(self) -> bytes:
        """Exchange public values with the server and derive the session key."""
        logger.debug("(client %s) sending handshake request", self.client_id)
        server_public = await self._server.handshake(self.client_id, self._keypair.public)
        validate_public_key(server_public)
        self._key = derive_shared_secret(server_public, self._keypair.secret)
        return self._key

    async def send_secret(self, message: str) -> str:
        """Encrypt *message*, send it, and decrypt the server's reply."""
        if self._key is None:
            raise RuntimeError("No session key. Call handshake() first.")
        reply_b64 = await self._server.handle_message(
            self.client_id, encrypt_message(self._key, message)
        )
        return decrypt_message(self._key, reply_b64)


@dataclass
class DemoResult:
    """What :func:`run_demo` observed."""

    client_key: bytes
    server_key: bytes | None
    reply: str


async def run_demo(
    message: str, client_id: str = "user1", timeout: float | None = 10.0
) -> DemoResult:
    """Run one handshake and one message round trip on a fresh registry."""
    async with SessionKeyRegistry() as registry:
        server = DemoServer(registry, timeout=timeout)
        client = DemoClient(client_id, server)
        client_key = await client.handshake()
        reply = await client.send_secret(message)
        server_key = await registry.get(client_id)
    return DemoResult(client_key=client_key, server_key=server_key, reply=reply)
