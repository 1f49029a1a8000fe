"""Tests for the in-process demo client and server."""

from __future__ import annotations

import asyncio

import pytest

from dhsession.demo.handshake import DemoClient, DemoServer, run_demo
from dhsession.protocol.cipher import encrypt_message, generate_key
from dhsession.protocol.errors import (
    DecryptionError,
    InvalidPublicKeyError,
    UnknownSessionError,
)


class TestHandshake:
    async def test_client_and_server_agree(self, registry):
        server = DemoServer(registry, timeout=10.0)
        client = DemoClient("user1", server)
        key = await client.handshake()
        assert len(key) * 8 == 256
        assert await registry.get("user1") == key

    async def test_server_rejects_bad_public(self, registry):
        server = DemoServer(registry)
        with pytest.raises(InvalidPublicKeyError):
            await server.handshake("user1", 1)
        assert await registry.get("user1") is None

    async def test_each_client_gets_own_key(self, registry):
        server = DemoServer(registry)
        k1 = await DemoClient("user1", server).handshake()
        k2 = await DemoClient("user2", server).handshake()
        assert k1 != k2
        assert len(registry) == 2


class TestMessages:
    async def test_send_receive_encrypted_message(self, registry):
        server = DemoServer(registry, timeout=10.0)
        client = DemoClient("user1", server)
        await client.handshake()
        message = "attack at dawn"
        assert await client.send_secret(message) == "ACK " + message

    async def test_send_before_handshake_raises(self, registry):
        client = DemoClient("user1", DemoServer(registry))
        with pytest.raises(RuntimeError):
            await client.send_secret("hi")

    async def test_unknown_session_raises(self, registry):
        server = DemoServer(registry)
        with pytest.raises(UnknownSessionError):
            await server.handle_message("ghost", encrypt_message(generate_key(), "hi"))

    async def test_wrong_key_raises(self, registry):
        server = DemoServer(registry)
        await DemoClient("user1", server).handshake()
        with pytest.raises(DecryptionError):
            await server.handle_message("user1", encrypt_message(generate_key(), "hi"))

    async def test_messages_keep_session_alive(self, registry):
        server = DemoServer(registry, timeout=0.15)
        client = DemoClient("user1", server)
        await client.handshake()
        for i in range(3):
            await asyncio.sleep(0.1)
            assert await client.send_secret(f"ping {i}") == f"ACK ping {i}"

    async def test_idle_session_expires(self, registry):
        server = DemoServer(registry, timeout=0.05)
        client = DemoClient("user1", server)
        await client.handshake()
        await asyncio.sleep(0.15)
        with pytest.raises(UnknownSessionError):
            await client.send_secret("too late")

    async def test_no_timeout_session(self, registry):
        server = DemoServer(registry, timeout=None)
        client = DemoClient("user1", server)
        await client.handshake()
        assert await client.send_secret("hi") == "ACK hi"


class TestRunDemo:
    async def test_run_demo(self):
        result = await run_demo("hello", client_id="alice", timeout=5.0)
        assert result.reply == "ACK hello"
        assert result.client_key == result.server_key
