"""Shared test fixtures for dhsession tests."""

from __future__ import annotations

import pytest

from dhsession.protocol.cipher import generate_key
from dhsession.protocol.dh import generate_keypair
from dhsession.registry.registry import SessionKeyRegistry


@pytest.fixture()
def keypair_pair():
    """Return two independent DH keypairs -- (alice, bob)."""
    return generate_keypair(), generate_keypair()


@pytest.fixture()
def session_key() -> bytes:
    return generate_key()


@pytest.fixture()
def other_key() -> bytes:
    return generate_key()


@pytest.fixture()
async def registry():
    """A started SessionKeyRegistry, shut down after the test."""
    reg = SessionKeyRegistry()
    await reg.start()
    yield reg
    await reg.shutdown()
