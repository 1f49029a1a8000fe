"""Core types, constants, and utility functions shared across dhsession."""

from __future__ import annotations

import base64
from enum import Enum


# Session keys are SHA-256 digests
SESSION_KEY_SIZE = 32


class ResetOutcome(str, Enum):
    """Result of :meth:`SessionKeyRegistry.reset_timeout`.

    Using ``str, Enum`` so that ``ResetOutcome.RESET == "reset"`` is True.
    """

    RESET = "reset"
    NO_TIMER = "no_timer"
    EXPIRED = "expired"


def b64_encode(data: bytes) -> str:
    """URL-safe base64 encode *data*, stripping padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64_decode(s: str) -> bytes:
    """URL-safe base64 decode *s*, tolerating missing padding."""
    padding = 4 - len(s) % 4
    if padding != 4:
        s += "=" * padding
    return base64.urlsafe_b64decode(s)
