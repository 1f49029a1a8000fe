"""Server-side session key storage."""

from dhsession.registry.config import Settings
from dhsession.registry.registry import SessionEntry, SessionKeyRegistry

__all__ = ["Settings", "SessionEntry", "SessionKeyRegistry"]
