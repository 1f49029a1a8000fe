"""Session settings from environment variables."""

from __future__ import annotations

import os


class Settings:
    """dhsession settings, read from environment variables with defaults."""

    def __init__(self) -> None:
        # Seconds of inactivity before a server-side session key is evicted
        self.session_timeout: float = float(
            os.getenv("DHSESSION_SESSION_TIMEOUT", "10.0")
        )
        self.log_level: str = os.getenv("DHSESSION_LOG_LEVEL", "INFO").upper()
        self.debug: bool = os.getenv("DHSESSION_DEBUG", "").lower() in ("1", "true", "yes")
