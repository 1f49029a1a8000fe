"""In-memory session key registry with per-session expiry timers.

Maps an opaque session id to its 32-byte key and, optionally, an
``asyncio.TimerHandle`` that evicts the entry once the timeout elapses
without a :meth:`SessionKeyRegistry.reset_timeout`.

All mutations of the table go through a single ``asyncio.Lock``.  Timer
callbacks never touch the table directly: they spawn an eviction task that
takes the lock and re-checks the entry's generation, so an eviction that
was already in flight when its timer got cancelled cannot remove a newer
entry registered under the same id.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Hashable
from dataclasses import dataclass, field

from dhsession.protocol.cipher import check_key
from dhsession.protocol.errors import RegistryClosedError
from dhsession.protocol.types import ResetOutcome

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    """A stored session key and its (optional) expiry timer."""

    key: bytes = field(repr=False)
    generation: int
    timer: asyncio.TimerHandle | None = None

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


def _check_timeout(timeout: float | None) -> None:
    if timeout is None:
        return
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise TypeError(f"timeout must be a number of seconds, got {type(timeout).__name__}")
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"timeout must be a positive number of seconds, got {timeout!r}")


class SessionKeyRegistry:
    """Concurrent store of per-session keys with TTL eviction.

    Must be started from inside a running event loop and shut down on the
    same loop::

        async with SessionKeyRegistry() as registry:
            await registry.register("alice", key, timeout=10.0)
            key = await registry.get("alice")

    Timeouts are in seconds; ``None`` means the entry never expires.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, SessionEntry] = {}
        self._lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._closed = False
        self._generation = 0
        self._evictions: set[asyncio.Task] = set()

    # -- public lifecycle --------------------------------------------------

    async def start(self) -> None:
        """Bind the registry to the running event loop."""
        if self._closed:
            raise RegistryClosedError("Registry has been shut down")
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
            logger.info("Session key registry started")

    async def shutdown(self) -> None:
        """Cancel every timer and pending eviction, then drop all keys.

        Safe to call more than once.
        """
        if self._closed:
            return
        async with self._lock:
            self._closed = True
            for entry in self._entries.values():
                entry.cancel_timer()
            dropped = len(self._entries)
            self._entries.clear()

        pending = list(self._evictions)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._evictions.clear()
        logger.info("Session key registry shut down (%d sessions dropped)", dropped)

    async def __aenter__(self) -> SessionKeyRegistry:
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.shutdown()

    @property
    def closed(self) -> bool:
        return self._closed

    # -- key operations ----------------------------------------------------

    async def register(
        self, session_id: Hashable, key: bytes, timeout: float | None = None
    ) -> None:
        """Store *key* for *session_id*, replacing any previous entry.

        Any timer belonging to the previous entry is cancelled before the
        new one (if *timeout* is given) is armed.

        Raises:
            InvalidKeyError: If *key* is not exactly 32 bytes.
            ValueError: If *timeout* is not a positive number of seconds.
            RegistryClosedError: If the registry is not running.
        """
        check_key(key)
        _check_timeout(timeout)
        async with self._lock:
            self._check_running()
            old = self._entries.pop(session_id, None)
            if old is not None:
                old.cancel_timer()
            entry = SessionEntry(key=key, generation=self._next_generation())
            if timeout is not None:
                entry.timer = self._arm(session_id, entry.generation, timeout)
            self._entries[session_id] = entry
        logger.debug(
            "Registered session %s (timeout=%s, replaced=%s)",
            session_id,
            timeout,
            old is not None,
        )

    async def get(self, session_id: Hashable) -> bytes | None:
        """Return the key for *session_id*, or ``None`` if absent or evicted.

        Does not affect the expiry timer.
        """
        async with self._lock:
            self._check_running()
            entry = self._entries.get(session_id)
            return entry.key if entry is not None else None

    async def forget(self, session_id: Hashable) -> None:
        """Remove *session_id* and cancel its timer.  No-op if absent."""
        async with self._lock:
            self._check_running()
            entry = self._entries.pop(session_id, None)
            if entry is None:
                return
            entry.cancel_timer()
        logger.debug("Forgot session %s", session_id)

    async def reset_timeout(self, session_id: Hashable, timeout: float) -> ResetOutcome:
        """Restart the expiry countdown for *session_id*.

        Returns:
            ``ResetOutcome.RESET`` if a timer was re-armed,
            ``ResetOutcome.NO_TIMER`` if the entry was registered without a
            timeout (left untouched), or ``ResetOutcome.EXPIRED`` if there is
            no entry any more.
        """
        if timeout is None:
            raise ValueError("reset_timeout requires a timeout")
        _check_timeout(timeout)
        async with self._lock:
            self._check_running()
            entry = self._entries.get(session_id)
            if entry is None:
                return ResetOutcome.EXPIRED
            if entry.timer is None:
                return ResetOutcome.NO_TIMER
            entry.cancel_timer()
            entry.generation = self._next_generation()
            entry.timer = self._arm(session_id, entry.generation, timeout)
        logger.debug("Reset timeout for session %s to %ss", session_id, timeout)
        return ResetOutcome.RESET

    # -- introspection -----------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def session_ids(self) -> list[Hashable]:
        """Snapshot of the currently registered session ids."""
        return list(self._entries.keys())

    # -- internals ---------------------------------------------------------

    def _check_running(self) -> None:
        if self._closed:
            raise RegistryClosedError("Registry has been shut down")
        if self._loop is None:
            raise RegistryClosedError("Registry not started; call start() first")

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _arm(self, session_id: Hashable, generation: int, timeout: float) -> asyncio.TimerHandle:
        return self._loop.call_later(timeout, self._on_timer, session_id, generation)

    def _on_timer(self, session_id: Hashable, generation: int) -> None:
        """Timer callback: hand the eviction to a task that takes the lock."""
        if self._closed:
            return
        task = self._loop.create_task(self._evict(session_id, generation))
        self._evictions.add(task)
        task.add_done_callback(self._evictions.discard)

    async def _evict(self, session_id: Hashable, generation: int) -> None:
        async with self._lock:
            if self._closed:
                return
            entry = self._entries.get(session_id)
            if entry is None or entry.generation != generation:
                logger.debug("Ignoring stale expiry for session %s", session_id)
                return
            del self._entries[session_id]
            entry.timer = None
        logger.debug("Session %s expired", session_id)
