"""A thread-safe in-memory cache whose entries expire after a fixed interval."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class _Entry:
    created_at: float
    val: bytes


class Cache:
    """Maps keys to byte strings; a background thread drops stale entries.

    Every ``interval`` seconds, entries older than ``interval`` are removed.
    Times are measured with ``time.monotonic``.
    """

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("cache interval must be positive")
        self.interval = float(interval)
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._reap_loop, name="cache-reaper", daemon=True
        )
        self._thread.start()

    def add(self, key: str, val: bytes) -> None:
        """Store ``val`` under ``key``, replacing any earlier value."""
        with self._lock:
            self._entries[key] = _Entry(time.monotonic(), bytes(val))
            print(f"url : {key} Added to Cache")

    def get(self, key: str) -> bytes | None:
        """Return the value stored under ``key``, or None if absent."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            print(f"url : {key} Retrieved from Cache")
            return entry.val

    def reap(self, now: float) -> int:
        """Remove entries created more than ``interval`` before ``now``.

        ``now`` is a ``time.monotonic`` reading. Returns the number of
        entries removed.
        """
        with self._lock:
            stale = [
                key
                for key, entry in self._entries.items()
                if entry.created_at + self.interval < now
            ]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def close(self) -> None:
        """Stop the background reaper. Safe to call more than once."""
        self._stop.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> Cache:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def _reap_loop(self) -> None:
        while not self._stop.wait(self.interval):
            self.reap(time.monotonic())