""" Time-expiring cache of expression results. """

import time
import logging
import threading
from typing import Callable, Dict, Hashable, Optional, Tuple

from nameplate import util

DEFAULT_TTL = 5 * 60.

class ResultCache:
    """ Maps normalized expression text to its last boolean result.

    Entries expire ttl seconds after they were put. Expired entries are
    evicted lazily when looked up, or all at once with sweep(). A value older
    than ttl is never returned. """

    def __init__(self, ttl:float=DEFAULT_TTL, clock:Callable[[], float]=time.monotonic) -> None:
        if ttl <= 0:
            raise ValueError(f'ttl must be positive, got {ttl}')

        self.logger = logging.getLogger(util.fullname(self))
        self.ttl = ttl
        self.clock = clock

        self._lock = threading.Lock()
        self._entries:Dict[Hashable, Tuple[bool, float]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._entries)

    def _expired(self, inserted_at:float, now:float) -> bool:
        return now - inserted_at >= self.ttl

    def get(self, key:Hashable) -> Optional[bool]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, inserted_at = entry
            if self._expired(inserted_at, self.clock()):
                del self._entries[key]
                return None
            return value

    def _sweep_locked(self, now:float) -> int:
        # caller holds _lock
        expired = [k for k, (_, t) in self._entries.items() if self._expired(t, now)]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now
        return len(expired)

    def put(self, key:Hashable, value:bool) -> None:
        """ Stores value for key, restarting its ttl.

        At most once per ttl this also evicts every expired entry, most keys
        embed per-player values and are never looked up again. """
        evicted = 0
        with self._lock:
            now = self.clock()
            if now - self._last_sweep >= self.ttl:
                evicted = self._sweep_locked(now)
            self._entries[key] = (value, now)
        if evicted:
            self.logger.debug(f'evicted {evicted} expired results')

    def sweep(self) -> int:
        """ Evicts every expired entry, returns how many were evicted. """
        with self._lock:
            evicted = self._sweep_locked(self.clock())
        if evicted:
            self.logger.debug(f'evicted {evicted} expired results')
        return evicted

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
