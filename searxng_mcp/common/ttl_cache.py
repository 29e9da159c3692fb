# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Time-bounded, thread-safe key/value cache.

Expiry is checked on every read, so a stale value is never returned. The
background sweep only reclaims memory held by entries nobody asked for again;
when it runs has no effect on what `get` answers.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    expires_at: float


class CacheStats(BaseModel):
    size: int
    ttl_seconds: float


class ThreadSafeTTLCache(Generic[K, V]):
    def __init__(
        self,
        ttl_seconds: float,
        sweep_interval_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
        autostart: bool = True,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be > 0")
        self._ttl = float(ttl_seconds)
        self._sweep_interval = float(sweep_interval_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._cache: Dict[K, CacheEntry[V]] = {}
        self._stop_sweep = threading.Event()
        self._sweeper: Optional[threading.Thread] = None
        self._destroyed = False
        if autostart:
            self.start()

    def start(self) -> None:
        """Start the periodic sweep thread (no-op if already running)."""
        if self._destroyed:
            raise RuntimeError("Cache has been destroyed")
        if self._sweeper is not None:
            return
        self._sweeper = threading.Thread(target=self._run_sweeper, name="ttl-cache-sweeper", daemon=True)
        self._sweeper.start()

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            # Expired entries stay in place until the next sweep.
            if self._clock() > entry.expires_at:
                return None
            return entry.value

    def set(self, key: K, value: V) -> None:
        with self._lock:
            self._cache[key] = CacheEntry(value=value, expires_at=self._clock() + self._ttl)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def sweep(self) -> int:
        """Remove every expired entry. Returns how many were dropped."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._cache.items() if now > entry.expires_at]
            for key in expired:
                del self._cache[key]
        if expired:
            logger.debug(f"[TTLCache] swept {len(expired)} expired entries")
        return len(expired)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(size=len(self._cache), ttl_seconds=self._ttl)

    def destroy(self) -> None:
        """
        Stop the sweep thread and drop all entries. Blocks until a sweep that
        is already scanning has finished. Safe to call more than once.
        """
        if self._destroyed:
            return
        self._destroyed = True
        self._stop_sweep.set()
        if self._sweeper is not None and self._sweeper is not threading.current_thread():
            self._sweeper.join()
        self._sweeper = None
        self.clear()

    def _run_sweeper(self) -> None:
        while not self._stop_sweep.wait(self._sweep_interval):
            try:
                self.sweep()
            except Exception:
                logger.exception("[TTLCache] sweep failed")

    def __contains__(self, key: K) -> bool:
        return self.get(key) is not None
