from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import Request


class RateLimiter:
    """Fixed-window request counter keyed by client."""

    def __init__(self, limit: int, window_seconds: int = 60) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> Tuple[bool, int, float]:
        """Count one request. Returns (allowed, remaining, reset_at)."""
        now = time.time()
        with self._lock:
            count, reset = self._hits.get(key, (0, now + self.window_seconds))
            if now > reset:
                count = 0
                reset = now + self.window_seconds
            count += 1
            self._hits[key] = (count, reset)
        return count <= self.limit, max(0, self.limit - count), reset


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
