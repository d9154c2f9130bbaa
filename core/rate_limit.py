# core/rate_limit.py
# -*- coding: utf-8 -*-
"""
클라이언트(IP) 단위 고정 윈도우 요청 제한.

윈도우 기록은 TTLCache 에 저장한다.
- 키: "ratelimit:<client>"
- 값: 해당 윈도우에서의 요청 횟수(dict)
- 윈도우 시작 시각에 set 하고 ttl=window 로 조회하므로,
  윈도우가 지나면 자동으로 새 윈도우가 열린다.
"""

from __future__ import annotations

import threading
from typing import Optional

from fastapi import Request

from .cache import TTLCache

KEY_PREFIX = "ratelimit:"


class RateLimiter:
    def __init__(self, cache: TTLCache, limit: int, window_seconds: float) -> None:
        self.cache = cache
        self.limit = limit
        self.window_seconds = window_seconds
        self._lock = threading.Lock()

    def allow(self, client_key: str) -> bool:
        key = KEY_PREFIX + client_key
        with self._lock:
            record = self.cache.get(key, ttl=self.window_seconds)
            if record is None:
                self.cache.set(key, {"count": 1})
                return True

            if record["count"] >= self.limit:
                return False

            record["count"] += 1
            return True

    def reset(self) -> None:
        self.cache.invalidate(KEY_PREFIX)


def client_key_from_request(request: Request) -> str:
    """X-Forwarded-For 첫 번째 값 → X-Real-IP → 소켓 주소 → 'unknown' 순."""
    forwarded: Optional[str] = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"
