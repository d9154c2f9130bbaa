# core/cache.py
# -*- coding: utf-8 -*-
"""
프로세스 단위 메모리 캐시 (TTL 기반 key → value).

- 앱 lifespan 에서 한 번 생성해 app.state.cache 로 보관하고,
  필요한 곳(요청 제한기 등)에 참조로 넘겨 쓴다.
- clock 을 주입받으므로 테스트에서 시간을 직접 움직일 수 있다.
- TTL 은 읽을 때 정해지므로, 지금까지 get 에 쓰인 가장 긴 TTL 보다
  오래된 항목은 누구도 읽을 수 없다. set 이 그 주기마다 한 번씩 쓸어낸다.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        default_ttl: float = 30.0,
    ) -> None:
        self._clock = clock
        self._default_ttl = default_ttl
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._max_ttl = default_ttl
        self._last_sweep = clock()

    def get(self, key: str, ttl: Optional[float] = None) -> Any:
        """
        저장 시각으로부터 ttl(초)이 지났으면 삭제 후 None.
        ttl 을 주지 않으면 default_ttl 기준.
        """
        ttl = self._default_ttl if ttl is None else ttl
        with self._lock:
            if ttl > self._max_ttl:
                self._max_ttl = ttl
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._clock() - stored_at > ttl:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self._max_ttl:
                self._sweep(now)
            self._entries[key] = (value, now)

    def _sweep(self, now: float) -> None:
        # lock 을 잡은 상태에서만 호출
        expired = [k for k, (_, stored_at) in self._entries.items() if now - stored_at > self._max_ttl]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now

    def invalidate(self, prefix: Optional[str] = None) -> None:
        """prefix 로 시작하는 키만 삭제. prefix 가 없으면 전체 삭제."""
        with self._lock:
            if not prefix:
                self._entries.clear()
                return
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]

    def cached(
        self,
        key: str,
        loader: Callable[[], Any],
        ttl: Optional[float] = None,
    ) -> Any:
        """캐시 미스일 때만 loader 호출. None 결과는 저장하지 않는다."""
        value = self.get(key, ttl)
        if value is not None:
            return value

        value = loader()
        if value is not None:
            self.set(key, value)
        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
