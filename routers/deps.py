# routers/deps.py
# -*- coding: utf-8 -*-
"""
라우터 공통 의존성.

- get_chat_client: lifespan 에서 만든 ChatClient (테스트에서는 dependency_overrides 로 교체)
- enforce_rate_limit: 요청 본문 검증/LLM 호출 전에 IP별 요청 횟수 확인
"""

from fastapi import Request

from brain.llm_client import ChatClient
from core.logging import logger
from core.rate_limit import RateLimiter, client_key_from_request

RATE_LIMITED_MESSAGE = "요청이 너무 많습니다. 잠시 후 다시 시도해주세요."


class RateLimited(Exception):
    def __init__(self, client_key: str):
        super().__init__(client_key)
        self.client_key = client_key


def get_chat_client(request: Request) -> ChatClient:
    return request.app.state.llm


def enforce_rate_limit(request: Request) -> None:
    limiter: RateLimiter = request.app.state.rate_limiter
    client_key = client_key_from_request(request)
    if not limiter.allow(client_key):
        logger.warning(f"요청 제한 초과: {client_key} {request.url.path}")
        raise RateLimited(client_key)
