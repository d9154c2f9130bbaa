# -*- coding: utf-8 -*-
"""
brain.llm_client

OpenAI Chat Completions 호출 래퍼.

- 요청 1회당 HTTP POST 1번. 재시도 없음 (max_retries=0)
- timeout_ms 안에 끝나지 않으면 진행 중인 요청을 취소하고 UpstreamTimeout
- non-2xx → UpstreamError(status, body), 연결 실패 → UpstreamError(None)
- 2xx 인데 choices[0].message.content 가 없으면 MalformedUpstreamResponse

생성 파이프라인(brain.pipeline)은 이 모듈을 통해서만 LLM을 호출한다.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from core.config import CHAT_MODEL, OPENAI_API_KEY, OPENAI_BASE_URL
from core.logging import logger

from .errors import MalformedUpstreamResponse, UpstreamError, UpstreamTimeout


def extract_reply_content(body: str) -> str:
    """Chat Completions 응답 본문에서 첫 번째 choice 의 content."""
    try:
        data = json.loads(body)
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise MalformedUpstreamResponse(body=body[:2000]) from e

    if not isinstance(content, str) or not content:
        raise MalformedUpstreamResponse(body=body[:2000])
    return content


class ChatClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key or OPENAI_API_KEY
        self.model = model or CHAT_MODEL
        self._client: Optional[AsyncOpenAI] = None
        if self.api_key:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=base_url or OPENAI_BASE_URL,
                max_retries=0,
                http_client=http_client,
            )
        else:
            logger.warning("OPENAI_API_KEY가 설정되지 않았습니다. 생성 요청은 실패 처리됩니다.")

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def call_chat(
        self,
        messages: List[Dict[str, Any]],
        *,
        temperature: float,
        max_tokens: int,
        timeout_ms: int,
    ) -> str:
        if self._client is None:
            raise UpstreamError(None, "OPENAI_API_KEY not configured")

        timeout_s = timeout_ms / 1000
        request = self._client.chat.completions.with_raw_response.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout_s,
        )

        try:
            # wait_for 는 만료 시 요청 코루틴을 취소하고 끝날 때까지 기다린다.
            raw = await asyncio.wait_for(request, timeout=timeout_s)
        except (asyncio.TimeoutError, APITimeoutError) as e:
            raise UpstreamTimeout(timeout_ms) from e
        except APIStatusError as e:
            raise UpstreamError(e.status_code, e.response.text[:2000]) from e
        except APIConnectionError as e:
            raise UpstreamError(None, str(e)) from e

        return extract_reply_content(raw.http_response.text)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
