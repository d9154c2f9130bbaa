"""
공통 fixture.

- 앱 import 전에 환경변수를 고정 (로그 디렉터리는 임시 폴더, API 키는 더미)
- FakeChatClient: 업스트림 호출 대신 정해진 응답/예외를 돌려주고 호출 기록을 남김
"""
import os
import tempfile

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="grima-logs-"))
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient

from app_fastapi import app
from routers.deps import get_chat_client


class FakeChatClient:
    configured = True

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def call_chat(self, messages, *, temperature, max_tokens, timeout_ms):
        self.calls.append(
            {
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "timeout_ms": timeout_ms,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self):
        pass


@pytest.fixture
def fake_llm():
    fake = FakeChatClient()
    app.dependency_overrides[get_chat_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_chat_client, None)


@pytest.fixture
def client(fake_llm):
    # lifespan 이 매번 새 캐시/요청 제한기를 만든다.
    with TestClient(app) as c:
        yield c
