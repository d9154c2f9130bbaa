"""
ChatClient: 업스트림 요청 형태, 오류 분류, 제한 시간 취소.

httpx.MockTransport 로 OpenAI 엔드포인트를 대신한다 (네트워크 사용 안 함).
"""
import asyncio
import json

import httpx
import pytest

from brain.errors import MalformedUpstreamResponse, UpstreamError, UpstreamTimeout
from brain.llm_client import ChatClient, extract_reply_content

MESSAGES = [
    {"role": "system", "content": "sys"},
    {"role": "user", "content": "hello"},
]


def _completion(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def _client(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatClient(
        api_key="sk-test",
        base_url="https://upstream.test/v1",
        model="gpt-4o-mini",
        http_client=http_client,
    )


def _call(client, timeout_ms=1000):
    async def run():
        try:
            return await client.call_chat(
                MESSAGES, temperature=0.7, max_tokens=500, timeout_ms=timeout_ms
            )
        finally:
            await client.aclose()

    return asyncio.run(run())


def test_single_post_with_bearer_and_params():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=_completion("  안녕하세요  "))

    reply = _call(_client(handler))

    assert reply == "  안녕하세요  "
    assert len(seen) == 1
    req = seen[0]
    assert req.method == "POST"
    assert req.url.path == "/v1/chat/completions"
    assert req.headers["authorization"] == "Bearer sk-test"
    body = json.loads(req.content)
    assert body["model"] == "gpt-4o-mini"
    assert body["messages"] == MESSAGES
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 500


@pytest.mark.parametrize("status", [400, 401, 429, 500, 503])
def test_non_2xx_is_upstream_error_without_retry(status):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(status, json={"error": {"message": "boom"}})

    with pytest.raises(UpstreamError) as exc_info:
        _call(_client(handler))

    assert exc_info.value.status == status
    assert "boom" in exc_info.value.body
    assert len(calls) == 1


def test_connection_failure_is_upstream_error_without_status():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        _call(_client(handler))
    assert exc_info.value.status is None


@pytest.mark.parametrize("payload", [
    {"id": "x"},
    {"choices": []},
    {"choices": [{"message": {"role": "assistant"}}]},
    {"choices": [{"message": {"role": "assistant", "content": ""}}]},
])
def test_2xx_without_content_is_malformed(payload):
    def handler(request):
        return httpx.Response(200, json=payload)

    with pytest.raises(MalformedUpstreamResponse):
        _call(_client(handler))


def test_timeout_cancels_pending_request():
    state = {"cancelled": False, "finished": False}

    async def handler(request):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            state["cancelled"] = True
            raise
        state["finished"] = True
        return httpx.Response(200, json=_completion("late"))

    with pytest.raises(UpstreamTimeout) as exc_info:
        _call(_client(handler), timeout_ms=50)

    assert exc_info.value.timeout_ms == 50
    assert state["cancelled"] is True
    assert state["finished"] is False


def test_missing_api_key_fails_without_network(monkeypatch):
    monkeypatch.setattr("brain.llm_client.OPENAI_API_KEY", None)
    client = ChatClient(api_key=None)
    assert client.configured is False
    with pytest.raises(UpstreamError) as exc_info:
        _call(client)
    assert exc_info.value.status is None


def test_extract_reply_content_rejects_non_json():
    with pytest.raises(MalformedUpstreamResponse):
        extract_reply_content("<html>gateway</html>")
