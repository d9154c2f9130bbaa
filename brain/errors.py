# -*- coding: utf-8 -*-
"""
brain.errors

생성 파이프라인에서 발생하는 오류 분류.

라우터는 이 예외들만 보고 HTTP 상태/고정 한국어 메시지로 변환한다.
kind 값은 JSONL 로그의 error_kind 로 그대로 남는다.
"""

from typing import Optional


class GenerationError(Exception):
    kind = "server_error"


class BadRequest(GenerationError):
    kind = "bad_request"


class UpstreamTimeout(GenerationError):
    kind = "timeout"

    def __init__(self, timeout_ms: int):
        super().__init__(f"upstream call exceeded {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class UpstreamError(GenerationError):
    """업스트림 non-2xx 또는 전송 실패(status=None)."""

    kind = "upstream_error"

    def __init__(self, status: Optional[int], body: str = ""):
        super().__init__(f"upstream responded with status {status}")
        self.status = status
        self.body = body


class MalformedUpstreamResponse(GenerationError):
    """2xx 응답이지만 choices[0].message.content 가 없음."""

    kind = "malformed_upstream_response"

    def __init__(self, body: str = ""):
        super().__init__("upstream reply has no message content")
        self.body = body


# ---------------------------------------------------------
# 리포트 응답 파싱 오류
# ---------------------------------------------------------

class ReportParseError(GenerationError):
    kind = "report_parse_error"

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class ExtractionFailed(ReportParseError):
    """응답 텍스트에 {...} 구간이 없음."""

    kind = "extraction_failed"


class InvalidJson(ReportParseError):
    kind = "invalid_json"


class MissingField(ReportParseError):
    kind = "missing_field"

    def __init__(self, field: str, raw: str = ""):
        super().__init__(f"required field missing: {field}", raw)
        self.field = field
