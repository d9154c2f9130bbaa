# -*- coding: utf-8 -*-
"""
brain.pipeline

생성 요청 한 건 처리 흐름:
  검증 → 호칭/연령대 → 프롬프트 조립 → LLM 호출 → 응답 정리

단계 중 하나라도 실패하면 그대로 예외를 올린다. 재시도는 하지 않는다.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Union

from core.config import (
    ACADEMY_NAME,
    DAILY_MESSAGE_MAX_TOKENS,
    DAILY_MESSAGE_TEMPERATURE,
    DAILY_MESSAGE_TIMEOUT_MS,
    REPORT_MAX_TOKENS,
    REPORT_TEMPERATURE,
    REPORT_TIMEOUT_MS,
)

from . import daily_prompt, report_prompt
from .errors import BadRequest
from .llm_client import ChatClient
from .report_parser import ReportContent, parse_report_reply


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def validate_daily_message(student_name: Optional[str], subject: Optional[str]) -> None:
    if _blank(student_name) or _blank(subject):
        raise BadRequest("studentName and subject are required")


async def generate_daily_message(
    llm: ChatClient,
    *,
    student_name: Optional[str],
    student_age: Optional[str],
    subject: Optional[str],
    materials: Union[str, Iterable[str], None] = None,
    progress_status: Optional[str] = None,
    teacher_memo: Optional[str] = None,
    academy_name: str = ACADEMY_NAME,
    timeout_ms: int = DAILY_MESSAGE_TIMEOUT_MS,
) -> str:
    validate_daily_message(student_name, subject)

    messages = daily_prompt.build_messages(
        student_name=student_name.strip(),
        student_age=student_age,
        subject=subject.strip(),
        materials=materials,
        progress_status=progress_status,
        teacher_memo=teacher_memo,
        academy_name=academy_name,
    )

    reply = await llm.call_chat(
        messages,
        temperature=DAILY_MESSAGE_TEMPERATURE,
        max_tokens=DAILY_MESSAGE_MAX_TOKENS,
        timeout_ms=timeout_ms,
    )
    return reply.strip()


async def generate_report(
    llm: ChatClient,
    *,
    student_name: Optional[str],
    student_age: Any,
    class_name: Optional[str],
    teacher_memo: Optional[str],
    parent_request: Optional[str] = None,
    image_before: Optional[str] = None,
    image_after: Optional[str] = None,
    academy_name: str = ACADEMY_NAME,
    timeout_ms: int = REPORT_TIMEOUT_MS,
) -> ReportContent:
    # 리포트는 필수값 검증 없이 진행한다 (빈 값은 프롬프트에 그대로 들어감).
    messages = report_prompt.build_messages(
        student_name=student_name,
        student_age=student_age,
        class_name=class_name,
        teacher_memo=teacher_memo,
        parent_request=parent_request,
        image_before=image_before,
        image_after=image_after,
        academy_name=academy_name,
    )

    reply = await llm.call_chat(
        messages,
        temperature=REPORT_TEMPERATURE,
        max_tokens=REPORT_MAX_TOKENS,
        timeout_ms=timeout_ms,
    )
    return parse_report_reply(reply)
