# routers/daily_message.py
from typing import List, Optional, Union
import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from brain import generate_daily_message
from brain.errors import (
    BadRequest,
    GenerationError,
    MalformedUpstreamResponse,
    UpstreamError,
    UpstreamTimeout,
)
from brain.llm_client import ChatClient
from core.logging import log_event, logger
from routers.deps import enforce_rate_limit, get_chat_client

# 클라이언트에 내려주는 고정 메시지
INVALID_REQUEST_MESSAGE = "유효하지 않은 요청입니다."
UPSTREAM_FAILED_MESSAGE = "AI 생성에 실패했습니다. 다시 시도해주세요."
MALFORMED_REPLY_MESSAGE = "AI 응답이 올바르지 않습니다."
SERVER_ERROR_MESSAGE = "서버 오류가 발생했습니다."
TIMEOUT_MESSAGE = "AI 응답 시간이 초과되었습니다. 다시 시도해주세요."


class DailyMessageRequest(BaseModel):
    """
    일일 메시지 생성 요청.
    필수값(studentName, subject) 검증은 파이프라인에서 하므로 여기서는 모두 선택값.
    """
    studentName: Optional[str] = Field(default=None, examples=["김주빈"])
    studentAge: Optional[str] = Field(default=None, examples=["8"])
    subject: Optional[str] = Field(default=None, examples=["가을 나무 그리기"])
    materials: Optional[Union[str, List[str]]] = Field(
        default=None,
        description="사용 재료. 문자열 또는 문자열 배열",
        examples=[["수채화 물감", "크레파스"]],
    )
    progressStatus: Optional[str] = Field(
        default=None,
        description="started | none | completed (그 외 값은 무시)",
        examples=["started"],
    )
    teacherMemo: Optional[str] = None

    @field_validator("studentAge", mode="before")
    @classmethod
    def _age_as_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)


class DailyMessageResponse(BaseModel):
    message: str


router = APIRouter(tags=["daily-message"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/api/generate-daily-message",
    response_model=DailyMessageResponse,
    summary="학부모용 일일 수업 메시지 생성",
    dependencies=[Depends(enforce_rate_limit)],
)
async def create_daily_message(
    body: DailyMessageRequest,
    llm: ChatClient = Depends(get_chat_client),
):
    request_id = str(uuid.uuid4())
    log_event(
        request_id,
        {
            "type": "daily_message_requested",
            "subject": body.subject,
            "student_age": body.studentAge,
            "progress_status": body.progressStatus,
        },
    )

    try:
        message = await generate_daily_message(
            llm,
            student_name=body.studentName,
            student_age=body.studentAge,
            subject=body.subject,
            materials=body.materials,
            progress_status=body.progressStatus,
            teacher_memo=body.teacherMemo,
        )
    except BadRequest as e:
        log_event(request_id, {"type": "daily_message_failed", "error_kind": e.kind})
        return _error(400, INVALID_REQUEST_MESSAGE)
    except UpstreamTimeout as e:
        logger.warning(f"[daily-message] 업스트림 시간 초과 ({e.timeout_ms}ms) request_id={request_id}")
        log_event(request_id, {"type": "daily_message_failed", "error_kind": e.kind})
        return _error(504, TIMEOUT_MESSAGE)
    except UpstreamError as e:
        logger.error(f"[daily-message] OpenAI 오류: {e.status} request_id={request_id}")
        log_event(
            request_id,
            {
                "type": "daily_message_failed",
                "error_kind": e.kind,
                "upstream_status": e.status,
                "upstream_body": e.body,
            },
        )
        return _error(500, UPSTREAM_FAILED_MESSAGE)
    except MalformedUpstreamResponse as e:
        logger.error(f"[daily-message] 응답 형식 오류 request_id={request_id}")
        log_event(
            request_id,
            {"type": "daily_message_failed", "error_kind": e.kind, "upstream_body": e.body},
        )
        return _error(500, MALFORMED_REPLY_MESSAGE)
    except GenerationError as e:
        log_event(request_id, {"type": "daily_message_failed", "error_kind": e.kind})
        return _error(500, SERVER_ERROR_MESSAGE)
    except Exception as e:
        logger.exception(f"[daily-message] 처리 중 예외 request_id={request_id}")
        log_event(
            request_id,
            {"type": "daily_message_failed", "error_kind": "server_error", "error": repr(e)},
        )
        return _error(500, SERVER_ERROR_MESSAGE)

    log_event(request_id, {"type": "daily_message_succeeded", "length": len(message)})
    return DailyMessageResponse(message=message)
