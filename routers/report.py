# routers/report.py
from typing import Optional, Union
import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from brain import generate_report
from brain.errors import ExtractionFailed, GenerationError, ReportParseError, UpstreamError, UpstreamTimeout
from brain.llm_client import ChatClient
from core.logging import log_event, logger
from routers.deps import enforce_rate_limit, get_chat_client

UPSTREAM_FAILED_MESSAGE = "AI 생성 실패"
EXTRACTION_FAILED_MESSAGE = "JSON 파싱 실패"
SERVER_ERROR_MESSAGE = "서버 오류"
TIMEOUT_MESSAGE = "AI 응답 시간이 초과되었습니다. 다시 시도해주세요."


class ReportRequest(BaseModel):
    """
    성장 리포트 생성 요청.
    - imageBeforeBase64 / imageAfterBase64: data URL (클라이언트에서 압축 후 전달)
      두 장이 모두 있을 때만 이미지 비교 분석을 요청한다.
    """
    studentName: Optional[str] = Field(default=None, examples=["김주빈"])
    studentAge: Optional[Union[int, str]] = Field(default=None, examples=[9])
    className: Optional[str] = Field(default=None, examples=["화목 4시반"])
    teacherMemo: Optional[str] = Field(
        default=None,
        examples=["[향상된 부분] 형태/구도, 창의성\n[학생 특성] 초록색을 좋아함"],
    )
    parentRequest: Optional[str] = None
    imageBeforeBase64: Optional[str] = None
    imageAfterBase64: Optional[str] = None


class ReportResponse(BaseModel):
    content_form: str
    content_color: str
    content_expression: str
    content_strength: str
    content_attitude: str
    content_direction: str


router = APIRouter(tags=["report"])


@router.post(
    "/api/generate-report",
    response_model=ReportResponse,
    summary="성장 리포트 초안 생성 (이전/최근 작품 비교)",
    dependencies=[Depends(enforce_rate_limit)],
)
async def create_report(
    body: ReportRequest,
    llm: ChatClient = Depends(get_chat_client),
):
    request_id = str(uuid.uuid4())
    with_images = bool(body.imageBeforeBase64) and bool(body.imageAfterBase64)
    log_event(
        request_id,
        {
            "type": "report_requested",
            "class_name": body.className,
            "student_age": body.studentAge,
            "with_images": with_images,
            "has_parent_request": bool(body.parentRequest),
        },
    )

    try:
        content = await generate_report(
            llm,
            student_name=body.studentName,
            student_age=body.studentAge,
            class_name=body.className,
            teacher_memo=body.teacherMemo,
            parent_request=body.parentRequest,
            image_before=body.imageBeforeBase64,
            image_after=body.imageAfterBase64,
        )
    except UpstreamTimeout as e:
        logger.warning(f"[report] 업스트림 시간 초과 ({e.timeout_ms}ms) request_id={request_id}")
        log_event(request_id, {"type": "report_failed", "error_kind": e.kind})
        return JSONResponse(status_code=504, content={"error": TIMEOUT_MESSAGE})
    except UpstreamError as e:
        # 업스트림 원문 오류는 로그에만 남기고, 클라이언트에는 상태 코드만 전달
        logger.error(f"[report] OpenAI 오류: {e.status} request_id={request_id}")
        log_event(
            request_id,
            {
                "type": "report_failed",
                "error_kind": e.kind,
                "upstream_status": e.status,
                "upstream_body": e.body,
            },
        )
        return JSONResponse(
            status_code=500,
            content={"error": UPSTREAM_FAILED_MESSAGE, "details": {"status": e.status}},
        )
    except ReportParseError as e:
        logger.error(f"[report] 응답 파싱 실패({e.kind}): {e} request_id={request_id}")
        log_event(
            request_id,
            {
                "type": "report_failed",
                "error_kind": e.kind,
                "field": getattr(e, "field", None),
                "reply": e.raw[:2000],
            },
        )
        message = EXTRACTION_FAILED_MESSAGE if isinstance(e, ExtractionFailed) else SERVER_ERROR_MESSAGE
        return JSONResponse(status_code=500, content={"error": message})
    except GenerationError as e:
        logger.error(f"[report] 생성 실패({e.kind}) request_id={request_id}")
        log_event(
            request_id,
            {"type": "report_failed", "error_kind": e.kind, "upstream_body": getattr(e, "body", "")},
        )
        return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})
    except Exception as e:
        logger.exception(f"[report] 처리 중 예외 request_id={request_id}")
        log_event(request_id, {"type": "report_failed", "error_kind": "server_error", "error": repr(e)})
        return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})

    log_event(request_id, {"type": "report_succeeded"})
    return ReportResponse(**content.to_dict())
