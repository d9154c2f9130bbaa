# app_fastapi.py
# -*- coding: utf-8 -*-

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from brain.llm_client import ChatClient
from core.cache import TTLCache
from core.config import CACHE_TTL_SECONDS, RATE_LIMIT, RATE_WINDOW_SECONDS
from core.logging import logger
from core.rate_limit import RateLimiter
from routers import daily_message, health, report
from routers.deps import RATE_LIMITED_MESSAGE, RateLimited

# ============================================================
# 프로세스 단위 리소스 (캐시 / 요청 제한 / OpenAI 클라이언트)
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    cache = TTLCache(default_ttl=CACHE_TTL_SECONDS)
    app.state.cache = cache
    app.state.rate_limiter = RateLimiter(cache, RATE_LIMIT, RATE_WINDOW_SECONDS)
    app.state.llm = ChatClient()
    logger.info("✅ 리포트 생성 API 시작")
    try:
        yield
    finally:
        await app.state.llm.aclose()
        cache.invalidate()
        logger.info("리포트 생성 API 종료")


# ============================================================
# FastAPI 앱 기본 세팅 (Swagger 설명 포함)
# ============================================================

app = FastAPI(
    title="그리마 미술학원 AI 문안 생성 API",
    description="""
미술학원 선생님용 **학부모 커뮤니케이션 문안 생성** 백엔드 API입니다.

- 일일 수업 메시지: 학생 이름/나이/주제/재료/진행 상태로 카카오톡용 5문장 메시지 생성
- 성장 리포트: 교사 메모와 이전/최근 작품 이미지로 6개 항목(형태·색채·표현·강점·수업태도·지도방향) 초안 생성

생성된 문안은 선생님이 직접 수정한 뒤 발송/출력합니다.
""",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: 개발 단계에서는 * 허용, 배포 시에는 도메인 제한 권장
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(daily_message.router)
app.include_router(report.router)


# ============================================================
# 공통 예외 → {"error": "..."} 응답
# ============================================================

# 본문 자체가 깨진 요청(JSON 아님, 타입 불일치)에 대한 경로별 응답
_INVALID_BODY_RESPONSES = {
    "/api/generate-daily-message": (400, daily_message.INVALID_REQUEST_MESSAGE),
    "/api/generate-report": (500, report.SERVER_ERROR_MESSAGE),
}


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"요청 본문 검증 실패: {request.url.path} {exc.errors()}")
    status_code, message = _INVALID_BODY_RESPONSES.get(
        request.url.path, (400, daily_message.INVALID_REQUEST_MESSAGE)
    )
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RateLimited)
async def rate_limited_handler(request: Request, exc: RateLimited):
    return JSONResponse(status_code=429, content={"error": RATE_LIMITED_MESSAGE})


# ============================================================
# uvicorn 실행용 엔트리포인트
# ============================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app_fastapi:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
