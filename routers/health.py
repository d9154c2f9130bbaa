# routers/health.py
from fastapi import APIRouter, Request

from core.config import CHAT_MODEL

router = APIRouter()

@router.get("/", summary="헬스 체크", tags=["health"])
def root():
    return {"message": "그리마 리포트 생성 API 동작 중"}


@router.get("/api/status", summary="AI 연동 설정 상태", tags=["health"])
def status(request: Request):
    # API 키 값 자체는 절대 내려주지 않는다.
    return {
        "openai_configured": request.app.state.llm.configured,
        "model": CHAT_MODEL,
    }
