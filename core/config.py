# core/config.py
# -*- coding: utf-8 -*-

import os
from pathlib import Path

from dotenv import load_dotenv

# .env 로드 (가장 먼저 실행)
load_dotenv()

# --------------------------------
# 경로 / 로그 디렉터리 설정
# --------------------------------

# 프로젝트 루트 디렉토리
BASE_DIR = Path(__file__).resolve().parent.parent

# 로그 디렉터리 (요청 단위 JSONL)
LOG_DIR = Path(os.getenv("LOG_DIR") or BASE_DIR / "data" / "logs")
LOG_DIR.mkdir(parents=True, exist_ok=True)

# --------------------------------
# OpenAI (Chat Completions)
# --------------------------------

# 서버 전용 비밀키. 클라이언트 응답에는 절대 포함하지 않는다.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

CHAT_MODEL = os.getenv("CHAT_MODEL", "gpt-4o-mini")

# 일일 메시지 / 성장 리포트 생성 파라미터
DAILY_MESSAGE_TEMPERATURE = 0.7
DAILY_MESSAGE_MAX_TOKENS = 500
REPORT_TEMPERATURE = 0.75
REPORT_MAX_TOKENS = 2000

# 업스트림 호출 제한 시간 (ms)
DAILY_MESSAGE_TIMEOUT_MS = int(os.getenv("DAILY_MESSAGE_TIMEOUT_MS", "20000"))
REPORT_TIMEOUT_MS = int(os.getenv("REPORT_TIMEOUT_MS", "60000"))

# --------------------------------
# 학원 / 프롬프트 설정
# --------------------------------

ACADEMY_NAME = os.getenv("ACADEMY_NAME", "그리마 미술학원")

# --------------------------------
# 요청 제한 / 캐시
# --------------------------------

RATE_LIMIT = int(os.getenv("RATE_LIMIT", "50"))
RATE_WINDOW_SECONDS = float(os.getenv("RATE_WINDOW_SECONDS", "60"))

CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", "30"))
