# core/logging.py
# -*- coding: utf-8 -*-

import sys
import json
import logging
import threading
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from . import config

# ------------------------------------------------
# 터미널 출력용 logger
# ------------------------------------------------
logger = logging.getLogger("grima_report")
logger.setLevel(logging.DEBUG)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


# ------------------------------------------------
# 생성 요청 이벤트 로그 (하루 한 파일, JSONL)
# ------------------------------------------------
_write_lock = threading.Lock()


def events_path(day: Optional[date] = None) -> Path:
    """UTC 날짜별 이벤트 파일: LOG_DIR/events-YYYYMMDD.jsonl"""
    day = day or datetime.now(timezone.utc).date()
    return config.LOG_DIR / f"events-{day:%Y%m%d}.jsonl"


def log_event(request_id: str, payload: Dict[str, Any]) -> None:
    """
    사후 분석용 JSONL 로그 기록.
    같은 요청(request_id)의 요청/실패/성공 이벤트가 그날 파일에 한 줄씩 쌓인다.
    업스트림 원문 오류 등 클라이언트에 내려주지 않는 정보는 여기에만 남긴다.

    파일 기록 실패는 응답을 바꾸지 않는다. 터미널 logger 에만 남긴다.
    """
    now = datetime.now(timezone.utc)
    record = {
        "timestamp": now.isoformat(),
        "request_id": request_id,
        **payload,
    }
    line = json.dumps(record, ensure_ascii=False, default=str) + "\n"

    try:
        with _write_lock, events_path(now.date()).open("a", encoding="utf-8") as f:
            f.write(line)
    except OSError as e:
        logger.error(f"[event-log] 기록 실패 request_id={request_id} type={payload.get('type')}: {e}")

