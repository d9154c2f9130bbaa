# -*- coding: utf-8 -*-
"""
brain.prompt_common

두 파이프라인(일일 메시지 / 성장 리포트)이 함께 쓰는 프롬프트 조각.
"""

from typing import Tuple

# 평가·비교·과장·추측 표현 (모델이 쓰지 않아야 할 말)
BANNED_PHRASES: Tuple[str, ...] = (
    "잘했어요",
    "못했어요",
    "훌륭해요",
    "대단해요",
    "다른 친구보다",
    "또래보다",
    "너무",
    "정말",
    "완벽해요",
    "~같아요",
    "~듯해요",
    "~것 같습니다",
)


def persona_line(academy_name: str) -> str:
    return f"당신은 {academy_name}의 따뜻하고 친근한 담당 선생님입니다."


def banned_phrases_block() -> str:
    quoted = ", ".join(f'"{p}"' for p in BANNED_PHRASES)
    return f"# 절대 금지 표현\n- {quoted}"
