# -*- coding: utf-8 -*-
"""
brain.age_bands

나이 → 연령대(라벨 + 어휘/톤 지침).

일일 메시지와 성장 리포트는 서로 다른 표를 쓴다.
두 표의 문구는 프롬프트에 그대로 들어가므로 합치지 않는다.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class AgeBand:
    key: str
    upper: Optional[int]  # 이 나이 이하. None 이면 나머지 전부
    label: str
    guideline: str


# ------------------------------------------------------------
# 일일 메시지용
# ------------------------------------------------------------

DAILY_MESSAGE_BANDS: Tuple[AgeBand, ...] = (
    AgeBand(
        key="young",
        upper=7,
        label="7세 이하 (유치/저학년)",
        guideline="""- 쉬운 말만 사용: 색깔, 모양, 크기, 손으로 만져보기
- 과정 묘사 중심: 조심조심, 용기 내어, 새로운 색을 골라보며
- 금지: 명암, 구도, 원근감, 질감 표현 등 전문 용어
- 톤: 따뜻하고 친근하게, 짧은 문장""",
    ),
    AgeBand(
        key="middle",
        upper=10,
        label="8-10세 (중학년)",
        guideline="""- 사용 가능 용어: 색 조합, 선의 안정감, 비례, 화면 구성
- "집중/시도/확장" 중심 표현
- 금지: 레이어링, 빛의 온도감 등 고급 용어
- 톤: 친근하되 기법을 한 가지 정도 설명""",
    ),
    AgeBand(
        key="upper",
        upper=None,
        label="11세 이상 (고학년)",
        guideline="""- 사용 가능 용어: 명암 대비, 빛 방향, 원근감, 구도, 질감, 레이어링
- 의도와 해석이 드러나는 표현 중심
- 기법 설명 포함, 다음 단계 과제를 한 문장으로 제시""",
    ),
)


# ------------------------------------------------------------
# 성장 리포트용
# ------------------------------------------------------------

REPORT_BANDS: Tuple[AgeBand, ...] = (
    AgeBand(
        key="young",
        upper=7,
        label="유치부(5-7세)",
        guideline="""
- 기초 용어만 사용: 비례, 형태, 구성, 색감
- 발달 언어 필수 포함: 손의 힘, 시도, 용기, 호기심, 조심조심, 색 선택 과정
- 물감 사용 발달 묘사 필수 (물 양 조절, 번짐, 맑게 칠하기 등)
- 짧고 직관적인 문장
- 금지: 입체감, 명도 대비, 조형성 등 고급 용어""",
    ),
    AgeBand(
        key="middle",
        upper=10,
        label="초등 저학년(8-10세)",
        guideline="""
- 중급 용어 사용 가능: 선의 안정감, 색 조합, 화면 흐름, 비례
- "집중/시도/확장" 중심 표현
- 과정 중심 묘사: 선의 안정감, 빈틈 없는 채색
- 금지: 레이어링, 빛의 온도감 등 고급 용어""",
    ),
    AgeBand(
        key="upper",
        upper=None,
        label="초등 고학년(11세 이상)",
        guideline="""
- 고급 용어 사용 가능: 명암 대비, 빛 방향, 원근감, 구도, 질감, 레이어링
- 사고력/해석력/의도 있는 표현 중심
- 기술적·단계적 발전 묘사 필수
- 구체적인 지도 방향 제시 필수""",
    ),
)


# 전각·아랍 숫자는 숫자로 보지 않는다.
_LEADING_INT = re.compile(r"^\s*([+-]?)([0-9]+)")

# 이보다 긴 숫자열은 같은 부호의 큰 값으로 자른다 (int() 자릿수 제한 회피).
_MAX_AGE_DIGITS = 9


def parse_age(value: Any) -> Optional[int]:
    """
    앞쪽 정수 부분만 읽는다. "8", " 8세", "8.5" → 8
    숫자로 시작하지 않으면 None (숫자 아님).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value

    m = _LEADING_INT.match(str(value))
    if not m:
        return None
    sign, digits = m.groups()
    if len(digits) > _MAX_AGE_DIGITS:
        digits = "9" * _MAX_AGE_DIGITS
    return int(sign + digits)


def select_band(bands: Tuple[AgeBand, ...], age: Optional[int]) -> AgeBand:
    """
    위에서부터 upper 이하인 첫 구간.
    age 가 None 이면 어떤 비교도 참이 아니므로 마지막 구간으로 떨어진다.
    """
    for band in bands:
        if band.upper is None:
            return band
        if age is not None and age <= band.upper:
            return band
    return bands[-1]
