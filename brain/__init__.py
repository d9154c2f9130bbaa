# -*- coding: utf-8 -*-
"""
brain 패키지

미술학원 학부모 커뮤니케이션용 "AI 문안 생성 엔진"의 핵심 로직 모음입니다.

외부(예: routers/)에서는 보통 아래 함수만 직접 사용합니다.

- generate_daily_message(llm, ...):
    학생 이름/나이/수업 주제로 학부모용 일일 수업 메시지(5문장)를 생성합니다.
- generate_report(llm, ...):
    교사 메모와 (선택) 이전/최근 작품 이미지로
    6개 항목 성장 리포트(JSON)를 생성합니다.

세부 로직은 다음 모듈로 나뉘어 있습니다.

- personalize    : 성 제거, 받침 판별, 조사(는/이는, 가/이가, 만의/이만의) 선택
- age_bands      : 나이 → 연령대 라벨/어휘 지침 (일일 메시지용, 리포트용 별도 표)
- prompt_common  : 페르소나, 금지 표현
- daily_prompt   : 일일 메시지 프롬프트 조립
- report_prompt  : 리포트 프롬프트 조립 (이미지 멀티파트 포함)
- llm_client     : OpenAI Chat Completions 호출 래퍼 (제한 시간/취소)
- report_parser  : 리포트 응답 JSON 추출/정리
- errors         : 오류 분류
"""

from .pipeline import generate_daily_message, generate_report

__all__ = ["generate_daily_message", "generate_report"]
