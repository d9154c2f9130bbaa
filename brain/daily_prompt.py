# -*- coding: utf-8 -*-
"""
brain.daily_prompt

학부모용 일일 수업 메시지 프롬프트 조립.

입력: 학생 이름/나이, 수업 주제, 재료, 진행 상태, 선생님 메모
출력: Chat Completions messages (system + user)

프롬프트가 요구하는 5문장/글자 수/이모지 규칙은 모델에 대한 안내일 뿐,
응답에서 검사하지 않는다.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Union

from .age_bands import DAILY_MESSAGE_BANDS, parse_age, select_band
from .personalize import Personalization, personalize
from .prompt_common import banned_phrases_block, persona_line

PROGRESS_TEXT: Dict[str, str] = {
    "started": "- 진행 상태: 오늘 처음 시작함",
    "none": "- 진행 상태: 지난 시간에 이어서 진행 중",
    "completed": "- 진행 상태: 오늘 완성함",
}


def progress_text(status: Optional[str]) -> str:
    """정해진 세 값 외에는 (없는 경우 포함) 빈 문자열."""
    return PROGRESS_TEXT.get(status or "", "")


def materials_text(materials: Union[str, Iterable[str], None]) -> str:
    if not materials:
        return ""
    if isinstance(materials, str):
        return materials.strip()
    return ", ".join(m.strip() for m in materials if m and m.strip())


def build_system_prompt(academy_name: str, person: Personalization) -> str:
    return f"""{persona_line(academy_name)}
학부모님께 보내는 오늘의 수업 메시지를 작성합니다.

# 규칙
- 정확히 5문장
- 친근하고 따뜻한 톤
- 마지막에 이모지 1개
- 150-200자 내외
- 바로 카카오톡에 붙여넣을 수 있는 형태

# 학생 이름 사용 규칙 (필수!)
- 학생은 "{person.noun_form}" 또는 "{person.possessive_form}" 형태로만 부르기
- 성을 붙인 전체 이름은 절대 사용 금지
- 이름은 메시지 전체에서 1회만 사용하고, 나머지는 생략

{banned_phrases_block()}"""


def build_user_prompt(
    *,
    student_age: Optional[str],
    subject: str,
    materials: Union[str, Iterable[str], None] = None,
    progress_status: Optional[str] = None,
    teacher_memo: Optional[str] = None,
    person: Personalization,
) -> str:
    band = select_band(DAILY_MESSAGE_BANDS, parse_age(student_age))
    if student_age is not None and str(student_age).strip():
        age_line = f"- 연령: {str(student_age).strip()}세 ({band.label})"
    else:
        age_line = f"- 연령대: {band.label}"

    lines: List[str] = [
        "학부모에게 보낼 오늘의 수업 메시지를 작성해주세요.",
        "",
        "[학생 정보]",
        f'- 호칭: "{person.noun_form}" (메시지에서는 이 형태로 1회만 사용)',
        age_line,
        "",
        "[수업 정보]",
        f"- 주제: {subject}",
    ]

    mats = materials_text(materials)
    if mats:
        lines.append(f"- 사용 재료: {mats}")

    progress = progress_text(progress_status)
    if progress:
        lines.append(progress)

    if teacher_memo and teacher_memo.strip():
        lines.append(f"- 선생님 메모: {teacher_memo.strip()}")

    lines.extend(
        [
            "",
            f"[연령대 어휘 지침: {band.label}]",
            band.guideline,
            "",
            "[작성 규칙]",
            "1. 정확히 5문장으로 작성",
            "2. 문장 구조:",
            f'   - 1문장: 오늘 활동 소개 ("오늘 {person.noun_form}" 또는 "{person.subject_form}"로 시작)',
            "   - 2문장: 관찰/표현 과정",
            "   - 3문장: 기법/재료 활용 설명",
            "   - 4문장: 아이의 태도/반응",
            "   - 5문장: 마무리 기대 + 이모지 1개",
            "3. 150-200자 내외",
        ]
    )

    return "\n".join(lines)


def build_messages(
    *,
    student_name: str,
    student_age: Optional[str],
    subject: str,
    materials: Union[str, Iterable[str], None] = None,
    progress_status: Optional[str] = None,
    teacher_memo: Optional[str] = None,
    academy_name: str,
) -> List[Dict[str, str]]:
    person = personalize(student_name)
    return [
        {"role": "system", "content": build_system_prompt(academy_name, person)},
        {
            "role": "user",
            "content": build_user_prompt(
                student_age=student_age,
                subject=subject,
                materials=materials,
                progress_status=progress_status,
                teacher_memo=teacher_memo,
                person=person,
            ),
        },
    ]
