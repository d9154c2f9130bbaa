# -*- coding: utf-8 -*-
"""
brain.report_prompt

성장 리포트(이전/최근 작품 비교) 프롬프트 조립.

- 시스템 프롬프트: 페르소나, 말투, 금지 표현, 연령대 지침, 지도 방향 규칙
- 사용자 프롬프트: 학생 정보, 교사 메모, (있으면) 학부모 요청, JSON 출력 계약
- 이미지 두 장이 모두 있으면 text + image_url(low) 2개로 된 멀티파트 메시지,
  하나라도 없으면 텍스트 전용 메시지
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .age_bands import REPORT_BANDS, AgeBand, parse_age, select_band
from .personalize import Personalization, personalize
from .prompt_common import banned_phrases_block, persona_line

# 응답 JSON 필드 → 혹시 붙어 오는 태그 라벨
REPORT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("content_form", "형태"),
    ("content_color", "색채"),
    ("content_expression", "표현"),
    ("content_strength", "강점"),
    ("content_attitude", "수업태도"),
    ("content_direction", "지도방향"),
)

IMAGE_DETAIL = "low"


def build_system_prompt(
    academy_name: str,
    person: Personalization,
    band: AgeBand,
    with_images: bool,
) -> str:
    sections: List[str] = [
        f"{persona_line(academy_name)}\n학부모님께 보내는 성장 리포트를 작성합니다.",
    ]

    if with_images:
        sections.append(
            """# 중요: 이미지 분석
- 첨부된 두 이미지는 학생의 [이전 작품]과 [최근 작품]입니다.
- 두 작품을 직접 비교하여 형태, 색채, 표현의 변화와 성장을 구체적으로 분석해주세요.
- 이미지에서 관찰되는 구체적인 요소(색상, 형태, 구도, 디테일 등)를 언급해주세요."""
        )

    sections.extend(
        [
            f"""# 말투 및 톤
- 친근하고 따뜻한 선생님 말투
- 학생 이름 사용 규칙 (필수!):
  * "{person.noun_form}" 또는 "{person.subject_form}" 형태로 자연스럽게 사용
  * "{person.first_name}의 작품" 형태도 가능
  * 중요: 각 섹션에서 이름은 1회 이하로만 사용하고, 나머지는 생략하거나 "작품에서", "이번 작품은", "표현이" 등으로 대체
- 성을 붙인 전체 이름(예: "OOO 학생은") 형태 사용 금지
- 문장 끝: ~했어요, ~보여요, ~있어요, ~좋았어요, ~느껴졌어요
- 마치 학부모님과 대화하듯 자연스럽게""",
            """# 문장 분량 (필수!)
- 각 섹션 반드시 3문장 이상 작성 (강점은 2-3문장)
- 한 문장은 30~50자 정도
- 관찰한 구체적인 내용과 교사 메모 내용 모두 반영""",
            """# 핵심 원칙: Warm Logic
- 평가가 아닌 관찰 중심
- 결과보다 과정 중심 (시도·탐색·변화 묘사)
- 감정 추정 금지, 행동 기반 감정 묘사""",
            banned_phrases_block(),
            f"# 현재 학생 연령대: {band.label}\n{band.guideline}",
            """# 지도 방향 작성 규칙
- 반드시 "~방향으로 지도하겠습니다", "~할 수 있도록 도와드리겠습니다" 형태로 종결
- 관찰 내용을 바탕으로 구체적인 다음 단계 제시""",
        ]
    )

    return "\n\n".join(sections)


def _output_contract(first_name: str, with_images: bool) -> str:
    compare = "이전 작품과 최근 작품을 비교하여 " if with_images else ""
    observed = "이미지에서 관찰한 내용으로" if with_images else "교사 메모를 바탕으로"

    return f"""## 출력 형식 (JSON)
반드시 아래 JSON 형식으로만 응답하세요. 각 항목은 반드시 3문장 이상 작성하세요. (content_strength, content_attitude 는 2-3문장 가능)
관찰한 구체적인 내용과 학생 특성을 반영해주세요.
절대로 [형태], [색채] 등의 태그를 붙이지 마세요. 바로 내용으로 시작하세요.

{{
  "content_form": "{compare}{first_name}의 형태 표현 변화를 3문장 이상 작성. 선의 안정감, 비례, 크기, 구도 변화 등을 {observed} 구체적으로. [향상된 부분]에 형태/구도가 있다면 특히 강조.",
  "content_color": "{compare}{first_name}의 색채 표현 변화를 3문장 이상 작성. 색 선택, 배색, 채색 방식의 변화 등을 {observed} 구체적으로. [향상된 부분]에 색채 활용이 있다면 특히 강조.",
  "content_expression": "{compare}{first_name}의 표현력 변화를 3문장 이상 작성. 주제 표현, 디테일, 창의성, 이야기 구성의 변화 등. [향상된 부분]에 표현 기술이나 창의성이 있다면 특히 강조.",
  "content_strength": "{first_name}의 강점 2-3문장. [학생 특성]을 바탕으로 이 학생만의 고유한 미술적 강점과 성향을 구체적으로 서술.",
  "content_attitude": "{first_name}의 수업 태도와 감성 2-3문장. [향상된 부분]에 집중력이나 자신감이 있다면 반영. [학생 특성]의 행동적 특징도 포함.",
  "content_direction": "3문장 이상. [학생 특성]을 바탕으로 {first_name}에게 맞춤화된 구체적인 지도 계획. 반드시 '~방향으로 지도하겠습니다', '~할 수 있도록 도와드리겠습니다' 형태로 작성."
}}"""


def build_user_prompt(
    *,
    student_age: Any,
    class_name: Optional[str],
    teacher_memo: Optional[str],
    parent_request: Optional[str],
    person: Personalization,
    with_images: bool,
) -> str:
    intro = (
        "아래 정보와 첨부된 이미지를 바탕으로 학부모님께 보내는 따뜻한 성장 리포트를 작성해주세요."
        if with_images
        else "아래 정보를 바탕으로 학부모님께 보내는 따뜻한 성장 리포트를 작성해주세요."
    )

    sections: List[str] = [
        intro,
        f"""## 학생 정보
- 리포트에서 사용할 이름: "{person.noun_form}" 또는 "{person.subject_form}" 또는 "{person.first_name}의"
- 나이: {student_age}세
- 반: {class_name}""",
    ]

    if with_images:
        sections.append(
            """## 첨부 이미지
- 첫 번째 이미지: 이전 작품
- 두 번째 이미지: 최근 작품
→ 두 작품을 비교하여 성장과 변화를 구체적으로 분석해주세요."""
        )

    sections.append(
        f"""## 교사 관찰 메모
{teacher_memo}

### 중요: 교사 관찰 메모 활용 방법
1. [향상된 부분]에 체크된 항목들은 이번 기간 동안 학생이 특히 성장한 영역입니다.
   - 해당 영역을 리포트에서 더 구체적이고 긍정적으로 강조해주세요.
   - 예: "형태/구도"가 체크되었다면 content_form에서 성장을 더 상세히 묘사
   - 예: "창의성"이 체크되었다면 content_expression에서 독창적 표현을 강조

2. [학생 특성]은 이 학생만의 고유한 특징입니다.
   - 이 내용을 리포트 전체에 자연스럽게 녹여 개인화된 표현을 해주세요.
   - 학생의 선호, 습관, 성향을 반영한 맞춤형 문장을 작성해주세요.
   - 예: "초록색을 좋아함" → "초록색 계열을 다양하게 활용하며..."
   - 예: "디테일에 집중함" → "작은 부분까지 세심하게 표현하려는 모습이...\""""
    )

    if parent_request and parent_request.strip():
        sections.append(
            f"""## 학부모 요청사항
{parent_request.strip()}
(이 내용을 [표현] 또는 [지도방향]에 자연스럽게 반영해주세요)"""
        )

    sections.append(_output_contract(person.first_name, with_images))

    return "\n\n".join(sections)


def has_image_pair(before: Optional[str], after: Optional[str]) -> bool:
    return bool(before) and bool(after)


def build_messages(
    *,
    student_name: Optional[str],
    student_age: Any,
    class_name: Optional[str],
    teacher_memo: Optional[str],
    parent_request: Optional[str] = None,
    image_before: Optional[str] = None,
    image_after: Optional[str] = None,
    academy_name: str,
) -> List[Dict[str, Any]]:
    person = personalize(student_name or "")
    band = select_band(REPORT_BANDS, parse_age(student_age))
    with_images = has_image_pair(image_before, image_after)

    user_prompt = build_user_prompt(
        student_age=student_age,
        class_name=class_name,
        teacher_memo=teacher_memo,
        parent_request=parent_request,
        person=person,
        with_images=with_images,
    )

    messages: List[Dict[str, Any]] = [
        {
            "role": "system",
            "content": build_system_prompt(academy_name, person, band, with_images),
        }
    ]

    if with_images:
        messages.append(
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": user_prompt},
                    {
                        "type": "image_url",
                        "image_url": {"url": image_before, "detail": IMAGE_DETAIL},
                    },
                    {
                        "type": "image_url",
                        "image_url": {"url": image_after, "detail": IMAGE_DETAIL},
                    },
                ],
            }
        )
    else:
        messages.append({"role": "user", "content": user_prompt})

    return messages
