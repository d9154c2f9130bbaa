# -*- coding: utf-8 -*-
"""
brain.personalize

학생 이름 → 메시지/리포트에서 부를 호칭 형태.

- first_name(full_name): 3글자 이상이면 성(첫 글자) 제거, 2글자 이하는 그대로
- has_final_consonant(text): 마지막 글자의 받침(종성) 유무
- personalize(full_name): 이름 + 조사(는/이는, 가/이가, 만의/이만의) 묶음
"""

from __future__ import annotations

from dataclasses import dataclass

HANGUL_FIRST = 0xAC00
HANGUL_LAST = 0xD7A3
JONGSEONG_COUNT = 28


@dataclass(frozen=True)
class Personalization:
    first_name: str
    noun_form: str        # 주빈이는 / 준서는
    subject_form: str     # 주빈이가 / 준서가
    possessive_form: str  # 주빈이만의 / 준서만의


def first_name(full_name: str) -> str:
    # 2글자 이름은 성 1 + 이름 1 로 보고 그대로 둔다.
    if len(full_name) >= 3:
        return full_name[1:]
    return full_name


def has_final_consonant(text: str) -> bool:
    """한글 음절 블록 밖의 글자(영문, 숫자, 빈 문자열 등)는 받침 없음으로 본다."""
    if not text:
        return False
    code = ord(text[-1])
    if HANGUL_FIRST <= code <= HANGUL_LAST:
        return (code - HANGUL_FIRST) % JONGSEONG_COUNT != 0
    return False


def personalize(full_name: str) -> Personalization:
    name = first_name(full_name or "")
    jongseong = has_final_consonant(name)

    return Personalization(
        first_name=name,
        noun_form=name + ("이는" if jongseong else "는"),
        subject_form=name + ("이가" if jongseong else "가"),
        possessive_form=name + ("이만의" if jongseong else "만의"),
    )
