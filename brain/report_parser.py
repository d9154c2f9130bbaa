# -*- coding: utf-8 -*-
"""
brain.report_parser

모델 응답 텍스트 → ReportContent.

1) 첫 '{' 부터 마지막 '}' 까지를 JSON 후보로 잘라낸다 (없으면 ExtractionFailed)
2) json.loads (실패하면 InvalidJson)
3) 6개 필드가 모두 있어야 함 (없으면 MissingField)
4) 각 필드 앞에 자기 라벨 태그([형태] 등)가 붙어 있으면 제거
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .errors import ExtractionFailed, InvalidJson, MissingField
from .report_prompt import REPORT_FIELDS

_JSON_SPAN = re.compile(r"\{[\s\S]*\}")

_TAG_PATTERNS = {
    field: re.compile(r"^\[" + re.escape(label) + r"\]\s*", re.IGNORECASE)
    for field, label in REPORT_FIELDS
}


@dataclass(frozen=True)
class ReportContent:
    content_form: str
    content_color: str
    content_expression: str
    content_strength: str
    content_attitude: str
    content_direction: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def extract_json_span(text: str) -> str:
    m = _JSON_SPAN.search(text or "")
    if not m:
        raise ExtractionFailed("no JSON object in reply", raw=text or "")
    return m.group(0)


def strip_field_tag(field: str, value: str) -> str:
    return _TAG_PATTERNS[field].sub("", value, count=1)


def parse_report_reply(text: str) -> ReportContent:
    span = extract_json_span(text)

    try:
        data: Any = json.loads(span)
    except json.JSONDecodeError as e:
        raise InvalidJson(f"reply JSON could not be parsed: {e}", raw=span) from e

    if not isinstance(data, dict):
        raise InvalidJson("reply JSON is not an object", raw=span)

    cleaned: Dict[str, str] = {}
    for field, _label in REPORT_FIELDS:
        value = data.get(field)
        if not isinstance(value, str):
            raise MissingField(field, raw=span)
        cleaned[field] = strip_field_tag(field, value)

    return ReportContent(**cleaned)
