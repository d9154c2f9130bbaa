"""
리포트 응답 파싱: JSON 구간 추출, 필드별 태그 제거, 오류 종류 구분.
"""
import json

import pytest

from brain.errors import ExtractionFailed, InvalidJson, MissingField
from brain.report_parser import parse_report_reply, strip_field_tag

FULL = {
    "content_form": "[형태] 선이 안정적으로 변했어요.",
    "content_color": "[색채]초록 계열을 다양하게 썼어요.",
    "content_expression": "표현이 풍부해졌어요.",
    "content_strength": "[강점] 관찰력이 좋아요.",
    "content_attitude": "[수업태도] 끝까지 집중했어요.",
    "content_direction": "[지도방향] 명암을 익히는 방향으로 지도하겠습니다.",
}


def test_extracts_object_between_prose():
    reply = "리포트입니다.\n" + json.dumps(FULL, ensure_ascii=False) + "\n감사합니다."
    content = parse_report_reply(reply)
    assert content.content_form == "선이 안정적으로 변했어요."
    assert content.content_color == "초록 계열을 다양하게 썼어요."
    assert content.content_expression == "표현이 풍부해졌어요."
    assert content.content_strength == "관찰력이 좋아요."
    assert content.content_attitude == "끝까지 집중했어요."
    assert content.content_direction == "명암을 익히는 방향으로 지도하겠습니다."


def test_code_fenced_reply():
    reply = "```json\n" + json.dumps(FULL, ensure_ascii=False) + "\n```"
    assert parse_report_reply(reply).content_strength == "관찰력이 좋아요."


def test_tags_are_not_cross_stripped():
    data = dict(FULL, content_form="[색채] 형태 칸에 색채 태그", content_color="[형태] 색채 칸에 형태 태그")
    content = parse_report_reply(json.dumps(data, ensure_ascii=False))
    assert content.content_form == "[색채] 형태 칸에 색채 태그"
    assert content.content_color == "[형태] 색채 칸에 형태 태그"


def test_only_leading_tag_removed():
    assert strip_field_tag("content_form", "본문 [형태] 중간") == "본문 [형태] 중간"
    assert strip_field_tag("content_form", "[형태]  [형태] 두 번") == "[형태] 두 번"


def test_to_dict_has_six_fields():
    content = parse_report_reply(json.dumps(FULL, ensure_ascii=False))
    assert set(content.to_dict()) == set(FULL)


def test_no_braces_is_extraction_failure():
    with pytest.raises(ExtractionFailed):
        parse_report_reply("죄송하지만 리포트를 작성할 수 없습니다.")


def test_greedy_span_with_broken_json_is_invalid_json():
    # 첫 { 부터 마지막 } 까지 자르므로 두 객체가 이어지면 파싱 실패
    reply = '{"a": 1} 그리고 {"b": 2}'
    with pytest.raises(InvalidJson):
        parse_report_reply(reply)


def test_missing_field_names_the_field():
    data = dict(FULL)
    del data["content_attitude"]
    with pytest.raises(MissingField) as exc_info:
        parse_report_reply(json.dumps(data, ensure_ascii=False))
    assert exc_info.value.field == "content_attitude"
    assert exc_info.value.kind == "missing_field"


def test_non_string_field_counts_as_missing():
    data = dict(FULL, content_form=None)
    with pytest.raises(MissingField):
        parse_report_reply(json.dumps(data, ensure_ascii=False))
