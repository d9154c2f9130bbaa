"""
연령대 판별: 숫자 파싱(parseInt 규칙)과 두 표의 구간/문구.
"""
import pytest

from brain.age_bands import DAILY_MESSAGE_BANDS, REPORT_BANDS, parse_age, select_band


@pytest.mark.parametrize("raw,expected", [
    ("8", 8),
    (" 12", 12),
    ("9세", 9),
    ("7.9", 7),
    ("-3", -3),
    (10, 10),
    ("열살", None),
    ("", None),
    (None, None),
    ("８", None),
    ("٣", None),
    ("9" * 5000, 999999999),
    ("-" + "9" * 5000, -999999999),
])
def test_parse_age_reads_leading_integer(raw, expected):
    assert parse_age(raw) == expected


@pytest.mark.parametrize("bands", [DAILY_MESSAGE_BANDS, REPORT_BANDS])
@pytest.mark.parametrize("age,key", [
    (7, "young"),
    (8, "middle"),
    (10, "middle"),
    (11, "upper"),
    (999, "upper"),
    (None, "upper"),  # 숫자가 아니면 어떤 비교도 참이 아니므로 마지막 구간
    (-1, "young"),
])
def test_select_band_is_total(bands, age, key):
    assert select_band(bands, age).key == key


def test_non_numeric_age_falls_into_upper_band():
    assert select_band(DAILY_MESSAGE_BANDS, parse_age("abc")).label == "11세 이상 (고학년)"


def test_tables_keep_their_own_labels():
    assert [b.label for b in DAILY_MESSAGE_BANDS] == [
        "7세 이하 (유치/저학년)",
        "8-10세 (중학년)",
        "11세 이상 (고학년)",
    ]
    assert [b.label for b in REPORT_BANDS] == [
        "유치부(5-7세)",
        "초등 저학년(8-10세)",
        "초등 고학년(11세 이상)",
    ]
    # 같은 구간이라도 지침 문구는 공유하지 않는다.
    for daily, rep in zip(DAILY_MESSAGE_BANDS, REPORT_BANDS):
        assert daily.guideline != rep.guideline


@pytest.mark.parametrize("bands", [DAILY_MESSAGE_BANDS, REPORT_BANDS])
@pytest.mark.parametrize("raw,key", [
    ("9" * 5000, "upper"),
    ("8" + "0" * 4999, "upper"),
    ("８", "upper"),  # 전각 숫자는 숫자가 아님
])
def test_long_or_non_ascii_ages_still_get_a_band(bands, raw, key):
    assert select_band(bands, parse_age(raw)).key == key
