from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from sfumail.email_templates import (
    get_alert_body,
    get_alert_subject,
    get_current_date_time,
    get_join_room_body,
    get_join_room_subject,
    get_room_join_url,
    get_widget_room_body,
    get_widget_room_subject,
)
from sfumail.logger import TzOptions

TIMESTAMP = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}, \d{1,2}:\d{2}:\d{2} (AM|PM):\d{3}$")
NOW = datetime(2026, 10, 18, 15, 4, 5, 7000)


def test_join_subject(brand):
    assert get_join_room_subject({"room_id": "R1"}, brand) == "TestSFU - 新用户加入房间 R1"


def test_widget_subject(brand):
    assert (
        get_widget_room_subject({"room_id": "R1"}, brand)
        == "TestSFU 小配件 - 新用户请在房间等待专家帮助 R1"
    )


def test_alert_subject_default_and_override(brand):
    assert get_alert_subject({"body": "x"}, brand) == "TestSFU - Alert"
    assert get_alert_subject({"body": "x", "subject": ""}, brand) == "TestSFU - Alert"
    assert get_alert_subject({"body": "x", "subject": "Disk"}, brand) == "Disk"


def test_join_body_fields(brand, join_data):
    body = get_join_room_body(join_data, brand, now=NOW)

    assert "<h1>新用户加入房间</h1>" in body
    assert "tr:nth-child(even)" in body
    for label in ("用户", "操作系统", "浏览器", "房间", "时间"):
        assert f"<td>{label}</td>" in body
    assert "<td>Ann</td>" in body
    assert "<td>Linux</td>" in body
    assert "<td>Firefox</td>" in body
    assert '<a href="https://example.com/join/R">' in body
    assert "10/18/2026, 3:04:05 PM:007" in body


def test_widget_body_matches_join_body(brand, join_data):
    assert get_widget_room_body(join_data, brand, now=NOW) == get_join_room_body(
        join_data, brand, now=NOW
    )


@pytest.mark.parametrize(
    "domain, expected",
    [
        ("localhost", "https://localhost:8080/join/R"),
        ("127.0.0.1", "https://127.0.0.1:8080/join/R"),
        ("localhost.example.com", "https://localhost.example.com:8080/join/R"),
        ("example.com", "https://example.com/join/R"),
        ("meet.example.org", "https://meet.example.org/join/R"),
    ],
)
def test_local_domain_rewrite(brand, domain, expected):
    assert get_room_join_url(domain, "R", brand) == expected


def test_join_body_on_localhost_embeds_port(brand, join_data):
    body = get_join_room_body({**join_data, "domain": "localhost"}, brand, now=NOW)
    assert "https://localhost:8080/join/R" in body


def test_payload_fields_are_escaped(brand, join_data):
    hostile = {**join_data, "peer_name": "<script>alert(1)</script>", "browser": 'a"b'}
    body = get_join_room_body(hostile, brand, now=NOW)

    assert "<script>" not in body
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in body
    assert "a&quot;b" in body


def test_alert_body(brand):
    body = get_alert_body({"body": "Disk full"}, brand, now=NOW)

    assert "<h1>🚨 警报</h1>" in body
    assert "<td>⚠️ 通知</td>" in body
    assert "<td>Disk full</td>" in body
    assert "<td>🕒 时间</td>" in body


def test_missing_field_raises_key_error(brand):
    with pytest.raises(KeyError):
        get_join_room_body({"room_id": "R"}, brand, now=NOW)
    with pytest.raises(KeyError):
        get_alert_body({}, brand, now=NOW)


def test_timestamp_shape_now():
    assert TIMESTAMP.match(get_current_date_time(TzOptions("UTC")))


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2026, 1, 2, 0, 0, 0, 0), "1/2/2026, 12:00:00 AM:000"),
        (datetime(2026, 1, 2, 12, 30, 9, 45000), "1/2/2026, 12:30:09 PM:045"),
        (datetime(2026, 12, 31, 23, 59, 59, 999999), "12/31/2026, 11:59:59 PM:999"),
    ],
)
def test_timestamp_format(now, expected):
    assert get_current_date_time(TzOptions("UTC"), now=now) == expected


def test_timestamp_uses_logger_time_zone():
    utc_morning = datetime(2026, 10, 18, 4, 0, 0, tzinfo=ZoneInfo("UTC"))
    assert (
        get_current_date_time(TzOptions("Asia/Shanghai"), now=utc_morning)
        == "10/18/2026, 12:00:00 PM:000"
    )


def test_unknown_time_zone_falls_back_to_utc():
    assert TzOptions("Mars/Olympus").tzinfo.utcoffset(None).total_seconds() == 0
