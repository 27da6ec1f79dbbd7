"""
HTML Email Templates
Subjects and bodies for room join, widget and alert emails
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from .config import BrandConfig
from .logger import TzOptions, get_tz_options
from .utils.sanitization import sanitize_fields, sanitize_string

LOCAL_DOMAINS = ("localhost", "127.0.0.1")

ROOM_FIELDS = ["peer_name", "room_id", "domain", "os", "browser"]

TABLE_STYLE = """
        <style>
            table {
                font-family: arial, sans-serif;
                border-collapse: collapse;
                width: 100%;
            }
            td {
                border: 1px solid #dddddd;
                text-align: left;
                padding: 8px;
            }
            tr:nth-child(even) {
                background-color: #dddddd;
            }
        </style>"""


def _brand(brand: Optional[BrandConfig]) -> BrandConfig:
    return brand or BrandConfig.from_env()


def get_current_date_time(
    tz_options: Optional[TzOptions] = None, now: Optional[datetime] = None
) -> str:
    """
    Timestamp as en-US locale text plus zero-padded milliseconds,
    e.g. "10/18/2026, 3:04:05 PM:007"
    """
    tz_options = tz_options or get_tz_options()
    if now is None:
        now = datetime.now(tz_options.tzinfo)
    elif now.tzinfo is not None:
        now = now.astimezone(tz_options.tzinfo)

    hour = now.hour % 12 or 12
    meridiem = "AM" if now.hour < 12 else "PM"
    locale_time = (
        f"{now.month}/{now.day}/{now.year}, "
        f"{hour}:{now.minute:02d}:{now.second:02d} {meridiem}"
    )
    return f"{locale_time}:{now.microsecond // 1000:03d}"


def get_room_join_url(domain: str, room_id: str, brand: Optional[BrandConfig] = None) -> str:
    """Join link; loopback-looking domains get the server's listen port appended"""
    if any(local in domain for local in LOCAL_DOMAINS):
        domain = f"{domain}:{_brand(brand).server_listen_port}"
    return f"https://{domain}/join/{room_id}"


# ==========
# Join
# ==========


def get_join_room_subject(data: Mapping[str, Any], brand: Optional[BrandConfig] = None) -> str:
    return f"{_brand(brand).app_name} - 新用户加入房间 {data['room_id']}"


def get_join_room_body(
    data: Mapping[str, Any],
    brand: Optional[BrandConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    room_url = get_room_join_url(str(data["domain"]), str(data["room_id"]), brand)
    safe = sanitize_fields(dict(data), ROOM_FIELDS)
    safe_url = sanitize_string(room_url)
    current_date_time = get_current_date_time(now=now)

    return f"""
        <h1>新用户加入房间</h1>{TABLE_STYLE}
        <table>
            <tr>
                <td>用户</td>
                <td>{safe['peer_name']}</td>
            </tr>
            <tr>
                <td>操作系统</td>
                <td>{safe['os']}</td>
            </tr>
            <tr>
                <td>浏览器</td>
                <td>{safe['browser']}</td>
            </tr>
            <tr>
                <td>房间</td>
                <td><a href="{safe_url}">{safe_url}</a></td>
            </tr>
            <tr>
                <td>时间</td>
                <td>{current_date_time}</td>
            </tr>
        </table>
    """


# ==========
# Widget
# ==========


def get_widget_room_subject(data: Mapping[str, Any], brand: Optional[BrandConfig] = None) -> str:
    return f"{_brand(brand).app_name} 小配件 - 新用户请在房间等待专家帮助 {data['room_id']}"


def get_widget_room_body(
    data: Mapping[str, Any],
    brand: Optional[BrandConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    return get_join_room_body(data, brand, now)


# ==========
# Alert
# ==========


def get_alert_subject(data: Mapping[str, Any], brand: Optional[BrandConfig] = None) -> str:
    return data.get("subject") or f"{_brand(brand).app_name} - Alert"


def get_alert_body(
    data: Mapping[str, Any],
    brand: Optional[BrandConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    body = sanitize_string(data["body"])
    current_date_time = get_current_date_time(now=now)

    return f"""
        <h1>🚨 警报</h1>{TABLE_STYLE}
        <table>
            <tr>
                <td>⚠️ 通知</td>
                <td>{body}</td>
            </tr>
            <tr>
                <td>🕒 时间</td>
                <td>{current_date_time}</td>
            </tr>
        </table>
    """
