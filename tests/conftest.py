from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import sfumail` works when running tests without installing the package.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sfumail.config import BrandConfig, EmailConfig  # noqa: E402


class RecordingTransport:
    """Stands in for SmtpTransport; remembers every send"""

    def __init__(self):
        self.sent = []

    def send(self, from_address, to, subject, html_content):
        self.sent.append(
            {"from": from_address, "to": to, "subject": subject, "html": html_content}
        )


@pytest.fixture
def host_config() -> dict:
    return {
        "integrations": {
            "email": {
                "alert": True,
                "notify": False,
                "host": "smtp.x",
                "port": 465,
                "username": "u",
                "password": "p",
                "from": "f@x",
                "sendTo": "r@x",
            }
        },
        "server": {"listen": {"port": 8080}},
        "ui": {"brand": {"app": {"name": "TestSFU"}}},
    }


@pytest.fixture
def email_config(host_config) -> EmailConfig:
    return EmailConfig.from_mapping(host_config)


@pytest.fixture
def brand(host_config) -> BrandConfig:
    return BrandConfig.from_mapping(host_config)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def join_data() -> dict:
    return {
        "peer_name": "Ann",
        "room_id": "R",
        "domain": "example.com",
        "os": "Linux",
        "browser": "Firefox",
    }
