"""
Email notification settings
Read once from the environment (or the host's nested config) and never mutated
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from cryptography.fernet import Fernet, InvalidToken
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_APP_NAME = "MiroTalk SFU"
DEFAULT_SERVER_LISTEN_PORT = 3010
DEFAULT_LOG_TIMEZONE = "Asia/Shanghai"

REDACTED = "***"


def env_flag(name: str) -> bool:
    """Boolean env var, only the literal 'true' enables"""
    return os.getenv(name, "false").strip().lower() == "true"


def env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"⚠️ {name} is not an integer ({raw!r}), using {default}")
        return default


def decrypt_password(encrypted: Optional[str], key: Optional[str]) -> Optional[str]:
    """Decrypt SMTP password"""
    if not key or not encrypted:
        return encrypted
    try:
        return Fernet(key.encode()).decrypt(encrypted.encode()).decode()
    except (InvalidToken, ValueError):
        # Not a Fernet token (or bad key): treat it as a plain password
        logger.warning("⚠️ EMAIL_PASSWORD could not be decrypted, using it as-is")
        return encrypted


class SmtpCredentials(BaseModel):
    """Everything the transport needs to submit mail"""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    username: str
    password: str

    @property
    def secure(self) -> bool:
        return self.port == 465


class EmailConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    alert_enabled: bool = False
    notify_enabled: bool = False
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None
    from_address: Optional[str] = None
    default_to: Optional[str] = None

    @field_validator("host", "username", "password", "from_address", "default_to", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if v is False or v == "":
            return None
        return v

    @field_validator("port", mode="before")
    @classmethod
    def port_to_int(cls, v: Any) -> Optional[int]:
        if v in (None, False, "", 0):
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            logger.warning(f"⚠️ Invalid email port {v!r}, treating as not configured")
            return None

    @property
    def sender(self) -> Optional[str]:
        return self.from_address or self.username

    @property
    def smtp_credentials(self) -> Optional[SmtpCredentials]:
        if not (self.host and self.port and self.username and self.password):
            return None
        return SmtpCredentials(
            host=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
        )

    @property
    def alert_ready(self) -> bool:
        return bool(self.alert_enabled and self.smtp_credentials and self.default_to)

    @property
    def notify_ready(self) -> bool:
        return bool(self.notify_enabled and self.smtp_credentials)

    @property
    def should_log_summary(self) -> bool:
        return bool(
            (self.alert_enabled or self.notify_enabled)
            and self.smtp_credentials
            and self.default_to
        )

    def summary(self) -> dict:
        return {
            "alert": self.alert_enabled,
            "notify": self.notify_enabled,
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": REDACTED if self.password else None,
            "from": self.sender,
            "to": self.default_to,
        }

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "EmailConfig":
        """Build from the host config, e.g. {"integrations": {"email": {...}}}"""
        email = (config.get("integrations") or {}).get("email") or {}
        return cls(
            alert_enabled=bool(email.get("alert")),
            notify_enabled=bool(email.get("notify")),
            host=email.get("host"),
            port=email.get("port"),
            username=email.get("username"),
            password=email.get("password"),
            from_address=email.get("from"),
            default_to=email.get("sendTo"),
        )

    @classmethod
    def from_env(cls) -> "EmailConfig":
        return cls(
            alert_enabled=env_flag("EMAIL_ALERTS_ENABLED"),
            notify_enabled=env_flag("EMAIL_NOTIFICATIONS"),
            host=os.getenv("EMAIL_HOST"),
            port=env_int("EMAIL_PORT"),
            username=os.getenv("EMAIL_USERNAME"),
            password=decrypt_password(
                os.getenv("EMAIL_PASSWORD"), os.getenv("EMAIL_ENCRYPTION_KEY")
            ),
            from_address=os.getenv("EMAIL_FROM"),
            default_to=os.getenv("EMAIL_SEND_TO"),
        )


class BrandConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_name: str = DEFAULT_APP_NAME
    server_listen_port: int = DEFAULT_SERVER_LISTEN_PORT

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "BrandConfig":
        app = ((config.get("ui") or {}).get("brand") or {}).get("app") or {}
        listen = (config.get("server") or {}).get("listen") or {}
        return cls(
            app_name=app.get("name") or DEFAULT_APP_NAME,
            server_listen_port=listen.get("port") or DEFAULT_SERVER_LISTEN_PORT,
        )

    @classmethod
    def from_env(cls) -> "BrandConfig":
        return cls(
            app_name=os.getenv("APP_NAME") or DEFAULT_APP_NAME,
            server_listen_port=env_int("SERVER_LISTEN_PORT", DEFAULT_SERVER_LISTEN_PORT),
        )
