"""
Email Notification Dispatcher
Turns host events (room join, widget session, operational alert) into emails
for the fixed alert recipient or a per-call notification address
"""

import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..config import BrandConfig, EmailConfig
from ..email_service import SmtpTransport
from ..email_templates import (
    get_alert_body,
    get_alert_subject,
    get_join_room_body,
    get_join_room_subject,
    get_widget_room_body,
    get_widget_room_subject,
)
from ..shared.validators import is_valid_email

logger = logging.getLogger(__name__)


class EmailEvent(str, Enum):
    JOIN = "join"
    WIDGET = "widget"
    ALERT = "alert"

    @classmethod
    def parse(cls, value: Any) -> Optional["EmailEvent"]:
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


Renderer = Callable[..., str]

ALERT_TEMPLATES: dict[EmailEvent, tuple[Renderer, Renderer]] = {
    EmailEvent.JOIN: (get_join_room_subject, get_join_room_body),
    EmailEvent.WIDGET: (get_widget_room_subject, get_widget_room_body),
    EmailEvent.ALERT: (get_alert_subject, get_alert_body),
}

# left/exit events are not wired yet
NOTIFICATION_TEMPLATES: dict[EmailEvent, tuple[Renderer, Renderer]] = {
    EmailEvent.JOIN: (get_join_room_subject, get_join_room_body),
}


def get_notification_email(notifications: Any) -> Optional[str]:
    """notifications.mode.email stripped of padding, None if any level is missing"""
    if not isinstance(notifications, Mapping):
        return None
    mode = notifications.get("mode")
    if not isinstance(mode, Mapping):
        return None
    email = mode.get("email")
    if isinstance(email, str):
        return email.strip()
    return email


class EmailNotifier:
    def __init__(self, config: EmailConfig, brand: BrandConfig, transport: SmtpTransport):
        self.config = config
        self.brand = brand
        self.transport = transport
        if config.should_log_summary:
            logger.info(f"Email: {config.summary()}")

    @classmethod
    def from_env(cls) -> "EmailNotifier":
        config = EmailConfig.from_env()
        return cls(
            config=config,
            brand=BrandConfig.from_env(),
            transport=SmtpTransport(config.smtp_credentials),
        )

    def _render(
        self,
        templates: dict[EmailEvent, tuple[Renderer, Renderer]],
        event: Any,
        data: Mapping[str, Any],
    ) -> tuple[Optional[str], Optional[str]]:
        kind = EmailEvent.parse(event)
        if kind is None or kind not in templates:
            return None, None

        subject_fn, body_fn = templates[kind]
        try:
            return subject_fn(data, self.brand), body_fn(data, self.brand)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"❌ Failed to render {kind.value} email: missing or bad field {e}")
            return None, None

    def send_email_alert(self, event: Any, data: Mapping[str, Any]) -> bool:
        """Send to the configured alert recipient; False when disabled or event unknown"""
        if not self.config.alert_ready:
            return False

        logger.info(f"sendEmailAlert: event={event} data={data}")

        subject, body = self._render(ALERT_TEMPLATES, event, data)
        if subject and body:
            self.transport.send(self.config.sender, self.config.default_to, subject, body)
            return True
        return False

    def send_email_notifications(
        self, event: Any, data: Mapping[str, Any], notifications: Any
    ) -> bool:
        """Send to notifications.mode.email; no default recipient is involved"""
        if not self.config.notify_ready:
            return False

        logger.info(
            f"sendEmailNotifications: event={event} data={data} notifications={notifications}"
        )

        subject, body = self._render(NOTIFICATION_TEMPLATES, event, data)
        email_send_to = get_notification_email(notifications)

        if subject and body and is_valid_email(email_send_to):
            self.transport.send(self.config.sender, email_send_to, subject, body)
            return True

        logger.error(f"❌ sendEmailNotifications: Invalid email {email_send_to!r}")
        return False


# Built at import so the transport handle exists whenever the module is loaded
_notifier: Optional[EmailNotifier] = EmailNotifier.from_env()


def get_notifier() -> EmailNotifier:
    """Shared notifier; rebuilt from the environment if it was reset"""
    global _notifier
    if _notifier is None:
        _notifier = EmailNotifier.from_env()
    return _notifier


def send_email_alert(event: Any, data: Mapping[str, Any]) -> bool:
    return get_notifier().send_email_alert(event, data)


def send_email_notifications(event: Any, data: Mapping[str, Any], notifications: Any) -> bool:
    return get_notifier().send_email_notifications(event, data, notifications)
