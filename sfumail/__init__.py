"""Email alerts and notifications for conference room events"""

from .services.notification_service import (
    EmailEvent,
    EmailNotifier,
    send_email_alert,
    send_email_notifications,
)

__all__ = ["EmailEvent", "EmailNotifier", "send_email_alert", "send_email_notifications"]
