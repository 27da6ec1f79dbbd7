"""
SMTP Email Transport
Submits HTML emails in a background thread so callers never wait on the server
"""

import logging
import smtplib
import ssl
from concurrent.futures import Future, ThreadPoolExecutor
from email.mime.text import MIMEText
from typing import Optional

from .config import SmtpCredentials

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
MAX_WORKERS = 4


def _completed(result: bool) -> Future:
    future: Future = Future()
    future.set_result(result)
    return future


def build_message(from_address: str, to: str, subject: str, html_content: str) -> MIMEText:
    msg = MIMEText(html_content, "html", "utf-8")
    msg["Subject"] = subject
    msg["From"] = from_address
    msg["To"] = to
    return msg


class SmtpTransport:
    """Thin adapter around smtplib; port 465 means implicit TLS"""

    def __init__(
        self,
        credentials: Optional[SmtpCredentials],
        timeout: int = DEFAULT_TIMEOUT,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.credentials = credentials
        self.timeout = timeout
        self._executor = executor or ThreadPoolExecutor(
            max_workers=MAX_WORKERS, thread_name_prefix="sfumail-smtp"
        )

    @property
    def secure(self) -> bool:
        return bool(self.credentials and self.credentials.secure)

    def _connect(self) -> smtplib.SMTP:
        creds = self.credentials
        if creds.secure:
            context = ssl.create_default_context()
            server = smtplib.SMTP_SSL(creds.host, creds.port, context=context, timeout=self.timeout)
        else:
            server = smtplib.SMTP(creds.host, creds.port, timeout=self.timeout)
            server.ehlo()
            if server.has_extn("starttls"):
                context = ssl.create_default_context()
                server.starttls(context=context)
                server.ehlo()
        return server

    def deliver(self, from_address: str, to: str, subject: str, html_content: str) -> bool:
        """Blocking send; every failure is logged and reported as False"""
        try:
            msg = build_message(from_address, to, subject, html_content)
            server = self._connect()
            try:
                server.login(self.credentials.username, self.credentials.password)
                server.sendmail(from_address, [to], msg.as_string())
            finally:
                server.quit()

            logger.info(f"✅ Email sent successfully via {self.credentials.host} to {to}")
            return True
        except Exception as e:
            logger.error(f"❌ SMTP send failed to {to}: {e}")
            return False

    def send(self, from_address: str, to: str, subject: str, html_content: str) -> Future:
        """Fire-and-forget: returns at once, the future resolves to the delivery result"""
        if self.credentials is None:
            logger.error("❌ SMTP transport is not configured, email not sent")
            return _completed(False)

        logger.info(f"📧 Sending email via SMTP: {self.credentials.host}")
        try:
            return self._executor.submit(self.deliver, from_address, to, subject, html_content)
        except RuntimeError as e:
            # executor already shut down
            logger.error(f"❌ SMTP transport unavailable, email to {to} dropped: {e}")
            return _completed(False)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
