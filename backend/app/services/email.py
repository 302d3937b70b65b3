"""Outbound birthday notification emails over SMTP."""

from __future__ import annotations

import html
import logging
import smtplib
import ssl
from dataclasses import dataclass
from datetime import date
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from functools import lru_cache
from typing import Protocol

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DispatchResult:
    """Outcome of a single email delivery attempt."""

    success: bool
    message_id: str | None = None
    error: str | None = None


class EmailDispatcher(Protocol):
    """Capability the birthday sweep relies on."""

    def send_birthday_email(self, to_email: str, username: str, message_count: int) -> DispatchResult:
        """Send the birthday summary; delivery problems are reported, not raised."""

    def verify_connection(self) -> bool:
        """Check that the mail server is reachable with the configured credentials."""


def build_birthday_email(
    sender: str,
    to_email: str,
    username: str,
    message_count: int,
    client_url: str,
) -> MIMEMultipart:
    """Compose the plain text and HTML birthday summary."""

    noun = "message" if message_count == 1 else "messages"
    msg = MIMEMultipart("alternative")
    msg["Subject"] = f"Happy Birthday, {username}!"
    msg["From"] = sender
    msg["To"] = to_email

    text = (
        f"Dear {username},\n\n"
        "Today is your special day, and people have sent you warm birthday wishes!\n\n"
        f"{message_count} birthday {noun} waiting for you.\n"
        f"Read them at {client_url}\n\n"
        "Have an amazing birthday!\n"
        f"Wishing You, {date.today().year}\n"
    )
    safe_name = html.escape(username)
    safe_url = html.escape(client_url, quote=True)
    body = f"""\
<html>
  <body style="font-family: Arial, sans-serif; background-color: #f4f4f4;">
    <div style="max-width: 600px; margin: 40px auto; background: #ffffff; border-radius: 10px;">
      <div style="padding: 32px; text-align: center; background: #667eea; color: #ffffff;">
        <h1>Happy Birthday!</h1>
        <p>Dear {safe_name}</p>
      </div>
      <div style="padding: 32px; text-align: center;">
        <p>Today is your special day, and people have sent you warm birthday wishes!</p>
        <h2 style="color: #667eea; font-size: 48px;">{message_count}</h2>
        <p>Birthday {noun} waiting for you.</p>
        <a href="{safe_url}">Open your birthday messages</a>
      </div>
      <div style="padding: 16px; text-align: center; color: #999999; font-size: 12px;">
        <p>Sent by Wishing You, a place for sharing birthday love.</p>
      </div>
    </div>
  </body>
</html>
"""
    msg.attach(MIMEText(text, "plain", "utf-8"))
    msg.attach(MIMEText(body, "html", "utf-8"))
    return msg


class SmtpEmailDispatcher:
    """Send notification emails through an authenticated SMTP server."""

    def __init__(self, settings: Settings) -> None:
        if not settings.email_configured:
            raise ValueError("EMAIL_USER and EMAIL_PASSWORD are required for SMTP delivery")
        self.host = settings.email_host
        self.port = int(settings.email_port)
        self.username = settings.email_user
        self.password = settings.email_password
        self.use_ssl = settings.email_use_ssl
        self.timeout = settings.email_timeout_seconds
        self.client_url = settings.client_url
        self.sender = formataddr((settings.email_sender_name, self.username))

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.use_ssl:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                self.host, self.port, timeout=self.timeout, context=context
            )
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            if not self.use_ssl:
                server.starttls(context=context)
            server.login(self.username, self.password)
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
        return server

    def send_birthday_email(self, to_email: str, username: str, message_count: int) -> DispatchResult:
        msg = build_birthday_email(self.sender, to_email, username, message_count, self.client_url)
        msg["Message-ID"] = make_msgid(domain=self.username.rpartition("@")[2] or None)
        try:
            with self._connect() as server:
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Error sending email to %s: %s", to_email, exc)
            return DispatchResult(success=False, error=str(exc))

        logger.info("Email sent to %s: %s", to_email, msg["Message-ID"])
        return DispatchResult(success=True, message_id=msg["Message-ID"])

    def verify_connection(self) -> bool:
        try:
            with self._connect() as server:
                server.noop()
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Email service error: %s", exc)
            return False
        logger.info("Email service is ready to send messages")
        return True


class UnconfiguredEmailDispatcher:
    """Stand-in used when no SMTP credentials are configured; every send fails."""

    reason = "Email delivery is not configured"

    def send_birthday_email(self, to_email: str, username: str, message_count: int) -> DispatchResult:
        logger.warning("%s; skipping email to %s", self.reason, to_email)
        return DispatchResult(success=False, error=self.reason)

    def verify_connection(self) -> bool:
        logger.warning("%s; set EMAIL_USER and EMAIL_PASSWORD to enable it", self.reason)
        return False


@lru_cache(maxsize=1)
def get_email_dispatcher() -> EmailDispatcher:
    """Return the SMTP dispatcher when credentials are configured."""

    settings = get_settings()
    if settings.email_configured:
        return SmtpEmailDispatcher(settings)
    return UnconfiguredEmailDispatcher()
