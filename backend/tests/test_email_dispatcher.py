"""Unit tests for the SMTP email dispatcher."""

from __future__ import annotations

import smtplib

import pytest

from app.config import Settings
from app.services import email as email_service
from app.services.email import SmtpEmailDispatcher, build_birthday_email


class FakeSMTP:
    instances: list["FakeSMTP"] = []
    fail_send = False
    fail_login = False

    def __init__(self, host, port, timeout=None, **kwargs):
        self.closed = False
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        self.started_tls = True

    def login(self, user, password):
        if FakeSMTP.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")
        self.logged_in = (user, password)

    def send_message(self, msg):
        if FakeSMTP.fail_send:
            raise smtplib.SMTPRecipientsRefused({msg["To"]: (550, b"no such user")})
        self.sent.append(msg)

    def noop(self):
        return (250, b"OK")

    def close(self):
        self.closed = True


@pytest.fixture()
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_send = False
    FakeSMTP.fail_login = False
    monkeypatch.setattr(email_service.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


@pytest.fixture()
def settings():
    return Settings(
        email_host="smtp.example.com",
        email_port=587,
        email_user="wishes@example.com",
        email_password="app-password",
        client_url="https://wishes.example.com",
    )


def test_build_birthday_email_contents():
    msg = build_birthday_email("Wishing You <wishes@example.com>", "bob@example.com", "bob", 3, "https://x.example.com")

    assert msg["Subject"] == "Happy Birthday, bob!"
    assert msg["To"] == "bob@example.com"
    plain, rich = msg.get_payload()
    assert "3 birthday messages" in plain.get_payload(decode=True).decode()
    assert "https://x.example.com" in rich.get_payload(decode=True).decode()


def test_build_birthday_email_singular():
    msg = build_birthday_email("wishes@example.com", "bob@example.com", "bob", 1, "https://x.example.com")
    plain = msg.get_payload()[0].get_payload(decode=True).decode()
    assert "1 birthday message waiting" in plain


def test_dispatcher_sends_over_starttls(fake_smtp, settings):
    dispatcher = SmtpEmailDispatcher(settings)

    result = dispatcher.send_birthday_email("bob@example.com", "bob", 2)

    assert result.success is True
    assert result.message_id
    server = fake_smtp.instances[-1]
    assert (server.host, server.port) == ("smtp.example.com", 587)
    assert server.started_tls is True
    assert server.logged_in == ("wishes@example.com", "app-password")
    assert server.sent[0]["To"] == "bob@example.com"


def test_dispatcher_reports_delivery_errors(fake_smtp, settings):
    fake_smtp.fail_send = True
    dispatcher = SmtpEmailDispatcher(settings)

    result = dispatcher.send_birthday_email("bob@example.com", "bob", 2)

    assert result.success is False
    assert result.error


def test_dispatcher_reports_connection_errors(monkeypatch, settings):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr(email_service.smtplib, "SMTP", refuse)
    dispatcher = SmtpEmailDispatcher(settings)

    assert dispatcher.send_birthday_email("bob@example.com", "bob", 1).success is False
    assert dispatcher.verify_connection() is False


def test_verify_connection(fake_smtp, settings):
    assert SmtpEmailDispatcher(settings).verify_connection() is True


def test_dispatcher_requires_credentials():
    with pytest.raises(ValueError):
        SmtpEmailDispatcher(Settings(email_user=None, email_password=None))


def test_failed_login_closes_connection(fake_smtp, settings):
    fake_smtp.fail_login = True
    dispatcher = SmtpEmailDispatcher(settings)

    result = dispatcher.send_birthday_email("bob@example.com", "bob", 1)

    assert result.success is False
    assert "bad credentials" in result.error
    assert fake_smtp.instances[-1].closed is True
    assert fake_smtp.instances[-1].sent == []
