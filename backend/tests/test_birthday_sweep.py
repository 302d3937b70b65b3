"""Unit tests for the daily birthday email sweep."""

from __future__ import annotations

from datetime import date

from app.models import Base, Message
from app.services.birthday_sweep import run_birthday_sweep
from app.services.email import DispatchResult, UnconfiguredEmailDispatcher

TODAY = date(2024, 3, 15)


class RecordingDispatcher:
    def __init__(self, fail_for: set[str] | None = None, raise_for: set[str] | None = None):
        self.calls: list[tuple[str, str, int]] = []
        self.fail_for = fail_for or set()
        self.raise_for = raise_for or set()

    def send_birthday_email(self, to_email: str, username: str, message_count: int) -> DispatchResult:
        self.calls.append((to_email, username, message_count))
        if username in self.raise_for:
            raise RuntimeError("connection reset")
        if username in self.fail_for:
            return DispatchResult(success=False, error="mailbox unavailable")
        return DispatchResult(success=True, message_id="<id@example.com>")

    def verify_connection(self) -> bool:
        return True


def _message(db_session, key: str) -> None:
    db_session.add(Message(sender_display_name="Anonymous", text="Happy birthday!", target_birthday_key=key))
    db_session.commit()


def test_sweep_emails_matching_users(db_session, make_user):
    make_user("bob", "03-15")
    make_user("carol", "03-16")
    _message(db_session, "03-15")
    dispatcher = RecordingDispatcher()

    report = run_birthday_sweep(db_session, dispatcher, today=TODAY)

    assert dispatcher.calls == [("bob@example.com", "bob", 1)]
    assert report.date_key == "03-15"
    assert report.users_matched == 1
    assert report.emails_sent == 1
    assert report.emails_failed == 0
    assert report.error is None


def test_sweep_count_is_shared_by_everyone_on_the_key(db_session, make_user):
    make_user("bob", "03-15")
    make_user("dana", "03-15")
    _message(db_session, "03-15")
    _message(db_session, "03-15")
    dispatcher = RecordingDispatcher()

    run_birthday_sweep(db_session, dispatcher, today=TODAY)

    assert [call[2] for call in dispatcher.calls] == [2, 2]


def test_sweep_continues_after_failures(db_session, make_user):
    make_user("bob", "03-15")
    make_user("dana", "03-15")
    make_user("erin", "03-15")
    dispatcher = RecordingDispatcher(fail_for={"bob"}, raise_for={"dana"})

    report = run_birthday_sweep(db_session, dispatcher, today=TODAY)

    assert [call[1] for call in dispatcher.calls] == ["bob", "dana", "erin"]
    assert report.emails_sent == 1
    assert report.emails_failed == 2


def test_sweep_without_birthdays_sends_nothing(db_session, make_user):
    make_user("carol", "03-16")
    dispatcher = RecordingDispatcher()

    report = run_birthday_sweep(db_session, dispatcher, today=TODAY)

    assert dispatcher.calls == []
    assert report.users_matched == 0
    assert report.emails_sent == 0


def test_sweep_with_unconfigured_email_counts_failures(db_session, make_user):
    make_user("bob", "03-15")

    report = run_birthday_sweep(db_session, UnconfiguredEmailDispatcher(), today=TODAY)

    assert report.emails_sent == 0
    assert report.emails_failed == 1


def test_sweep_reports_store_failures(test_engine, session_factory):
    session = session_factory()
    Base.metadata.drop_all(test_engine)
    try:
        report = run_birthday_sweep(session, RecordingDispatcher(), today=TODAY)
    finally:
        session.close()
        Base.metadata.create_all(test_engine)

    assert report.error is not None
    assert report.users_matched == 0
