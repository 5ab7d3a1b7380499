from datetime import timedelta

import pytest

from app.controllers.auth_controller import (
    forgot_password,
    get_reset_pass_record,
    resend_reset_pass_mail,
    reset_password,
)
from app.core import errors
from app.core.context import RequestContext
from app.core.reset_ledger import reset_token_for
from app.core.security import verify_password
from app.models.reset_pass_model import ResetPass
from app.repositories.reset_pass_repo import (
    get_latest_reset_pass_by_email,
    update_reset_pass_availability,
)
from conftest import T0, seed_user


def at(hours):
    return RequestContext(now=T0 + timedelta(hours=hours))


def test_forgot_then_lookup_returns_available_record(db_session, ctx, mailer):
    record = forgot_password(db_session, ctx, mailer, "a@x.com")
    assert mailer.reset_pass_mails == [record.reset_pass_id]

    found = get_reset_pass_record(db_session, ctx, "a@x.com", reset_token_for(record))
    assert found.reset_pass_id == record.reset_pass_id
    assert found.available is True


def test_forgot_does_not_require_registered_user(db_session, ctx, mailer):
    record = forgot_password(db_session, ctx, mailer, "nobody@example.com")
    assert record.email == "nobody@example.com"
    assert db_session.query(ResetPass).count() == 1


def test_forgot_keeps_record_when_mail_fails(db_session, ctx, mailer):
    mailer.fail = True
    with pytest.raises(errors.TransportError):
        forgot_password(db_session, ctx, mailer, "a@x.com")

    record = get_latest_reset_pass_by_email(db_session, "a@x.com")
    assert record is not None
    assert record.available is True

    mailer.fail = False
    resend_reset_pass_mail(db_session, ctx, mailer, "a@x.com")
    assert mailer.reset_pass_mails == [record.reset_pass_id]


def test_only_latest_record_is_actionable(db_session, mailer):
    older = forgot_password(db_session, at(0), mailer, "a@x.com")
    newer = forgot_password(db_session, at(1), mailer, "a@x.com")

    with pytest.raises(errors.TokenError) as exc_info:
        get_reset_pass_record(db_session, at(2), "a@x.com", reset_token_for(older))
    assert exc_info.value.kind is errors.ErrorKind.INVALID_TOKEN

    assert get_reset_pass_record(db_session, at(2), "a@x.com", reset_token_for(newer)).reset_pass_id == newer.reset_pass_id
    # The older record is still stored.
    assert db_session.query(ResetPass).count() == 2


def test_lookup_with_wrong_token(db_session, ctx, mailer):
    forgot_password(db_session, ctx, mailer, "a@x.com")
    with pytest.raises(errors.TokenError) as exc_info:
        get_reset_pass_record(db_session, ctx, "a@x.com", "wrong-token")
    assert not exc_info.value.is_warning


def test_lookup_without_any_record(db_session, ctx):
    with pytest.raises(errors.TokenError):
        get_reset_pass_record(db_session, ctx, "a@x.com", "anything")


def test_consumed_record_reports_already_used(db_session, mailer):
    user = seed_user(db_session, email="a@x.com", username="a")
    record = forgot_password(db_session, at(0), mailer, "a@x.com")
    token = reset_token_for(record)

    reset_password(db_session, at(1), user.user_id, "new-password", record.reset_pass_id)
    db_session.refresh(record)
    assert record.available is False

    with pytest.raises(errors.TokenError) as exc_info:
        get_reset_pass_record(db_session, at(2), "a@x.com", token)
    err = exc_info.value
    assert err.kind is errors.ErrorKind.ALREADY_USED
    assert err.field == "available"
    assert err.is_warning


def test_record_older_than_a_day_is_expired(db_session, mailer):
    record = forgot_password(db_session, at(0), mailer, "a@x.com")

    with pytest.raises(errors.TokenError) as exc_info:
        get_reset_pass_record(db_session, at(25), "a@x.com", reset_token_for(record))
    err = exc_info.value
    assert err.kind is errors.ErrorKind.EXPIRED
    assert err.field == "expire"
    assert err.is_warning
    db_session.refresh(record)
    assert record.available is True


def test_record_at_exactly_a_day_is_still_valid(db_session, mailer):
    record = forgot_password(db_session, at(0), mailer, "a@x.com")
    assert get_reset_pass_record(db_session, at(24), "a@x.com", reset_token_for(record)).available


def test_already_used_is_reported_before_expired(db_session, mailer):
    record = forgot_password(db_session, at(0), mailer, "a@x.com")
    update_reset_pass_availability(db_session, record.reset_pass_id, False)

    with pytest.raises(errors.TokenError) as exc_info:
        get_reset_pass_record(db_session, at(30), "a@x.com", reset_token_for(record))
    assert exc_info.value.kind is errors.ErrorKind.ALREADY_USED


def test_reset_password_updates_hash(db_session, ctx, mailer):
    user = seed_user(db_session, email="a@x.com", username="a")
    record = forgot_password(db_session, ctx, mailer, "a@x.com")

    reset_password(db_session, ctx, user.user_id, "new-password", record.reset_pass_id)

    db_session.refresh(user)
    assert verify_password("new-password", user.salt, user.password_hash)


def test_reset_password_cannot_be_replayed(db_session, ctx, mailer):
    user = seed_user(db_session, email="a@x.com", username="a")
    record = forgot_password(db_session, ctx, mailer, "a@x.com")
    reset_password(db_session, ctx, user.user_id, "new-password", record.reset_pass_id)

    with pytest.raises(errors.TokenError) as exc_info:
        reset_password(db_session, ctx, user.user_id, "other-password", record.reset_pass_id)
    assert exc_info.value.kind is errors.ErrorKind.ALREADY_USED

    db_session.refresh(user)
    assert verify_password("new-password", user.salt, user.password_hash)


def test_reset_password_unknown_user(db_session, ctx, mailer):
    record = forgot_password(db_session, ctx, mailer, "a@x.com")
    with pytest.raises(errors.NotFoundError):
        reset_password(db_session, ctx, 999, "new-password", record.reset_pass_id)
    db_session.refresh(record)
    assert record.available is True


def test_reset_password_unknown_record(db_session, ctx):
    user = seed_user(db_session)
    with pytest.raises(errors.NotFoundError):
        reset_password(db_session, ctx, user.user_id, "new-password", 999)


def test_consumed_record_cannot_be_reopened(db_session, ctx, mailer):
    record = forgot_password(db_session, ctx, mailer, "a@x.com")
    update_reset_pass_availability(db_session, record.reset_pass_id, False)

    with pytest.raises(ValueError):
        update_reset_pass_availability(db_session, record.reset_pass_id, True)
    db_session.refresh(record)
    assert record.available is False
