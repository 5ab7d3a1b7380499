"""
Password reset request ledger.

Records are append-only. Only the latest record for an email is consulted, it
can be consumed once, and it stops being usable ``reset_pass_expire_hours``
after creation. Expiry is evaluated when a record is read; nothing sweeps old
records.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from app.core import errors
from app.core.config import get_settings
from app.core.context import as_utc
from app.core.tokens import derive_reset_token, tokens_match
from app.models.reset_pass_model import ResetPass


def reset_pass_lifetime() -> timedelta:
    return timedelta(hours=get_settings().reset_pass_expire_hours)


def reset_token_for(reset_pass: ResetPass) -> str:
    return derive_reset_token(reset_pass.reset_pass_id, reset_pass.email)


def is_expired(reset_pass: ResetPass, now: datetime) -> bool:
    return now - as_utc(reset_pass.created_at) > reset_pass_lifetime()


def require_reset_token(token: str | None):
    def require_reset_token_step(reset_pass: ResetPass | None) -> ResetPass:
        if reset_pass is None or not tokens_match(reset_token_for(reset_pass), token):
            raise errors.invalid_reset_token()
        return reset_pass
    return require_reset_token_step


def require_available(reset_pass: ResetPass) -> ResetPass:
    if not reset_pass.available:
        raise errors.reset_already_used()
    return reset_pass


def require_not_expired(now: datetime):
    def require_not_expired_step(reset_pass: ResetPass) -> ResetPass:
        if is_expired(reset_pass, now):
            raise errors.reset_expired()
        return reset_pass
    return require_not_expired_step
