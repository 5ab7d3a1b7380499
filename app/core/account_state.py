"""
Account state transitions.

``activated``, ``blocked`` and ``verified`` are independent flags. Activation
is one-way and guarded by a compare-and-set; blocked and verified are flipped
by administrators and are their own inverse.
"""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core import errors
from app.core.pipeline import run_steps
from app.core.security import verify_password
from app.core.tokens import derive_activation_token, tokens_match
from app.models.user_model import User
from app.repositories.user_repo import flip_user_flag, mark_user_activated

logger = logging.getLogger(__name__)


def require_user(field: str = "username", error=None):
    def require_user_step(user: User | None) -> User:
        if user is None:
            raise error() if error is not None else errors.user_not_found(field)
        return user
    return require_user_step


def require_password(password: str):
    def require_password_step(user: User) -> User:
        if not verify_password(password, user.salt, user.password_hash):
            raise errors.auth_failed()
        return user
    return require_password_step


def require_activated(user: User) -> User:
    if not user.activated:
        raise errors.not_activated()
    return user


def require_not_blocked(user: User) -> User:
    if user.blocked:
        raise errors.blocked()
    return user


def require_not_activated(user: User) -> User:
    if user.activated:
        raise errors.already_activated()
    return user


def require_activation_token(token: str | None):
    def require_activation_token_step(user: User) -> User:
        expected = derive_activation_token(user.salt, user.email)
        if not tokens_match(expected, token):
            raise errors.invalid_activation_token()
        return user
    return require_activation_token_step


def activation_token_for(user: User) -> str:
    return derive_activation_token(user.salt, user.email)


def activate(db: Session, user: User | None, token: str | None) -> User:
    """Activate ``user`` if ``token`` matches; a replay of a good token gets a warning."""

    def mark_activated(user: User) -> User:
        if not mark_user_activated(db, user.user_id):
            # Lost the race to a concurrent activation of the same account.
            raise errors.already_activated()
        db.refresh(user)
        logger.info("user %s activated", user.user_id)
        return user

    return run_steps(
        user,
        require_user(error=errors.invalid_activation_token),
        require_activation_token(token),
        require_not_activated,
        mark_activated,
    )


def _toggle(db: Session, user: User | None, flag: str) -> User:
    if user is None:
        raise errors.user_not_found("id")
    user = flip_user_flag(db, user, flag)
    logger.info("user %s %s set to %s", user.user_id, flag, getattr(user, flag))
    return user


def toggle_blocked(db: Session, user: User | None) -> User:
    return _toggle(db, user, "blocked")


def toggle_verified(db: Session, user: User | None) -> User:
    return _toggle(db, user, "verified")
