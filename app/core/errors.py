"""
Account error taxonomy.

Every failure raised by the account flows is an ``AccountError`` carrying a
``kind``, the ``field`` it should be attributed to in a form, and a
``severity``. Warnings mark expected conditions (link already used, account
already active) as opposed to hard failures.
"""
from __future__ import annotations

import enum

from fastapi import status


class Severity(str, enum.Enum):
    ERROR = "error"
    WARNING = "warning"


class ErrorKind(str, enum.Enum):
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    AUTH_FAILED = "AUTH_FAILED"
    WRONG_PASSWORD = "WRONG_PASSWORD"
    NOT_ACTIVATED = "NOT_ACTIVATED"
    BLOCKED = "BLOCKED"
    ALREADY_ACTIVATED = "ALREADY_ACTIVATED"
    INVALID_TOKEN = "INVALID_TOKEN"
    ALREADY_USED = "ALREADY_USED"
    EXPIRED = "EXPIRED"
    NOT_FOUND = "NOT_FOUND"
    TRANSPORT = "TRANSPORT"


class AccountError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        field: str,
        severity: Severity = Severity.ERROR,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.field = field
        self.severity = severity
        if status_code is not None:
            self.status_code = status_code

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "field": self.field,
            "severity": self.severity.value,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value}, field={self.field!r}, severity={self.severity.value})"


class ValidationError(AccountError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class AuthenticationError(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AccountStateError(AccountError):
    status_code = status.HTTP_403_FORBIDDEN


class TokenError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AccountError):
    status_code = status.HTTP_404_NOT_FOUND


class TransportError(AccountError):
    status_code = status.HTTP_502_BAD_GATEWAY


def password_mismatch() -> ValidationError:
    return ValidationError(ErrorKind.PASSWORD_MISMATCH, "Passwords do not match", "repassword")


def email_taken() -> ValidationError:
    return ValidationError(ErrorKind.EMAIL_TAKEN, "Email is already registered", "email")


def username_taken() -> ValidationError:
    return ValidationError(ErrorKind.USERNAME_TAKEN, "Username is already taken", "username")


def user_not_found(field: str = "username") -> NotFoundError:
    return NotFoundError(ErrorKind.NOT_FOUND, "User does not exist", field)


def auth_failed() -> AuthenticationError:
    return AuthenticationError(ErrorKind.AUTH_FAILED, "Incorrect password", "password")


def wrong_password() -> AuthenticationError:
    return AuthenticationError(
        ErrorKind.WRONG_PASSWORD,
        "Current password is incorrect",
        "password",
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def not_activated() -> AccountStateError:
    return AccountStateError(ErrorKind.NOT_ACTIVATED, "Account is not activated", "activated")


def blocked() -> AccountStateError:
    return AccountStateError(
        ErrorKind.BLOCKED, "Account is blocked, please contact an administrator", "blocked"
    )


def already_activated() -> AccountStateError:
    return AccountStateError(
        ErrorKind.ALREADY_ACTIVATED,
        "Account is already activated",
        "activated",
        Severity.WARNING,
        status_code=status.HTTP_409_CONFLICT,
    )


def invalid_activation_token() -> TokenError:
    return TokenError(ErrorKind.INVALID_TOKEN, "Activation link is invalid", "activated")


def invalid_reset_token() -> TokenError:
    return TokenError(ErrorKind.INVALID_TOKEN, "Password reset link is invalid", "token")


def reset_already_used() -> TokenError:
    return TokenError(
        ErrorKind.ALREADY_USED,
        "This password reset link has already been used",
        "available",
        Severity.WARNING,
        status_code=status.HTTP_410_GONE,
    )


def reset_expired() -> TokenError:
    return TokenError(
        ErrorKind.EXPIRED,
        "This password reset link has expired, please request a new one",
        "expire",
        Severity.WARNING,
        status_code=status.HTTP_410_GONE,
    )


def reset_record_not_found() -> NotFoundError:
    return NotFoundError(ErrorKind.NOT_FOUND, "Password reset request not found", "available")


def transport_failed(message: str = "Could not send email") -> TransportError:
    return TransportError(ErrorKind.TRANSPORT, message, "email")
