"""
Outbound account mail.

The flows only depend on ``Mailer``; ``SmtpMailer`` is the production
implementation and tests swap in their own through ``get_mailer``.
"""
from __future__ import annotations

import html as html_lib
import logging
from urllib.parse import urlencode

from app.core import errors
from app.core.account_state import activation_token_for
from app.core.config import get_settings
from app.core.email import send_email
from app.core.reset_ledger import reset_token_for
from app.models.reset_pass_model import ResetPass
from app.models.user_model import User

logger = logging.getLogger(__name__)


def activation_link(user: User) -> str:
    settings = get_settings()
    query = urlencode({"email": user.email, "token": activation_token_for(user)})
    return f"{settings.frontend_base_url}/activate?{query}"


def reset_pass_link(reset_pass: ResetPass) -> str:
    settings = get_settings()
    query = urlencode({"email": reset_pass.email, "token": reset_token_for(reset_pass)})
    return f"{settings.frontend_base_url}/reset-password?{query}"


class Mailer:
    def send_activation_mail(self, user: User) -> None:
        raise NotImplementedError

    def send_reset_pass_mail(self, reset_pass: ResetPass) -> None:
        raise NotImplementedError


class SmtpMailer(Mailer):
    def _send(self, to_email: str, subject: str, html: str) -> None:
        try:
            send_email(to_email, subject, html)
        except (OSError, RuntimeError) as exc:
            logger.error("sending %r to %s failed: %s", subject, to_email, exc)
            raise errors.transport_failed() from exc

    def send_activation_mail(self, user: User) -> None:
        site = html_lib.escape(get_settings().site_name)
        username = html_lib.escape(user.username)
        link = html_lib.escape(activation_link(user))
        subject = f"{get_settings().site_name}: Activate Your Account"
        html = f"""
        <div style="font-family: Arial, sans-serif; line-height: 1.6;">
          <h2>Welcome, {username}</h2>
          <p>Thanks for signing up. Click the link below to activate your account:</p>
          <p><a href="{link}">{link}</a></p>
          <p>If you did not sign up, you can ignore this email.</p>
          <p>Thank you,<br/>{site} Team</p>
        </div>
        """
        self._send(user.email, subject, html)

    def send_reset_pass_mail(self, reset_pass: ResetPass) -> None:
        settings = get_settings()
        site = html_lib.escape(settings.site_name)
        link = html_lib.escape(reset_pass_link(reset_pass))
        subject = f"{settings.site_name}: Reset Your Password"
        html = f"""
        <div style="font-family: Arial, sans-serif; line-height: 1.6;">
          <h2>Password reset</h2>
          <p>We received a request to reset your password.</p>
          <p>Click the link below to set a new password (valid for {settings.reset_pass_expire_hours} hours):</p>
          <p><a href="{link}">{link}</a></p>
          <p>If you did not request this, you can ignore this email.</p>
          <p>Thank you,<br/>{site} Team</p>
        </div>
        """
        self._send(reset_pass.email, subject, html)


_mailer: Mailer | None = None


def get_mailer() -> Mailer:
    global _mailer
    if _mailer is None:
        _mailer = SmtpMailer()
    return _mailer
