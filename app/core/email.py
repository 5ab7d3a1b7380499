import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from app.core.config import get_settings


def build_message(to_email: str, subject: str, html_body: str, text_body: str | None = None) -> EmailMessage:
    settings = get_settings()
    msg = EmailMessage()
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    msg["Subject"] = subject
    msg["Message-ID"] = make_msgid(domain=settings.smtp_from.split("@")[-1])
    msg.set_content(text_body or "This email requires an HTML-capable client.")
    msg.add_alternative(html_body, subtype="html")
    return msg


def send_email(to_email: str, subject: str, html_body: str, text_body: str | None = None):
    settings = get_settings()
    if not settings.smtp_host or not settings.smtp_from:
        raise RuntimeError("SMTP settings are not configured")

    msg = build_message(to_email, subject, html_body, text_body)

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout) as server:
        if settings.smtp_starttls:
            server.starttls()
        # Local relays accept mail without credentials.
        if settings.smtp_user and settings.smtp_pass:
            server.login(settings.smtp_user, settings.smtp_pass)
        server.send_message(msg)
