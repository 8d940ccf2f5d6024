# app/core/email_client.py
from __future__ import annotations

"""
Email client utilities for the vocabulary backend.

Responsibilities:
  - Read SMTP configuration from Settings.
  - Provide a single send_email(...) function for services to use.
  - Support both TLS (STARTTLS) and SSL connections.
  - Format the verification-code message sent on registration.

Typical .env configuration (Mailgun over SSL):

    SMTP_HOST=smtp.mailgun.org
    SMTP_PORT=465
    SMTP_USERNAME=postmaster@mg.example.com
    SMTP_PASSWORD=...
    SMTP_FROM_EMAIL=noreply@vocabularyapp.com
    SMTP_FROM_NAME=Vocabulary App
    SMTP_USE_SSL=true
    SMTP_USE_TLS=false
"""

import logging
import smtplib
from email.message import EmailMessage

from app.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def _create_smtp_client() -> smtplib.SMTP:
    """
    Create and return an SMTP client configured for TLS or SSL.

    Priority:
      - If SMTP_USE_SSL is True → use smtplib.SMTP_SSL (e.g., port 465).
      - Else → use smtplib.SMTP + optional STARTTLS if SMTP_USE_TLS is True.
    """
    if not settings.SMTP_HOST:
        raise RuntimeError("SMTP_HOST is not configured. Please set it in .env.")

    timeout = settings.SMTP_TIMEOUT_SECONDS

    if settings.SMTP_USE_SSL:
        server: smtplib.SMTP = smtplib.SMTP_SSL(
            settings.SMTP_HOST, settings.SMTP_PORT, timeout=timeout
        )
    else:
        server = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=timeout)
        if settings.SMTP_USE_TLS:
            server.starttls()

    return server


def send_email(
    to_email: str,
    subject: str,
    text_body: str,
    html_body: str | None = None,
) -> None:
    """
    Send an email to a single recipient.

    Parameters
    ----------
    to_email:
        Recipient email address.
    subject:
        Email subject line.
    text_body:
        Plain-text body (required, used as the fallback for clients that
        do not support HTML).
    html_body:
        Optional HTML body; if provided, is sent as an alternative part.

    Raises
    ------
    RuntimeError:
        If required SMTP configuration is missing.
    smtplib.SMTPException / OSError:
        If the underlying SMTP connection or send fails.
    """
    if not (settings.SMTP_HOST and settings.SMTP_USERNAME and settings.SMTP_PASSWORD):
        raise RuntimeError(
            "SMTP is not configured correctly. "
            "Please set SMTP_HOST, SMTP_USERNAME, and SMTP_PASSWORD in .env."
        )

    msg = EmailMessage()

    from_header = (
        f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
        if settings.SMTP_FROM_EMAIL
        else settings.SMTP_USERNAME
    )
    msg["From"] = from_header
    msg["To"] = to_email
    msg["Subject"] = subject

    msg.set_content(text_body)

    if html_body:
        msg.add_alternative(html_body, subtype="html")

    server = _create_smtp_client()
    try:
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.send_message(msg)
    finally:
        try:
            server.quit()
        except (smtplib.SMTPException, OSError):
            # Connection is being torn down anyway.
            pass


def send_verification_email(to_email: str, code: str) -> None:
    """
    Deliver a registration verification code.

    Raises whatever send_email raises; the caller decides whether a
    delivery failure matters.
    """
    hours = settings.VERIFICATION_CODE_TTL_HOURS
    text_body = (
        "Welcome to Vocabulary App!\n\n"
        f"Your verification code is: {code}\n\n"
        f"This code will expire in {hours} hours.\n\n"
        "If you didn't request this, please ignore this email."
    )
    html_body = (
        "<p>Welcome to Vocabulary App!</p>"
        f"<p>Your verification code is: <b>{code}</b></p>"
        f"<p>This code will expire in {hours} hours.</p>"
        "<p>If you didn't request this, please ignore this email.</p>"
    )
    send_email(
        to_email=to_email,
        subject="Verify your email - Vocabulary App",
        text_body=text_body,
        html_body=html_body,
    )
    logger.info("Verification email sent to %s", to_email)
