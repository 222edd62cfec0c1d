"""Outbound email over SMTP."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from stockroom.config import get_settings

logger = logging.getLogger(__name__)


class MailerError(Exception):
    """Raised when an email cannot be sent."""


def send_email(to: str, subject: str, html: str) -> None:
    """Send an HTML email.

    In development without SMTP credentials the message is logged instead
    of sent.
    """
    settings = get_settings()
    if not settings.smtp_configured:
        if settings.is_development:
            logger.warning(f"SMTP not configured, email to {to} not sent: {subject}\n{html}")
            return
        raise MailerError("SMTP credentials are not fully configured")

    sender = settings.email_from or settings.smtp_user
    msg = MIMEMultipart()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    msg.attach(MIMEText(html, "html"))

    try:
        if settings.smtp_port == 465:
            server = smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port)
        else:
            server = smtplib.SMTP(settings.smtp_host, settings.smtp_port)
            server.starttls()
        with server:
            server.login(settings.smtp_user, settings.smtp_password)
            server.sendmail(sender, [to], msg.as_string())
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to}: {e}")
        raise MailerError(str(e)) from e

    logger.info(f"Sent '{subject}' to {to}")


def send_otp_email(to: str, otp: str) -> None:
    """Send an email verification code."""
    minutes = get_settings().otp_expiry_minutes
    send_email(
        to,
        "Your verification code",
        f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h1 style="color: #1e40af;">Stockroom</h1>
          <p>Your verification code is:</p>
          <p style="font-size: 36px; font-weight: 700; letter-spacing: 8px;">{otp}</p>
          <p>This code expires in {minutes} minutes.</p>
          <p style="color: #6b7280;">If you did not request this, you can ignore this email.</p>
        </div>
        """,
    )


def send_password_reset_email(to: str, reset_link: str) -> None:
    """Send a password reset link."""
    minutes = get_settings().password_reset_expiry_minutes
    send_email(
        to,
        "Reset your Stockroom password",
        f"""
        <p>We received a request to reset your password.</p>
        <p><a href="{reset_link}">Click here to set a new password</a>. This link expires in {minutes} minutes.</p>
        <p>If you did not request this change, you can safely ignore this email.</p>
        """,
    )
