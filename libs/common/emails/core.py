"""
Core email sending utilities over SMTP.
"""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from libs.common.config import get_settings
from libs.common.logging import get_logger

logger = get_logger(__name__)


def _build_message(
    to_email: str,
    subject: str,
    body: str,
    html_body: Optional[str],
    sender: str,
):
    if html_body:
        msg = MIMEMultipart("alternative")
        msg.attach(MIMEText(body, "plain"))
        msg.attach(MIMEText(html_body, "html"))
    else:
        msg = MIMEText(body, "plain")

    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to_email
    return msg


def _deliver(sender_email: str, to_email: str, message: str) -> None:
    settings = get_settings()
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
        server.starttls()
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.sendmail(sender_email, to_email, message)


async def send_email(
    to_email: str,
    subject: str,
    body: str,
    html_body: Optional[str] = None,
    from_email: Optional[str] = None,
    from_name: Optional[str] = None,
) -> bool:
    """
    Send an email over SMTP.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        body: Plain text body
        html_body: Optional HTML body (if not provided, plain text is used)
        from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
        from_name: Sender name (defaults to DEFAULT_FROM_NAME)

    Returns:
        True if email was sent successfully, False otherwise
    """
    settings = get_settings()

    if not settings.SMTP_USERNAME or not settings.SMTP_PASSWORD:
        logger.warning("SMTP credentials not configured - email not sent")
        logger.info("Would have sent email to %s: %s", to_email, subject)
        return False

    sender_email = from_email or settings.DEFAULT_FROM_EMAIL
    sender_name = from_name or settings.DEFAULT_FROM_NAME
    msg = _build_message(
        to_email, subject, body, html_body, f"{sender_name} <{sender_email}>"
    )

    try:
        logger.info("Sending email to %s: %s", to_email, subject)
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(_deliver, sender_email, to_email, msg.as_string())
        logger.info("Email sent successfully to %s", to_email)
        return True

    except smtplib.SMTPAuthenticationError as e:
        logger.error("SMTP authentication failed: %s", e)
        return False
    except (smtplib.SMTPException, OSError) as e:
        logger.error("SMTP error sending email to %s: %s", to_email, e)
        return False
