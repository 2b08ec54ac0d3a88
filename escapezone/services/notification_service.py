"""
Login notification mail.

Best-effort: the admin gets a plain-text mail for every simulated login or
signup. Missing credentials skip the mail; SMTP errors are logged and
reported, never raised. Contact details go into the mail body only, never
into logs.
"""

import asyncio
import logging
import smtplib
from datetime import datetime
from email.mime.text import MIMEText

from escapezone.config import settings
from escapezone.schemas.auth import LoginNotification, NotifyResponse

logger = logging.getLogger(__name__)


def build_notification_message(notification: LoginNotification, sender: str, recipient: str) -> MIMEText:
    """Build the admin alert mail for a login/signup."""
    body = f"""
New user activity detected:
Type: {notification.type} (Login/Signup)
Name: {notification.name}
Provider: {notification.provider}
Email: {notification.email or 'N/A'}
Phone: {notification.phone or 'N/A'}
Time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}
"""
    msg = MIMEText(body, "plain")
    msg["Subject"] = f"New Login Alert: {notification.name} via {notification.provider}"
    msg["From"] = sender
    msg["To"] = recipient
    return msg


def _send_mail(msg: MIMEText) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        server.starttls()
        server.login(settings.SENDER_EMAIL, settings.SENDER_PASSWORD)
        server.send_message(msg)


async def send_login_notification(notification: LoginNotification) -> NotifyResponse:
    """
    Send the login alert to ADMIN_EMAIL.

    Returns:
        NotifyResponse with success=True when sent or skipped (no
        credentials), success=False when sending failed.
    """
    if not settings.notifications_configured():
        logger.warning("Email credentials not configured. Skipping notification.")
        return NotifyResponse(success=True, message="Notification skipped (no credentials)")

    recipient = settings.ADMIN_EMAIL or settings.SENDER_EMAIL
    msg = build_notification_message(notification, settings.SENDER_EMAIL, recipient)

    try:
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(_send_mail, msg)
    except Exception as e:
        logger.error(f"Error sending email: {e}")
        return NotifyResponse(success=False, error="Failed to send notification")

    logger.info(f"Login notification sent: type={notification.type}, provider={notification.provider}")
    return NotifyResponse(success=True)
