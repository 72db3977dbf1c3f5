"""Email delivery for notifications."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import strip_tags  # type: ignore

logger = logging.getLogger(__name__)


def send_email_notification(recipient_email: str, subject: str, html_message: str) -> bool:
    """
    Send one HTML email with a plain-text fallback.

    Returns:
        bool: True if the backend accepted the message. Never raises.
    """
    if not recipient_email:
        logger.warning(f"Skipping email without recipient: {subject}")
        return False

    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )
    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False

    logger.info(f"Email sent successfully to {recipient_email}: {subject}")
    return True


class DjangoEmailDispatcher:
    """Email dispatcher backed by the configured Django email backend."""

    def send(self, to: str, subject: str, html: str) -> bool:
        return send_email_notification(to, subject, html)
