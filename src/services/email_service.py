"""Email service using Resend for transactional emails."""

import logging
from typing import Any

import resend

from src.core.config import get_settings
from src.services.template_service import RenderedEmail

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending transactional emails via Resend.

    Delivery is best-effort: failures are logged and reported in the
    returned dict, never raised.
    """

    def __init__(self) -> None:
        """Initialize email service with Resend API key."""
        settings = get_settings()
        self.api_key = settings.resend_api_key
        resend.api_key = self.api_key
        self.from_email = settings.email_from_address
        self.admin_email = settings.admin_email

    async def send_email(
        self,
        to_email: str,
        subject: str,
        rendered: RenderedEmail,
    ) -> dict[str, Any]:
        """Send one rendered email.

        Args:
            to_email: Recipient email address.
            subject: Subject line.
            rendered: HTML and text bodies.

        Returns:
            dict: ``success`` flag plus ``email_id`` or ``error``.
        """
        if not self.api_key:
            logger.warning("Resend API key not configured, skipping email to %s", to_email)
            return {"success": False, "error": "Email provider not configured"}

        try:
            response = resend.Emails.send({
                "from": self.from_email,
                "to": [to_email],
                "subject": subject,
                "html": rendered.html,
                "text": rendered.text,
            })

            logger.info("Email sent to %s, id: %s", to_email, response.get("id"))
            return {"success": True, "email_id": response.get("id")}

        except Exception as e:
            logger.error("Failed to send email to %s: %s", to_email, str(e))
            return {"success": False, "error": str(e)}

    async def send_admin_email(self, subject: str, rendered: RenderedEmail) -> dict[str, Any]:
        """Send a notification to the configured admin address."""
        return await self.send_email(self.admin_email, subject, rendered)
