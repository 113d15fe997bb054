"""Contact form submission service."""

import logging
from datetime import datetime, timezone

from src.api.middleware.error_handler import InvalidInputError, StoreError
from src.core.supabase import get_supabase_client
from src.models import CONTACTS_TABLE, ContactRecord
from src.schemas.intake import ContactCreate
from src.services.email_service import EmailService
from src.services.template_service import render_template

logger = logging.getLogger(__name__)


class ContactService:
    """Persists contact submissions and notifies admin and sender."""

    def __init__(self, email_service: EmailService | None = None) -> None:
        self.client = get_supabase_client()
        self.email_service = email_service or EmailService()

    async def submit(self, data: ContactCreate) -> ContactRecord:
        """Store a contact submission and send both notifications.

        Args:
            data: Contact form payload.

        Returns:
            ContactRecord: The stored row.

        Raises:
            InvalidInputError: If name, email, subject or message is blank.
            StoreError: If the insert fails.
        """
        if not (data.name and data.email and data.subject and data.message):
            raise InvalidInputError("Missing required fields")

        record: ContactRecord = {
            "name": data.name,
            "email": data.email,
            "phone": data.phone or "",
            "subject": data.subject,
            "message": data.message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        try:
            self.client.table(CONTACTS_TABLE).insert(record).execute()
        except Exception as e:
            logger.error("Failed to store contact from %s: %s", data.email, str(e))
            raise StoreError("Error processing contact") from e

        logger.info("Stored contact submission from %s", data.email)

        await self.send_notifications(record)
        return record

    async def send_notifications(self, record: ContactRecord) -> None:
        """Send the admin notice and the auto-reply for a stored contact.

        The submission is already stored, so nothing here may propagate.
        """
        try:
            admin_email = render_template("contact_admin", dict(record))
            auto_reply = render_template("contact_auto_reply", {"name": record["name"]})
        except Exception:
            logger.exception("Failed to render contact emails for %s", record["email"])
            return

        admin_result = await self.email_service.send_admin_email(
            f"💫 New Contact: {record['subject']}", admin_email
        )
        if not admin_result["success"]:
            logger.error("Admin email error for contact from %s: %s", record["email"], admin_result.get("error"))

        user_result = await self.email_service.send_email(
            record["email"], "🌸 Thanks for contacting Miraara", auto_reply
        )
        if not user_result["success"]:
            logger.error("Auto-reply error for contact from %s: %s", record["email"], user_result.get("error"))
