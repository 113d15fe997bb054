"""Newsletter subscription service."""

import logging
from datetime import datetime, timezone

from src.api.middleware.error_handler import AlreadySubscribedError, InvalidInputError, StoreError
from src.core.supabase import get_supabase_client
from src.models import SUBSCRIBERS_TABLE, SubscriberRecord
from src.services.email_service import EmailService
from src.services.template_service import render_template

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address for storage and lookups."""
    return email.strip().lower()


class SubscriptionService:
    """Records newsletter subscribers and sends welcome notifications."""

    def __init__(self, email_service: EmailService | None = None) -> None:
        self.client = get_supabase_client()
        self.email_service = email_service or EmailService()

    async def subscribe(self, email: str | None) -> SubscriberRecord:
        """Add an email address to the subscriber list.

        Notifications are not sent here; callers schedule
        :meth:`send_notifications` after responding.

        Args:
            email: Raw email address from the request.

        Returns:
            SubscriberRecord: The stored row.

        Raises:
            InvalidInputError: If email is blank.
            AlreadySubscribedError: If the normalized email is already stored.
            StoreError: If the lookup or insert fails.
        """
        if not email or not email.strip():
            raise InvalidInputError("Email required")

        normalized = normalize_email(email)

        try:
            existing = (
                self.client.table(SUBSCRIBERS_TABLE)
                .select("email")
                .eq("email", normalized)
                .execute()
            )
        except Exception as e:
            logger.error("Subscriber lookup failed for %s: %s", normalized, str(e))
            raise StoreError("Error subscribing") from e

        if existing.data:
            raise AlreadySubscribedError()

        record: SubscriberRecord = {
            "email": normalized,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        try:
            self.client.table(SUBSCRIBERS_TABLE).insert(record).execute()
        except Exception as e:
            logger.error("Failed to store subscriber %s: %s", normalized, str(e))
            raise StoreError("Error subscribing") from e

        logger.info("New subscriber %s", normalized)
        return record

    async def send_notifications(self, email: str) -> None:
        """Send the admin notice and the welcome email for a new subscriber.

        Runs as a background task, so nothing here may propagate.
        """
        try:
            admin_email = render_template("subscribe_admin", {"email": email})
            welcome = render_template("subscribe_auto_reply", {"email": email})
        except Exception:
            logger.exception("Failed to render subscriber emails for %s", email)
            return

        admin_result = await self.email_service.send_admin_email(f"📬 New Subscriber: {email}", admin_email)
        if not admin_result["success"]:
            logger.error("Admin email error for subscriber %s: %s", email, admin_result.get("error"))

        user_result = await self.email_service.send_email(email, "✨ Welcome to Miraara", welcome)
        if not user_result["success"]:
            logger.error("User email error for subscriber %s: %s", email, user_result.get("error"))
