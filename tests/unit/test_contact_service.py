"""Unit tests for ContactService."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from jinja2 import TemplateSyntaxError

from src.api.middleware.error_handler import InvalidInputError, StoreError
from src.schemas.intake import ContactCreate
from src.services.contact_service import ContactService


@pytest.fixture
def mock_email_service() -> MagicMock:
    """Email service whose sends always succeed."""
    service = MagicMock()
    service.send_email = AsyncMock(return_value={"success": True, "email_id": "email_1"})
    service.send_admin_email = AsyncMock(return_value={"success": True, "email_id": "email_2"})
    return service


@pytest.fixture
def contact_service(mock_supabase_client: MagicMock, mock_email_service: MagicMock) -> ContactService:
    return ContactService(email_service=mock_email_service)


class TestSubmit:
    """Tests for submit method."""

    @pytest.mark.asyncio
    async def test_stores_and_notifies(
        self,
        contact_service: ContactService,
        mock_supabase_client: MagicMock,
        mock_email_service: MagicMock,
    ) -> None:
        """Test a complete submission without a phone number."""
        data = ContactCreate(
            name="Asha",
            email="asha@example.com",
            subject="Commission",
            message="Hello there",
        )

        record = await contact_service.submit(data)

        assert record["phone"] == ""
        assert record["timestamp"]
        mock_supabase_client.table.assert_called_with("contacts")
        inserted = mock_supabase_client.table.return_value.insert.call_args.args[0]
        assert inserted["name"] == "Asha"
        assert inserted["phone"] == ""

        admin_subject = mock_email_service.send_admin_email.call_args.args[0]
        assert admin_subject == "💫 New Contact: Commission"
        to_email, subject, _ = mock_email_service.send_email.call_args.args
        assert to_email == "asha@example.com"
        assert subject == "🌸 Thanks for contacting Miraara"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["name", "email", "subject", "message"])
    async def test_missing_field_rejected(
        self,
        contact_service: ContactService,
        mock_supabase_client: MagicMock,
        mock_email_service: MagicMock,
        missing: str,
    ) -> None:
        """Test that a blank required field stores and sends nothing."""
        fields = {
            "name": "Asha",
            "email": "asha@example.com",
            "subject": "Commission",
            "message": "Hello there",
        }
        fields[missing] = ""

        with pytest.raises(InvalidInputError, match="Missing required fields"):
            await contact_service.submit(ContactCreate(**fields))

        mock_supabase_client.table.return_value.insert.assert_not_called()
        mock_email_service.send_email.assert_not_called()
        mock_email_service.send_admin_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_sends_no_email(
        self,
        contact_service: ContactService,
        mock_supabase_client: MagicMock,
        mock_email_service: MagicMock,
    ) -> None:
        """Test that an insert failure is a StoreError with no notifications."""
        mock_supabase_client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("down")
        data = ContactCreate(
            name="Asha",
            email="asha@example.com",
            phone="+91 98765 43210",
            subject="Commission",
            message="Hello there",
        )

        with pytest.raises(StoreError, match="Error processing contact"):
            await contact_service.submit(data)

        mock_email_service.send_email.assert_not_called()
        mock_email_service.send_admin_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_failure_does_not_fail_submission(
        self,
        contact_service: ContactService,
        mock_supabase_client: MagicMock,
        mock_email_service: MagicMock,
    ) -> None:
        """Test that a failed notification leaves the submission successful."""
        mock_email_service.send_admin_email.return_value = {"success": False, "error": "boom"}
        data = ContactCreate(
            name="Asha",
            email="asha@example.com",
            subject="Commission",
            message="Hello there",
        )

        record = await contact_service.submit(data)

        assert record["email"] == "asha@example.com"
        mock_email_service.send_email.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_render_failure_does_not_fail_submission(
        self,
        contact_service: ContactService,
        mock_supabase_client: MagicMock,
        mock_email_service: MagicMock,
    ) -> None:
        """Test that a broken template leaves the stored submission successful."""
        data = ContactCreate(
            name="Asha",
            email="asha@example.com",
            subject="Commission",
            message="Hello there",
        )

        with patch(
            "src.services.contact_service.render_template",
            side_effect=TemplateSyntaxError("unexpected '}'", lineno=1),
        ):
            record = await contact_service.submit(data)

        assert record["subject"] == "Commission"
        mock_supabase_client.table.return_value.insert.assert_called_once()
        mock_email_service.send_email.assert_not_called()
        mock_email_service.send_admin_email.assert_not_called()
