"""Unit tests for email template rendering."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from jinja2 import TemplateNotFound

from src.services.email_templates import LOGO_URL
from src.services.template_service import RenderedEmail, render_template

CONTACT = {
    "name": "Asha <b>",
    "email": "asha@example.com",
    "phone": "",
    "subject": "Commission",
    "message": "<script>alert(1)</script>",
}


class TestRenderTemplate:
    """Tests for render_template."""

    def test_renders_both_variants(self) -> None:
        """Test that html and text bodies are both produced."""
        rendered = render_template("subscribe_admin", {"email": "fan@example.com"})

        assert isinstance(rendered, RenderedEmail)
        assert "fan@example.com" in rendered.html
        assert rendered.text == "New subscriber: fan@example.com"

    def test_html_is_escaped_text_is_not(self) -> None:
        """Test that user input is escaped in html only."""
        rendered = render_template("contact_admin", CONTACT)

        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in rendered.html
        assert "<script>" not in rendered.html
        assert "Asha &lt;b&gt;" in rendered.html
        assert "Message: <script>alert(1)</script>" in rendered.text

    def test_blank_phone_falls_back_to_dash(self) -> None:
        """Test that a missing phone shows a placeholder."""
        rendered = render_template("contact_admin", CONTACT)

        assert "Phone: -" in rendered.text
        assert "—" in rendered.html

    def test_common_values_are_injected(self) -> None:
        """Test that logo, site link and timestamp are always available."""
        auto_reply = render_template("contact_auto_reply", {"name": "Asha"})
        admin = render_template("subscribe_admin", {"email": "fan@example.com"})

        assert LOGO_URL in auto_reply.html
        assert "https://miraara.in" in auto_reply.html
        assert "Saved at: " in admin.html
        assert " UTC" in admin.html

    def test_unknown_template(self) -> None:
        """Test that unknown names raise TemplateNotFound."""
        with pytest.raises(TemplateNotFound):
            render_template("order_receipt", {})

    def test_templates_dir_overrides_builtin(self, tmp_path: Path) -> None:
        """Test that files in the templates directory win over built-ins."""
        (tmp_path / "subscribe_admin.txt").write_text("Custom notice for {{ email }}")
        settings = MagicMock(email_templates_dir=str(tmp_path))

        with patch("src.services.template_service.get_settings", return_value=settings):
            rendered = render_template("subscribe_admin", {"email": "fan@example.com"})

        assert rendered.text == "Custom notice for fan@example.com"
        # html variant not overridden
        assert "New Subscriber" in rendered.html
