"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test.secret.key")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key_id")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "rzp_test_key_secret")
os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clear_order_cache() -> Generator[None, None, None]:
    """Start and end every test with an empty process-wide order cache."""
    from src.services.order_cache import get_order_cache

    get_order_cache().clear()
    yield
    get_order_cache().clear()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client for every module that uses one.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    # Default: no existing rows
    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.eq.return_value.execute.return_value = (
        mock_response
    )
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with patch("src.core.supabase.get_supabase_client", return_value=mock_client), \
         patch("src.services.contact_service.get_supabase_client", return_value=mock_client), \
         patch("src.services.subscription_service.get_supabase_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def mock_resend_send() -> Generator[MagicMock, None, None]:
    """Patch Resend so no email leaves the test process.

    Yields:
        MagicMock: The patched ``resend.Emails.send``.
    """
    with patch("src.services.email_service.resend.Emails.send", return_value={"id": "email_123"}) as mock_send:
        yield mock_send


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Directory used for bundle scratch files in tests."""
    path = tmp_path / "bundles"
    path.mkdir()
    return path


@pytest.fixture
def client(
    mock_supabase_client: MagicMock, mock_resend_send: MagicMock
) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.
        mock_resend_send: Mocked Resend send fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client
