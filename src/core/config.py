"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="miraara-backend", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, description="Server port")
    max_request_body_size: int = Field(default=1024 * 1024, description="Maximum request body size in bytes")

    # CORS
    cors_origins: str = Field(default="*", description="Comma-separated list of allowed CORS origins")

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")

    # Razorpay
    razorpay_key_id: str = Field(default="", description="Razorpay key id")
    razorpay_key_secret: str = Field(default="", description="Razorpay key secret")
    payment_currency: str = Field(default="INR", description="Currency code for payment orders")

    # Email (Resend)
    resend_api_key: str = Field(default="", description="Resend API key for sending emails")
    sender_email: str = Field(default="noreply@miraara.in", description="Sender address for outgoing emails")
    sender_name: str = Field(default="Miraara", description="Sender display name for outgoing emails")
    admin_email: str = Field(default="admin@miraara.in", description="Recipient of admin notifications")
    email_templates_dir: str | None = Field(
        default=None,
        description="Directory with <name>.html/<name>.txt templates overriding the built-in ones",
    )

    # Order cache
    order_cache_ttl_seconds: int = Field(default=86400, description="Seconds a created order stays downloadable")
    order_cache_max_size: int = Field(default=1000, description="Maximum cached orders")
    order_cache_cleanup_interval_seconds: int = Field(default=600, description="Seconds between expiry sweeps")

    # Bundles
    bundle_scratch_dir: str = Field(default="tmp", description="Directory for temporary ZIP bundles")
    asset_fetch_timeout_seconds: float = Field(default=15.0, description="Timeout for a single asset fetch")
    bundle_timeout_seconds: float = Field(default=120.0, description="Deadline for building a whole bundle")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def email_from_address(self) -> str:
        """Formatted From header for transactional emails."""
        return f"{self.sender_name} <{self.sender_email}>"

    @property
    def is_razorpay_configured(self) -> bool:
        """Check if both halves of the Razorpay key pair are set."""
        return bool(self.razorpay_key_id and self.razorpay_key_secret)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
