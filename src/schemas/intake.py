"""Contact and subscription request schemas.

Fields are optional at the schema level so that blank and missing values
are reported with the same 400 message by the services.
"""

from pydantic import BaseModel, Field


class ContactCreate(BaseModel):
    """Body of POST /api/contact."""

    name: str | None = Field(default=None, description="Sender name")
    email: str | None = Field(default=None, description="Sender email address")
    phone: str | None = Field(default=None, description="Optional phone number")
    subject: str | None = Field(default=None, description="Message subject")
    message: str | None = Field(default=None, description="Message body")


class SubscribeCreate(BaseModel):
    """Body of POST /api/subscribe."""

    email: str | None = Field(default=None, description="Subscriber email address")
