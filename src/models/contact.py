"""Contact submission model type definitions for database operations."""

from typing import TypedDict


class ContactRecord(TypedDict):
    """Row written to the contacts table for every contact-form submission."""

    name: str
    email: str
    phone: str
    subject: str
    message: str
    timestamp: str
