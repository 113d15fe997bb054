"""Database model type definitions."""

from src.models.contact import ContactRecord
from src.models.subscriber import SubscriberRecord

CONTACTS_TABLE = "contacts"
SUBSCRIBERS_TABLE = "subscribers"

__all__ = [
    "ContactRecord",
    "SubscriberRecord",
    "CONTACTS_TABLE",
    "SUBSCRIBERS_TABLE",
]
