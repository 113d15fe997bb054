"""Subscriber model type definitions for database operations."""

from typing import TypedDict


class SubscriberRecord(TypedDict):
    """Row written to the subscribers table.

    The email is stored trimmed and lowercased so equality lookups catch
    case and whitespace variants.
    """

    email: str
    timestamp: str
