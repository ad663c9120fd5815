"""Pydantic schemas for event payloads and handler results."""

from app.schemas.events import (
    BookingEventPayload,
    ClerkUserDeletedPayload,
    ClerkUserPayload,
    MalformedPayloadError,
    ShowAddedPayload,
    parse_payload,
)
from app.schemas.reminder import ReminderSummary, ReminderTask

__all__ = [
    "ClerkUserPayload",
    "ClerkUserDeletedPayload",
    "BookingEventPayload",
    "ShowAddedPayload",
    "MalformedPayloadError",
    "parse_payload",
    "ReminderTask",
    "ReminderSummary",
]
