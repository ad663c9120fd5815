"""Event payload schemas.

Each event kind consumed by the Inngest functions has an explicit schema.
Payloads are validated when a handler starts, so a bad event fails with
``MalformedPayloadError`` instead of a raw ``KeyError`` deep in a handler.
"""

from typing import Any, Mapping, TypeVar

from pydantic import Field, ValidationError, field_validator

from app.schemas.common import BaseSchema

# Event names
USER_CREATED = "clerk/user.created"
USER_UPDATED = "clerk/user.updated"
USER_DELETED = "clerk/user.deleted"
PAYMENT_PENDING = "app/checkpayment"
SHOW_BOOKED = "app/show.booked"
SHOW_ADDED = "app/show.added"

PayloadT = TypeVar("PayloadT", bound=BaseSchema)


class MalformedPayloadError(ValueError):
    """Event payload does not match the expected schema."""

    def __init__(self, event_name: str, detail: str):
        self.event_name = event_name
        self.detail = detail
        super().__init__(f"Malformed payload for {event_name}: {detail}")


class ClerkEmailAddress(BaseSchema):
    """Email address entry of a Clerk user."""

    email_address: str = Field(..., min_length=1)


class ClerkUserPayload(BaseSchema):
    """Payload of ``clerk/user.created`` and ``clerk/user.updated``."""

    id: str = Field(..., min_length=1, max_length=50)
    first_name: str = ""
    last_name: str = ""
    email_addresses: list[ClerkEmailAddress] = Field(..., min_length=1)
    image_url: str | None = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def full_name(self) -> str:
        """Name stored for the user, always ``first + " " + last``."""
        return f"{self.first_name} {self.last_name}"

    @property
    def primary_email(self) -> str:
        """Email address of the first entry in ``email_addresses``."""
        return self.email_addresses[0].email_address


class ClerkUserDeletedPayload(BaseSchema):
    """Payload of ``clerk/user.deleted``."""

    id: str = Field(..., min_length=1, max_length=50)


class BookingEventPayload(BaseSchema):
    """Payload of ``app/checkpayment`` and ``app/show.booked``."""

    booking_id: int = Field(..., alias="bookingId")


class ShowAddedPayload(BaseSchema):
    """Payload of ``app/show.added``."""

    movie_title: str = Field(..., alias="movieTitle", min_length=1)


def parse_payload(
    schema: type[PayloadT],
    data: Mapping[str, Any] | None,
    event_name: str,
) -> PayloadT:
    """
    Validate raw event data against a payload schema.

    Args:
        schema: Payload schema class
        data: Raw ``event.data`` mapping
        event_name: Event name, used in the error message

    Returns:
        Validated payload

    Raises:
        MalformedPayloadError: If the data does not match the schema
    """
    try:
        return schema.model_validate(dict(data or {}))
    except ValidationError as e:
        raise MalformedPayloadError(event_name, str(e)) from e
