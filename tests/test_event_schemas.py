"""Tests for event payload schemas."""

import pytest

from app.schemas.events import (
    PAYMENT_PENDING,
    USER_CREATED,
    BookingEventPayload,
    ClerkUserPayload,
    MalformedPayloadError,
    ShowAddedPayload,
    parse_payload,
)


def clerk_user(**overrides) -> dict:
    data = {
        "id": "user_2abc",
        "first_name": "Asha",
        "last_name": "Rao",
        "email_addresses": [
            {"id": "idn_1", "email_address": "asha@example.com"},
            {"id": "idn_2", "email_address": "asha.work@example.com"},
        ],
        "image_url": "https://img.clerk.com/asha.png",
        "object": "user",
    }
    data.update(overrides)
    return data


class TestClerkUserPayload:
    def test_uses_first_email_address(self):
        payload = parse_payload(ClerkUserPayload, clerk_user(), USER_CREATED)

        assert payload.primary_email == "asha@example.com"

    @pytest.mark.parametrize(
        "first, last, expected",
        [
            ("Asha", "Rao", "Asha Rao"),
            ("", "Rao", " Rao"),
            ("Asha", "", "Asha "),
            ("", "", " "),
            (None, "Rao", " Rao"),
        ],
    )
    def test_full_name_joins_with_single_space(self, first, last, expected):
        payload = parse_payload(
            ClerkUserPayload, clerk_user(first_name=first, last_name=last), USER_CREATED
        )

        assert payload.full_name == expected

    def test_missing_email_addresses_is_malformed(self):
        with pytest.raises(MalformedPayloadError) as exc_info:
            parse_payload(ClerkUserPayload, clerk_user(email_addresses=[]), USER_CREATED)

        assert exc_info.value.event_name == USER_CREATED
        assert USER_CREATED in str(exc_info.value)


class TestBookingEventPayload:
    def test_reads_booking_id_alias(self):
        payload = parse_payload(BookingEventPayload, {"bookingId": 42}, PAYMENT_PENDING)

        assert payload.booking_id == 42

    def test_none_data_is_malformed(self):
        with pytest.raises(MalformedPayloadError):
            parse_payload(BookingEventPayload, None, PAYMENT_PENDING)

    def test_malformed_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_payload(BookingEventPayload, {"bookingId": "abc"}, PAYMENT_PENDING)


def test_show_added_requires_title():
    with pytest.raises(MalformedPayloadError):
        parse_payload(ShowAddedPayload, {"movieTitle": ""}, "app/show.added")

    payload = parse_payload(ShowAddedPayload, {"movieTitle": "Dune"}, "app/show.added")
    assert payload.movie_title == "Dune"
